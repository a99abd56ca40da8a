"""Node API endpoints — create, update, delete, search and filter services."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from svcgraph.api.dependencies import get_graph_service
from svcgraph.models.graph import Node, NodeInput
from svcgraph.services.graph_service import GraphService

router = APIRouter(prefix="/nodes", tags=["nodes"])


@router.post("", response_model=Node, status_code=201)
async def create_node(
    payload: NodeInput | None = None,
    service: GraphService = Depends(get_graph_service),
) -> Node:
    return await service.create_node(payload or NodeInput())


# Declared before /{node_id} so the literal paths win.
@router.get("/search", response_model=list[Node])
async def search_nodes(
    q: str = "",
    service: GraphService = Depends(get_graph_service),
) -> list[Node]:
    return await service.search_nodes(q)


@router.get("/filter", response_model=list[Node])
async def filter_nodes(
    node_type: str = Query(default="", alias="type"),
    service: GraphService = Depends(get_graph_service),
) -> list[Node]:
    return await service.filter_nodes(node_type)


@router.put("/{node_id}", response_model=Node)
async def update_node(
    node_id: str,
    payload: NodeInput,
    service: GraphService = Depends(get_graph_service),
) -> Node:
    return await service.update_node(node_id, payload)


@router.delete("/{node_id}", status_code=204)
async def delete_node(
    node_id: str,
    service: GraphService = Depends(get_graph_service),
) -> Response:
    await service.delete_node(node_id)
    return Response(status_code=204)
