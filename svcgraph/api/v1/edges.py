"""Edge API endpoints — connect and disconnect services."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from svcgraph.api.dependencies import get_graph_service
from svcgraph.models.graph import Edge, EdgeInput, EdgeKey
from svcgraph.services.graph_service import GraphService

router = APIRouter(prefix="/edges", tags=["edges"])


@router.post("", response_model=Edge, status_code=201)
async def create_edge(
    payload: EdgeInput,
    service: GraphService = Depends(get_graph_service),
) -> Edge:
    return await service.create_edge(payload)


@router.delete("", status_code=204)
async def delete_edge(
    key: EdgeKey,
    service: GraphService = Depends(get_graph_service),
) -> Response:
    """Remove the edge for an exact (source, target) pair given in the body."""
    await service.delete_edge(key.source, key.target)
    return Response(status_code=204)
