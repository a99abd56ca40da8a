"""Top-level API router aggregating all v1 sub-routers."""

from __future__ import annotations

from fastapi import APIRouter

from svcgraph.api.v1.edges import router as edges_router
from svcgraph.api.v1.graph import router as graph_router
from svcgraph.api.v1.health import router as health_router
from svcgraph.api.v1.nodes import router as nodes_router
from svcgraph.api.v1.schemas.graph import ErrorResponse

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid argument"},
    404: {"model": ErrorResponse, "description": "Node or edge not found"},
    409: {"model": ErrorResponse, "description": "Duplicate id or edge conflict"},
    503: {"model": ErrorResponse, "description": "Snapshot store unavailable"},
}


def build_api_router(prefix: str = "/api") -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health_router)
    api_router.include_router(graph_router, responses=_ERROR_RESPONSES)
    api_router.include_router(nodes_router, responses=_ERROR_RESPONSES)
    api_router.include_router(edges_router, responses=_ERROR_RESPONSES)
    return api_router
