"""Shared FastAPI dependency injection."""

from __future__ import annotations

from svcgraph.services.graph_service import GraphService

_graph_service: GraphService | None = None


def set_graph_service(service: GraphService | None) -> None:
    global _graph_service
    _graph_service = service


def get_graph_service() -> GraphService:
    if _graph_service is None:
        raise RuntimeError("Graph service not initialized")
    return _graph_service
