"""Health probe endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from svcgraph.api.dependencies import get_graph_service
from svcgraph.api.v1.schemas.graph import HealthResponse
from svcgraph.services.graph_service import GraphService

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def health(service: GraphService = Depends(get_graph_service)) -> JSONResponse:
    report = await service.check_health()
    status_code = 200 if report["status"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=report)
