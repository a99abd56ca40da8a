"""FastAPI application factory with lifespan events."""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from svcgraph.api.dependencies import set_graph_service
from svcgraph.api.router import build_api_router
from svcgraph.config import get_settings
from svcgraph.graph_db.snapshot_store import build_snapshot_store
from svcgraph.services.graph_service import GraphService
from svcgraph.utils.exceptions import (
    Conflict,
    DuplicateId,
    GraphStoreError,
    InvalidArgument,
    NotFound,
    StoreUnavailable,
)
from svcgraph.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

_ERROR_STATUS: dict[type[GraphStoreError], int] = {
    InvalidArgument: 400,
    NotFound: 404,
    DuplicateId: 409,
    Conflict: 409,
    StoreUnavailable: 503,
}


def error_status(exc: GraphStoreError) -> int:
    for kind, status in _ERROR_STATUS.items():
        if isinstance(exc, kind):
            return status
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the snapshot store and wire the graph service."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    store = build_snapshot_store(settings)
    set_graph_service(GraphService(store))
    logger.info("app_started", store=store.name)
    yield

    set_graph_service(None)
    await store.close()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    application = FastAPI(
        title="svcgraph",
        description="Microservice topology graph store",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(build_api_router(settings.API_PREFIX))

    @application.middleware("http")
    async def request_id_middleware(request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    @application.exception_handler(GraphStoreError)
    async def graph_error_handler(request: Request, exc: GraphStoreError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= 500:
            logger.error("graph_operation_failed", error=exc.message, path=request.url.path, **exc.detail)
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.message, "type": exc.kind, **exc.detail},
        )

    @application.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request",
                "type": InvalidArgument.kind,
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "type": type(exc).__name__},
        )

    return application


app = create_app()


def serve() -> None:
    settings = get_settings()
    uvicorn.run("svcgraph.main:app", host=settings.HOST, port=settings.PORT)
