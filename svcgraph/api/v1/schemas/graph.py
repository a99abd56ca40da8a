"""Request/response models for the graph API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str
    timestamp: str | None = None
    uptime: float | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    error: str
    type: str
