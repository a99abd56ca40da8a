"""Pydantic models for service nodes, connection edges and their partial inputs."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _GraphRecord(BaseModel):
    # Wire names are camelCase; unknown attributes are kept and persisted.
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def provided(self) -> dict[str, Any]:
        """Fields the caller actually sent, keyed by attribute name."""
        values = self.model_dump(exclude_unset=True)
        values.update(self.model_extra or {})
        return values


# ── Stored records ───────────────────────────────────────────────────


class Node(_GraphRecord):
    id: str = Field(min_length=1)
    name: str
    type: str
    latency: float = Field(ge=0)
    error_rate: float = Field(alias="errorRate", ge=0, le=1)
    traffic: float = Field(ge=0)
    x: float
    y: float


class Edge(_GraphRecord):
    id: str = Field(min_length=1)
    source: str
    target: str
    protocol: str = "HTTP"
    traffic: float = Field(ge=0)
    error_rate: float = Field(alias="errorRate", ge=0, le=1)
    rps: float = Field(ge=0)

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)


# ── Partial inputs ───────────────────────────────────────────────────


class NodeInput(_GraphRecord):
    """A node as supplied by a caller; every field may be omitted."""

    id: str | None = Field(default=None, min_length=1)
    name: str | None = None
    type: str | None = None
    latency: float | None = Field(default=None, ge=0)
    error_rate: float | None = Field(default=None, alias="errorRate", ge=0, le=1)
    traffic: float | None = Field(default=None, ge=0)
    x: float | None = None
    y: float | None = None


class EdgeInput(_GraphRecord):
    id: str | None = Field(default=None, min_length=1)
    source: str | None = None
    target: str | None = None
    protocol: str | None = None
    traffic: float | None = Field(default=None, ge=0)
    error_rate: float | None = Field(default=None, alias="errorRate", ge=0, le=1)
    rps: float | None = Field(default=None, ge=0)


class EdgeKey(BaseModel):
    source: str
    target: str
