"""Exception hierarchy for graph store operations.

Every failure a Graph Service operation can report is one of these kinds.
None of them implies a state change: validation runs before any snapshot
is replaced, and a failed replace leaves the previous snapshot durable.
"""

from __future__ import annotations

from typing import Any


class GraphStoreError(Exception):
    """Base exception for all graph store errors."""

    kind = "GraphStoreError"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidArgument(GraphStoreError):
    """Malformed or missing required input."""

    kind = "InvalidArgument"


class NotFound(GraphStoreError):
    """A referenced node or edge does not exist."""

    kind = "NotFound"


class DuplicateId(GraphStoreError):
    """A caller-supplied id collides with an existing entity."""

    kind = "DuplicateId"


class Conflict(GraphStoreError):
    """An edge already connects the same (source, target) pair."""

    kind = "Conflict"


class StoreUnavailable(GraphStoreError):
    """The snapshot medium could not be read or written."""

    kind = "StoreUnavailable"
