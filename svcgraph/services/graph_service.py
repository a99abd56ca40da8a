"""Service topology CRUD, queries and health over a snapshot store."""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from svcgraph.graph_db.defaults import synthesize_edge, synthesize_node
from svcgraph.graph_db.document import GraphDocument, require_text
from svcgraph.graph_db.snapshot_store import SnapshotStore
from svcgraph.models.graph import Edge, EdgeInput, Node, NodeInput
from svcgraph.utils.exceptions import GraphStoreError, InvalidArgument, StoreUnavailable
from svcgraph.utils.logging import get_logger

logger = get_logger(__name__)

_PROCESS_STARTED = time.monotonic()


class GraphService:
    """High-level operations on the service topology graph.

    Mutations are serialized by one lock held from ``load`` through
    ``replace``, so two concurrent writers can never start from the same
    snapshot. Reads take no lock; the store's atomic replace guarantees
    they see a whole document.
    """

    def __init__(
        self,
        store: SnapshotStore,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        started_at: float | None = None,
    ) -> None:
        self._store = store
        self._rng = rng or random.Random()
        self._clock = clock
        self._started_at = _PROCESS_STARTED if started_at is None else started_at
        self._write_lock = asyncio.Lock()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    @asynccontextmanager
    async def _mutation(self) -> AsyncIterator[GraphDocument]:
        """Yield a freshly loaded document and persist it if the block succeeds.

        An exception inside the block skips the write entirely.
        """
        async with self._write_lock:
            document = await self._store.load()
            known_problems = set(document.integrity_violations())
            yield document
            introduced = [p for p in document.integrity_violations() if p not in known_problems]
            if introduced:
                logger.error("integrity_violation_blocked", problems=introduced)
                raise GraphStoreError("Mutation would break graph integrity", problems=introduced)
            await self._store.replace(document)

    # ── Reads ────────────────────────────────────────────────────────

    async def list_graph(self) -> GraphDocument:
        return await self._store.load()

    async def search_nodes(self, query: str) -> list[Node]:
        require_text(query, "Search query is required", field="q")
        document = await self._store.load()
        return document.search_nodes(query)

    async def filter_nodes(self, node_type: str) -> list[Node]:
        require_text(node_type, "Type parameter is required", field="type")
        document = await self._store.load()
        return document.filter_nodes(node_type)

    # ── Node mutations ───────────────────────────────────────────────

    async def create_node(self, partial: NodeInput) -> Node:
        async with self._mutation() as document:
            node = synthesize_node(partial, self._rng, document.node_ids(), self._now_ms())
            document.add_node(node)
        logger.info("node_created", node_id=node.id, node_type=node.type)
        return node

    async def update_node(self, node_id: str, partial: NodeInput) -> Node:
        async with self._mutation() as document:
            node = document.update_node(node_id, partial.provided())
        logger.info("node_updated", node_id=node_id, fields=sorted(partial.provided()))
        return node

    async def delete_node(self, node_id: str) -> None:
        async with self._mutation() as document:
            removed = document.remove_node(node_id)
        logger.info("node_deleted", node_id=node_id, edges_removed=len(removed))

    # ── Edge mutations ───────────────────────────────────────────────

    async def create_edge(self, partial: EdgeInput) -> Edge:
        if not partial.source or not partial.target:
            raise InvalidArgument(
                "Source and target are required",
                source=partial.source,
                target=partial.target,
            )

        async with self._mutation() as document:
            document.check_edge_endpoints(partial.source, partial.target)
            edge = synthesize_edge(partial, self._rng, document.edge_ids(), self._now_ms())
            document.add_edge(edge)
        logger.info("edge_created", edge_id=edge.id, source=edge.source, target=edge.target)
        return edge

    async def delete_edge(self, source: str, target: str) -> None:
        async with self._mutation() as document:
            document.remove_edge(source, target)
        logger.info("edge_deleted", source=source, target=target)

    # ── Health ───────────────────────────────────────────────────────

    async def check_health(self) -> dict[str, Any]:
        """Liveness probe: the store must be loadable. Never mutates."""
        try:
            await self._store.load()
        except StoreUnavailable as exc:
            logger.warning("health_check_failed", backend=self._store.name, error=exc.message)
            return {"status": "unhealthy", "error": exc.message, **exc.detail}

        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - self._started_at, 3),
        }
