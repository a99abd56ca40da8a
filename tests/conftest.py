"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import random
import threading

import pytest

from svcgraph.graph_db.document import GraphDocument
from svcgraph.graph_db.snapshot_store import FileSnapshotStore, InMemorySnapshotStore
from svcgraph.models.graph import Edge, Node
from svcgraph.services.graph_service import GraphService


@pytest.fixture(autouse=True)
def _env_setup(monkeypatch):
    """Keep tests off the real data file and quiet the logs."""
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("LOG_FORMAT", "console")


class YieldingStore(InMemorySnapshotStore):
    """In-memory store that yields to the event loop around every I/O step.

    Lets concurrently scheduled operations interleave the way real store
    I/O would.
    """

    def __init__(self, document: GraphDocument | None = None) -> None:
        super().__init__(document)
        self.loads = 0
        self.replaces = 0

    async def load(self) -> GraphDocument:
        await asyncio.sleep(0)
        self.loads += 1
        document = await super().load()
        await asyncio.sleep(0)
        return document

    async def replace(self, document: GraphDocument) -> None:
        await asyncio.sleep(0)
        self.replaces += 1
        await super().replace(document)


class StalledInitFileStore(FileSnapshotStore):
    """Parks the first empty-document initialization until released."""

    def __init__(self, path):
        super().__init__(path)
        self.stalled = threading.Event()
        self.release = threading.Event()
        self._first = True

    def _initialize_sync(self) -> None:
        if self._first:
            self._first = False
            self.stalled.set()
            self.release.wait(timeout=5)
        super()._initialize_sync()


def make_node(node_id: str, **overrides) -> Node:
    fields = {
        "id": node_id,
        "name": node_id.title(),
        "type": "backend",
        "latency": 10,
        "errorRate": 0.1,
        "traffic": 5,
        "x": 0.0,
        "y": 0.0,
    }
    fields.update(overrides)
    return Node.model_validate(fields)


def make_edge(source: str, target: str, **overrides) -> Edge:
    fields = {
        "id": f"edge-{source}-{target}",
        "source": source,
        "target": target,
        "protocol": "HTTP",
        "traffic": 1,
        "errorRate": 0.0,
        "rps": 10,
    }
    fields.update(overrides)
    return Edge.model_validate(fields)


@pytest.fixture
def sample_document() -> GraphDocument:
    """Nodes a, b, c with edges a->b and b->c."""
    return GraphDocument(
        nodes=[make_node("a"), make_node("b", type="database"), make_node("c", name="Checkout API")],
        edges=[make_edge("a", "b"), make_edge("b", "c")],
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store() -> YieldingStore:
    return YieldingStore()


@pytest.fixture
def service(store, rng) -> GraphService:
    return GraphService(store, rng=rng, clock=lambda: 1_700_000_000.0, started_at=0.0)


@pytest.fixture
def seeded_store(sample_document) -> YieldingStore:
    return YieldingStore(sample_document)


@pytest.fixture
def seeded_service(seeded_store, rng) -> GraphService:
    return GraphService(seeded_store, rng=rng, clock=lambda: 1_700_000_000.0)
