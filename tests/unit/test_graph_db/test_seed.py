"""Unit tests for demo topology seeding."""

from __future__ import annotations

import pytest

from svcgraph.graph_db.seed import DEMO_EDGES, DEMO_NODES, seed, seed_demo_topology
from svcgraph.graph_db.snapshot_store import FileSnapshotStore


@pytest.mark.asyncio
async def test_seed_demo_topology(service):
    created = await seed_demo_topology(service)

    document = await service.list_graph()
    assert created == (len(DEMO_NODES), len(DEMO_EDGES))
    assert len(document.nodes) == len(DEMO_NODES)
    assert document.find_edge("orders", "payments").protocol == "gRPC"
    assert document.integrity_violations() == []


@pytest.mark.asyncio
async def test_seed_is_rerunnable(service):
    await seed_demo_topology(service)
    assert await seed_demo_topology(service) == (0, 0)
    assert len((await service.list_graph()).edges) == len(DEMO_EDGES)


@pytest.mark.asyncio
async def test_seed_writes_configured_store(tmp_path, monkeypatch):
    path = tmp_path / "data.json"
    monkeypatch.setenv("STORE_BACKEND", "file")
    monkeypatch.setenv("DATA_PATH", str(path))

    await seed()

    document = await FileSnapshotStore(path).load()
    assert len(document.nodes) == len(DEMO_NODES)
