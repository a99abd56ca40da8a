"""Unit tests for default synthesis of nodes and edges."""

from __future__ import annotations

import random

import pytest

from svcgraph.graph_db.defaults import (
    COORDINATE_BOUND,
    MAX_LATENCY,
    MAX_NODE_TRAFFIC,
    MAX_RPS,
    NODE_TYPES,
    generate_id,
    synthesize_edge,
    synthesize_node,
)
from svcgraph.models.graph import EdgeInput, NodeInput

NOW_MS = 1_700_000_000_000


@pytest.mark.parametrize("seed", range(20))
def test_node_defaults_within_ranges(seed):
    node = synthesize_node(NodeInput(), random.Random(seed), set(), NOW_MS)

    assert node.id.startswith(f"service-{NOW_MS}-")
    assert node.name.startswith("Service ")
    assert node.type in NODE_TYPES
    assert 0 <= node.latency < MAX_LATENCY
    assert 0 <= node.traffic < MAX_NODE_TRAFFIC
    assert 0 <= node.error_rate <= 1
    assert -COORDINATE_BOUND <= node.x <= COORDINATE_BOUND
    assert -COORDINATE_BOUND <= node.y <= COORDINATE_BOUND


def test_node_specified_fields_preserved_including_zeros(rng):
    partial = NodeInput.model_validate(
        {"id": "auth", "name": "Auth", "type": "identity", "latency": 0, "errorRate": 0, "traffic": 0, "x": 0, "y": -12.5}
    )
    node = synthesize_node(partial, rng, set(), NOW_MS)

    assert node.id == "auth"
    assert node.name == "Auth"
    assert node.type == "identity"
    assert node.latency == 0
    assert node.error_rate == 0
    assert node.traffic == 0
    assert node.x == 0
    assert node.y == -12.5


def test_node_extra_attributes_carried_through(rng):
    partial = NodeInput.model_validate({"name": "Billing", "team": "payments"})
    node = synthesize_node(partial, rng, set(), NOW_MS)
    assert node.to_payload()["team"] == "payments"


def test_same_seed_same_node():
    first = synthesize_node(NodeInput(), random.Random(7), set(), NOW_MS)
    second = synthesize_node(NodeInput(), random.Random(7), set(), NOW_MS)
    assert first == second


def test_generate_id_skips_taken_ids():
    taken = {generate_id("service", random.Random(3), set(), NOW_MS)}
    fresh = generate_id("service", random.Random(3), taken, NOW_MS)
    assert fresh not in taken
    assert fresh.startswith(f"service-{NOW_MS}-")


def test_generate_id_falls_back_when_short_ids_exhausted():
    taken = {f"service-{NOW_MS}-{n}" for n in range(1000)}
    fresh = generate_id("service", random.Random(0), taken, NOW_MS)
    assert fresh not in taken
    assert fresh.startswith("service-")


@pytest.mark.parametrize("seed", range(20))
def test_edge_defaults_within_ranges(seed):
    edge = synthesize_edge(EdgeInput(source="a", target="b"), random.Random(seed), set(), NOW_MS)

    assert edge.id.startswith(f"edge-{NOW_MS}-")
    assert edge.source == "a"
    assert edge.target == "b"
    assert edge.protocol == "HTTP"
    assert 1 <= edge.traffic <= 50
    assert 0 <= edge.error_rate <= 1
    assert 0 <= edge.rps < MAX_RPS


def test_edge_specified_fields_and_extras_preserved(rng):
    partial = EdgeInput.model_validate(
        {"id": "e1", "source": "a", "target": "b", "protocol": "gRPC", "rps": 0, "errorRate": 0.5, "label": "sync"}
    )
    edge = synthesize_edge(partial, rng, set(), NOW_MS)

    assert edge.id == "e1"
    assert edge.protocol == "gRPC"
    assert edge.rps == 0
    assert edge.error_rate == 0.5
    assert edge.to_payload()["label"] == "sync"
