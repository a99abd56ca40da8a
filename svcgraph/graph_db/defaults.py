"""Placeholder telemetry for partially specified nodes and edges.

These functions are pure: randomness and the clock reading come in as
arguments, so a seeded ``random.Random`` gives reproducible output.
Only fields the caller left as ``None`` are filled; explicit zeros are kept.
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Collection

from svcgraph.models.graph import Edge, EdgeInput, Node, NodeInput

NODE_TYPES = ("backend", "frontend", "database", "gateway")
DEFAULT_PROTOCOL = "HTTP"

MAX_LATENCY = 200
MAX_NODE_TRAFFIC = 50
MAX_EDGE_TRAFFIC = 50
MAX_RPS = 1000
COORDINATE_BOUND = 400.0

_ID_ATTEMPTS = 1000


def generate_id(prefix: str, rng: random.Random, taken: Collection[str], now_ms: int) -> str:
    """Return ``<prefix>-<now_ms>-<n>`` not present in ``taken``."""
    for _ in range(_ID_ATTEMPTS):
        candidate = f"{prefix}-{now_ms}-{rng.randrange(1000)}"
        if candidate not in taken:
            return candidate
    # Every short suffix for this millisecond is in use.
    while True:
        candidate = f"{prefix}-{uuid.UUID(int=rng.getrandbits(128)).hex}"
        if candidate not in taken:
            return candidate


def _error_rate(rng: random.Random) -> float:
    return round(rng.random(), 2)


def synthesize_node(
    partial: NodeInput,
    rng: random.Random,
    taken_ids: Collection[str],
    now_ms: int,
) -> Node:
    values = partial.provided()
    extras = {k: v for k, v in values.items() if k not in NodeInput.model_fields}

    def pick(field: str, default):
        value = values.get(field)
        return default() if value is None else value

    return Node(
        id=pick("id", lambda: generate_id("service", rng, taken_ids, now_ms)),
        name=pick("name", lambda: f"Service {rng.randrange(1000)}"),
        type=pick("type", lambda: rng.choice(NODE_TYPES)),
        latency=pick("latency", lambda: rng.randrange(MAX_LATENCY)),
        error_rate=pick("error_rate", lambda: _error_rate(rng)),
        traffic=pick("traffic", lambda: rng.randrange(MAX_NODE_TRAFFIC)),
        x=pick("x", lambda: rng.uniform(-COORDINATE_BOUND, COORDINATE_BOUND)),
        y=pick("y", lambda: rng.uniform(-COORDINATE_BOUND, COORDINATE_BOUND)),
        **extras,
    )


def synthesize_edge(
    partial: EdgeInput,
    rng: random.Random,
    taken_ids: Collection[str],
    now_ms: int,
) -> Edge:
    """Build a full edge; ``source`` and ``target`` must already be present."""
    values = partial.provided()
    extras = {k: v for k, v in values.items() if k not in EdgeInput.model_fields}

    def pick(field: str, default):
        value = values.get(field)
        return default() if value is None else value

    return Edge(
        id=pick("id", lambda: generate_id("edge", rng, taken_ids, now_ms)),
        source=partial.source,
        target=partial.target,
        protocol=pick("protocol", lambda: DEFAULT_PROTOCOL),
        traffic=pick("traffic", lambda: rng.randint(1, MAX_EDGE_TRAFFIC)),
        error_rate=pick("error_rate", lambda: _error_rate(rng)),
        rps=pick("rps", lambda: rng.randrange(MAX_RPS)),
        **extras,
    )
