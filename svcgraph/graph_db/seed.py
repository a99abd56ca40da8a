"""Demo topology seeding."""

from __future__ import annotations

from svcgraph.config import get_settings
from svcgraph.graph_db.snapshot_store import build_snapshot_store
from svcgraph.models.graph import EdgeInput, NodeInput
from svcgraph.services.graph_service import GraphService
from svcgraph.utils.exceptions import Conflict, DuplicateId
from svcgraph.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_NODES = [
    NodeInput(id="gateway", name="API Gateway", type="gateway", x=0, y=-300),
    NodeInput(id="web", name="Web Frontend", type="frontend", x=-250, y=-150),
    NodeInput(id="orders", name="Order Service", type="backend", x=-150, y=50),
    NodeInput(id="payments", name="Payment Service", type="backend", x=150, y=50),
    NodeInput(id="inventory", name="Inventory Service", type="backend", x=300, y=-100),
    NodeInput(id="orders-db", name="Orders DB", type="database", x=-150, y=250),
    NodeInput(id="payments-db", name="Payments DB", type="database", x=150, y=250),
]

DEMO_EDGES = [
    EdgeInput(source="web", target="gateway"),
    EdgeInput(source="gateway", target="orders"),
    EdgeInput(source="gateway", target="inventory"),
    EdgeInput(source="orders", target="payments", protocol="gRPC"),
    EdgeInput(source="orders", target="inventory", protocol="gRPC"),
    EdgeInput(source="orders", target="orders-db", protocol="TCP"),
    EdgeInput(source="payments", target="payments-db", protocol="TCP"),
]


async def seed_demo_topology(service: GraphService) -> tuple[int, int]:
    """Create the demo nodes and edges, skipping any that already exist."""
    nodes = edges = 0
    for node in DEMO_NODES:
        try:
            await service.create_node(node)
            nodes += 1
        except DuplicateId:
            logger.info("seed_node_exists", node_id=node.id)
    for edge in DEMO_EDGES:
        try:
            await service.create_edge(edge)
            edges += 1
        except Conflict:
            logger.info("seed_edge_exists", source=edge.source, target=edge.target)
    return nodes, edges


async def seed() -> None:
    settings = get_settings()
    store = build_snapshot_store(settings)

    try:
        nodes, edges = await seed_demo_topology(GraphService(store))
        logger.info("seed_complete", nodes_created=nodes, edges_created=edges)
    finally:
        await store.close()
