"""Export the service topology snapshot to a JSON file."""

from __future__ import annotations

import asyncio
import json
import sys

from svcgraph.config import get_settings
from svcgraph.graph_db.snapshot_store import build_snapshot_store
from svcgraph.utils.logging import setup_logging


async def main(filename: str = "graph_export.json") -> None:
    setup_logging(log_level="INFO", log_format="console")
    settings = get_settings()
    store = build_snapshot_store(settings)

    try:
        document = await store.load()
        if not document.nodes:
            print("No graph data found.")
            sys.exit(0)

        with open(filename, "w") as f:
            json.dump(document.to_payload(), f, indent=2)
        print(f"Graph exported to {filename}")
        print(f"  Nodes: {len(document.nodes)}")
        print(f"  Edges: {len(document.edges)}")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:2]))
