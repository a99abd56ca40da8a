"""Replace the stored topology with an empty document."""

from __future__ import annotations

import asyncio

from svcgraph.config import get_settings
from svcgraph.graph_db.document import GraphDocument
from svcgraph.graph_db.snapshot_store import build_snapshot_store
from svcgraph.utils.logging import setup_logging


async def main() -> None:
    setup_logging(log_level="INFO", log_format="console")

    settings = get_settings()
    store = build_snapshot_store(settings)

    try:
        await store.replace(GraphDocument.empty())
        print(f"All nodes and edges deleted from the {store.name} store.")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
