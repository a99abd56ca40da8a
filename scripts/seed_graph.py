"""Populate the configured store with a demo topology."""

from __future__ import annotations

import asyncio

from svcgraph.graph_db.seed import seed
from svcgraph.utils.logging import setup_logging

if __name__ == "__main__":
    setup_logging(log_level="INFO", log_format="console")
    asyncio.run(seed())
