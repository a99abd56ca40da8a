"""Verify the snapshot store (and a running API, if given) are reachable."""

from __future__ import annotations

import asyncio
import os
import sys

import httpx

from svcgraph.config import get_settings
from svcgraph.graph_db.snapshot_store import RedisSnapshotStore, build_snapshot_store
from svcgraph.services.graph_service import GraphService


async def check_store() -> bool:
    settings = get_settings()
    store = build_snapshot_store(settings)
    try:
        if isinstance(store, RedisSnapshotStore) and not await store.ping():
            print(f"[FAIL] Redis: cannot reach {settings.REDIS_URL}")
            return False
        report = await GraphService(store).check_health()
        if report["status"] != "healthy":
            print(f"[FAIL] Store ({store.name}): {report.get('error')}")
            return False
        document = await store.load()
        print(
            f"[OK] Store ({store.name}) readable: "
            f"{len(document.nodes)} nodes, {len(document.edges)} edges"
        )
        return True
    finally:
        await store.close()


async def check_api() -> bool:
    base_url = os.getenv("SVCGRAPH_URL", "")
    if not base_url:
        print("[SKIP] API: SVCGRAPH_URL not set (optional)")
        return True
    prefix = get_settings().API_PREFIX
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.get(f"{base_url.rstrip('/')}{prefix}/health", timeout=10)
            resp.raise_for_status()
        print(f"[OK] API healthy at {base_url}")
        return True
    except httpx.HTTPError as exc:
        print(f"[FAIL] API: {exc}")
        return False


async def main() -> None:
    print("=" * 50)
    print("svcgraph — Setup Verification")
    print("=" * 50)

    results = await asyncio.gather(check_store(), check_api())

    print("=" * 50)
    passed = sum(results)
    total = len(results)
    print(f"Results: {passed}/{total} checks passed")
    if not all(results):
        print("Some checks failed. Review output above.")
        sys.exit(1)
    print("All systems operational.")


if __name__ == "__main__":
    asyncio.run(main())
