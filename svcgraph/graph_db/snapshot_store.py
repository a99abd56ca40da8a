"""Snapshot stores: load and atomically replace the serialized graph document.

A store holds exactly one document. ``load`` returns the last persisted
document, creating an empty one the first time. ``replace`` swaps the whole
document in one step, so a concurrent ``load`` sees either the old or the
new snapshot, never a mix. Any medium failure surfaces as ``StoreUnavailable``.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

import redis.asyncio as aioredis
from pydantic import ValidationError
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from svcgraph.config import Settings
from svcgraph.graph_db.document import GraphDocument
from svcgraph.utils.exceptions import StoreUnavailable
from svcgraph.utils.logging import get_logger
from svcgraph.utils.retry import async_retry

logger = get_logger(__name__)


def serialize(document: GraphDocument) -> str:
    return json.dumps(document.to_payload(), indent=2)


def deserialize(raw: str | bytes) -> GraphDocument:
    try:
        return GraphDocument.from_payload(json.loads(raw))
    except (json.JSONDecodeError, ValidationError, TypeError) as exc:
        raise StoreUnavailable("Stored snapshot is unreadable", reason=str(exc)) from exc


class SnapshotStore(ABC):
    """Holds one graph document."""

    name = "snapshot"

    @abstractmethod
    async def load(self) -> GraphDocument: ...

    @abstractmethod
    async def replace(self, document: GraphDocument) -> None: ...

    async def close(self) -> None:
        return None


class FileSnapshotStore(SnapshotStore):
    """JSON file on local disk, replaced via a temp file and ``os.replace``."""

    name = "file"

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> GraphDocument:
        return await asyncio.to_thread(self._load_sync)

    async def replace(self, document: GraphDocument) -> None:
        await asyncio.to_thread(self._write_sync, serialize(document))

    def _load_sync(self) -> GraphDocument:
        if not self._path.exists():
            self._initialize_sync()
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("snapshot_read_failed", path=str(self._path), error=str(exc))
            raise StoreUnavailable("Failed to read data file", reason=str(exc)) from exc
        return deserialize(raw)

    def _initialize_sync(self) -> None:
        """Publish an empty document unless some other writer already created the file."""
        self._publish(serialize(GraphDocument.empty()), exclusive=True)

    def _write_sync(self, payload: str) -> None:
        self._publish(payload, exclusive=False)

    def _publish(self, payload: str, exclusive: bool) -> None:
        tmp_path: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            if exclusive:
                # link() never overwrites, so a committed replace always wins.
                try:
                    os.link(tmp_path, self._path)
                except FileExistsError:
                    return
                logger.info("store_initialized", backend=self.name, path=str(self._path))
            else:
                os.replace(tmp_path, self._path)
                tmp_path = None
        except OSError as exc:
            logger.error("snapshot_write_failed", path=str(self._path), error=str(exc))
            raise StoreUnavailable("Failed to write data file", reason=str(exc)) from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)


_REDIS_TRANSIENT = (RedisConnectionError, RedisTimeoutError)


class RedisSnapshotStore(SnapshotStore):
    """Document kept under a single Redis key; ``SET`` is atomic."""

    name = "redis"

    def __init__(self, redis_url: str, key: str, retry_attempts: int = 3, client=None) -> None:
        if client is None:
            client = aioredis.from_url(redis_url, decode_responses=True)
        self._client = client
        self._key = key
        retry = async_retry(max_attempts=retry_attempts, retryable_exceptions=_REDIS_TRANSIENT)
        self._get = retry(self._client.get)
        self._set = retry(self._client.set)

    async def load(self) -> GraphDocument:
        try:
            raw = await self._get(self._key)
            if raw is None:
                # NX keeps a document another writer stored in the meantime.
                await self._set(self._key, serialize(GraphDocument.empty()), nx=True)
                logger.info("store_initialized", backend=self.name, key=self._key)
                raw = await self._get(self._key)
        except RedisError as exc:
            logger.error("snapshot_read_failed", key=self._key, error=str(exc))
            raise StoreUnavailable("Failed to read graph snapshot", reason=str(exc)) from exc
        if raw is None:
            raise StoreUnavailable("Graph snapshot vanished during initialization", key=self._key)
        return deserialize(raw)

    async def replace(self, document: GraphDocument) -> None:
        try:
            await self._set(self._key, serialize(document))
        except RedisError as exc:
            logger.error("snapshot_write_failed", key=self._key, error=str(exc))
            raise StoreUnavailable("Failed to write graph snapshot", reason=str(exc)) from exc

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()


class InMemorySnapshotStore(SnapshotStore):
    """Keeps the serialized form so every load hands out an independent copy."""

    name = "memory"

    def __init__(self, document: GraphDocument | None = None) -> None:
        self._raw = serialize(document) if document is not None else None

    async def load(self) -> GraphDocument:
        if self._raw is None:
            self._raw = serialize(GraphDocument.empty())
        return deserialize(self._raw)

    async def replace(self, document: GraphDocument) -> None:
        self._raw = serialize(document)


def build_snapshot_store(settings: Settings) -> SnapshotStore:
    if settings.STORE_BACKEND == "redis":
        return RedisSnapshotStore(
            settings.REDIS_URL,
            settings.REDIS_KEY,
            retry_attempts=settings.REDIS_RETRY_ATTEMPTS,
        )
    if settings.STORE_BACKEND == "memory":
        return InMemorySnapshotStore()
    return FileSnapshotStore(settings.DATA_PATH)
