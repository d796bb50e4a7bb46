"""
Key-value storage backends for the contact collection.

Every backend exposes the same async interface as the Redis client:
    get(key) -> str | None
    set_with_ttl(key, value, ttl_s=None) -> bool
    delete(key) -> bool
    ping() -> bool

Backends:
- MemoryKeyValueStore: per-process dict (tests, throwaway runs)
- FileKeyValueStore: one JSON document per key on local disk
- FastRedisClient: pooled Redis connection
"""

import asyncio
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

from contactbook.config import Settings
from contactbook.infrastructure.observability.logging import get_logger
from contactbook.services.redis_client import FastRedisClient

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool: ...

    async def delete(self, key: str) -> bool: ...

    async def ping(self) -> bool: ...


class MemoryKeyValueStore:
    """In-process store. TTLs are accepted and ignored."""

    def __init__(self):
        self.store: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool:
        self.store[key] = value
        return True

    async def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None

    async def ping(self) -> bool:
        return True


class FileKeyValueStore:
    """
    Local-disk store: each key lives in ``<directory>/<key>.json``.

    Blocking file I/O runs in a worker thread. Writes go to a temp file that
    replaces the target, so readers never see a half-written document.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.directory / f"{safe_key}.json"

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, self._path(key))

    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool:
        await asyncio.to_thread(self._write, self._path(key), value)
        return True

    async def delete(self, key: str) -> bool:
        return await asyncio.to_thread(self._remove, self._path(key))

    async def ping(self) -> bool:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            return os.access(self.directory, os.W_OK)
        except OSError as e:
            logger.error("Storage directory not writable", path=str(self.directory), error=str(e))
            return False

    @staticmethod
    def _read(path: Path) -> str | None:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _write(path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def _remove(path: Path) -> bool:
        if path.exists():
            path.unlink()
            return True
        return False


def build_key_value_store(settings: Settings) -> KeyValueStore:
    """Pick the backend named by ``settings.STORAGE_BACKEND``."""
    backend = settings.STORAGE_BACKEND
    logger.info("Selecting storage backend", backend=backend)

    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "redis":
        return FastRedisClient(settings.REDIS_URL, max_connections=settings.REDIS_MAX_CONNECTIONS)
    return FileKeyValueStore(settings.storage_path())
