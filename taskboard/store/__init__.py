from __future__ import annotations

from pathlib import Path

from .adapter import DEFAULT_SLOT, TaskStoreAdapter
from .file_store import FileKeyValueStore
from .interface import KeyValueStore
from .memory import InMemoryKeyValueStore


def open_store(url: str, *, key_prefix: str = "taskboard") -> KeyValueStore:
    """Pick a store backend from a URL.

    - redis:// or rediss:// -> RedisKeyValueStore
    - memory:// -> InMemoryKeyValueStore
    - file://path or a bare path -> FileKeyValueStore
    """
    value = (url or "").strip()
    if not value:
        raise ValueError("store url must be non-empty")
    if value.startswith(("redis://", "rediss://", "unix://")):
        from .redis_store import RedisKeyValueStore

        return RedisKeyValueStore(value, key_prefix=key_prefix)
    if value.startswith("memory://"):
        return InMemoryKeyValueStore()
    if value.startswith("file://"):
        value = value[len("file://") :]
    return FileKeyValueStore(Path(value))


__all__ = [
    "DEFAULT_SLOT",
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "TaskStoreAdapter",
    "open_store",
]
