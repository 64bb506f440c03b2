from __future__ import annotations

import os
from typing import Any, cast

import redis

from taskboard.errors import StoreError

from .interface import KeyValueStore


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed key-value store.

    Each slot is a plain string key `{prefix}:{key}` holding the raw bytes.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        key_prefix: str = "taskboard",
        client: Any | None = None,
    ) -> None:
        if client is not None:
            self._redis = client
        else:
            self._redis = redis.Redis.from_url(
                url or os.getenv("REDIS_URL", "redis://localhost:6379/0")
            )
        self._prefix = key_prefix.rstrip(":")

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}" if self._prefix else key

    def get_client(self) -> Any:
        return self._redis

    def get(self, key: str) -> bytes | None:
        try:
            raw = cast(bytes | str | None, self._redis.get(self._key(key)))
        except redis.exceptions.RedisError as exc:
            raise StoreError(f"redis read failed: {exc}") from exc
        if raw is None:
            return None
        return raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)

    def set(self, key: str, value: bytes) -> None:
        try:
            self._redis.set(self._key(key), value)
        except redis.exceptions.RedisError as exc:
            raise StoreError(f"redis write failed: {exc}") from exc


__all__ = ["RedisKeyValueStore"]
