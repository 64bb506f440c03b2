from __future__ import annotations

from .interface import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store; contents vanish at exit."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def keys(self) -> list[str]:
        return list(self._data)


__all__ = ["InMemoryKeyValueStore"]
