from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    """Opaque byte store the task collection is persisted into.

    Keep this tiny so backends can be swapped without touching callers.
    Implementations raise `StoreError` when the backend is unavailable.
    """

    def get(self, key: str) -> bytes | None:
        """Return the bytes stored under key, or None when absent."""

    def set(self, key: str, value: bytes) -> None:
        """Replace the bytes stored under key."""


__all__ = ["KeyValueStore"]
