from __future__ import annotations

from collections.abc import Sequence

from pydantic import ValidationError as PydanticValidationError

from taskboard.errors import StoreError
from taskboard.models.task import Task, TaskList
from taskboard.observability import get_json_logger, get_metrics

from .interface import KeyValueStore

DEFAULT_SLOT = "tasks"


class TaskStoreAdapter:
    """Reads and writes the whole task collection under one named slot.

    The slot holds a JSON array of task records. Anything that cannot be
    read back as such an array loads as an empty collection.
    """

    def __init__(self, store: KeyValueStore, *, slot: str = DEFAULT_SLOT) -> None:
        self._store = store
        self._slot = slot
        self._logger = get_json_logger("taskboard.store")

    @property
    def slot(self) -> str:
        return self._slot

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def load(self) -> list[Task]:
        metrics = get_metrics()
        try:
            raw = self._store.get(self._slot)
        except StoreError as exc:
            self._logger.warning(
                "store read failed; starting empty",
                extra={"event": "load_failed", "slot": self._slot, "metadata": {"error": str(exc)}},
            )
            metrics.increment("load_errors", {"reason": "store"})
            return []
        if raw is None:
            self._logger.info(
                "no saved tasks", extra={"event": "load_empty", "slot": self._slot}
            )
            return []
        try:
            tasks = TaskList.validate_json(raw)
        except PydanticValidationError as exc:
            self._logger.warning(
                "saved tasks unreadable; starting empty",
                extra={
                    "event": "load_failed",
                    "slot": self._slot,
                    "metadata": {"error": str(exc)[:200]},
                },
            )
            metrics.increment("load_errors", {"reason": "decode"})
            return []
        self._logger.info(
            "tasks loaded", extra={"event": "load", "slot": self._slot, "count": len(tasks)}
        )
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        payload = TaskList.dump_json(list(tasks))
        self._store.set(self._slot, payload)
        get_metrics().increment("persist_writes", {"slot": self._slot})
        self._logger.debug(
            "tasks saved", extra={"event": "save", "slot": self._slot, "count": len(tasks)}
        )


__all__ = ["DEFAULT_SLOT", "TaskStoreAdapter"]
