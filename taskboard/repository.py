from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from taskboard.errors import NotFoundError, StoreError
from taskboard.models.task import Priority, Task, require_text
from taskboard.observability import get_json_logger, get_metrics
from taskboard.store.adapter import TaskStoreAdapter

EventKind = Literal["created", "updated", "toggled", "deleted", "persist_failed"]


@dataclass(slots=True)
class RepositoryEvent:
    kind: EventKind
    task_id: int | None
    tasks: list[Task] = field(default_factory=list)
    error: str | None = None


Observer = Callable[[RepositoryEvent], None]


class TaskRepository:
    """Owns the canonical, insertion-ordered task collection.

    - The collection is loaded once, on `open()` or on first use
    - Every successful mutation writes the whole collection back through the
      adapter before returning, except when the collection is empty: an
      empty list is never written, so deleting the last task leaves the
      previous snapshot in the store
    - Store failures are logged and reported to observers; in-memory state
      stays authoritative for the session
    - Tasks handed out are copies
    """

    def __init__(
        self,
        adapter: TaskStoreAdapter,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._adapter = adapter
        self._clock = clock
        self._tasks: list[Task] = []
        self._last_id = 0
        self._loaded = False
        self._observers: list[Observer] = []
        self._logger = get_json_logger("taskboard.repository")

    # ----------------------------
    # Lifecycle
    # ----------------------------
    def open(self) -> TaskRepository:
        if not self._loaded:
            self._tasks = _dedupe(self._adapter.load())
            self._last_id = max((t.id for t in self._tasks), default=0)
            self._loaded = True
        return self

    def close(self) -> None:
        self._observers.clear()

    def __enter__(self) -> TaskRepository:
        return self.open()

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def adapter(self) -> TaskStoreAdapter:
        return self._adapter

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    # ----------------------------
    # Queries
    # ----------------------------
    def list(self) -> list[Task]:
        self.open()
        return [t.model_copy() for t in self._tasks]

    def get(self, task_id: int) -> Task:
        return self._find(task_id).model_copy()

    def __len__(self) -> int:
        self.open()
        return len(self._tasks)

    # ----------------------------
    # Mutations
    # ----------------------------
    def create(
        self,
        title: str,
        description: str,
        priority: Priority | str = Priority.LOW,
    ) -> Task:
        self.open()
        require_text("title", title)
        require_text("description", description)
        prio = Priority.parse(priority)
        task = Task(id=self._allocate_id(), title=title, description=description, priority=prio)
        self._tasks.append(task)
        self._after_mutation("created", task.id)
        return task.model_copy()

    def update(
        self,
        task_id: int,
        title: str,
        description: str,
        priority: Priority | str,
    ) -> Task:
        task = self._find(task_id)
        require_text("title", title)
        require_text("description", description)
        prio = Priority.parse(priority)
        task.title = title
        task.description = description
        task.priority = prio
        self._after_mutation("updated", task.id)
        return task.model_copy()

    def toggle_complete(self, task_id: int) -> Task:
        task = self._find(task_id)
        task.completed = not task.completed
        self._after_mutation("toggled", task.id)
        return task.model_copy()

    def delete(self, task_id: int) -> bool:
        self.open()
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) == len(self._tasks):
            return False
        self._tasks = remaining
        self._after_mutation("deleted", task_id)
        return True

    # ----------------------------
    # Internals
    # ----------------------------
    def _find(self, task_id: int) -> Task:
        self.open()
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def _allocate_id(self) -> int:
        # Millisecond timestamp, bumped past the last id when the clock stalls
        candidate = int(self._clock() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _after_mutation(self, kind: EventKind, task_id: int) -> None:
        metrics = get_metrics()
        metrics.increment("task_mutations", {"kind": kind})
        self._logger.info("task %s", kind, extra={"event": f"task_{kind}", "task_id": task_id})
        error = self._persist()
        self._notify(RepositoryEvent(kind=kind, task_id=task_id, tasks=self.list()))
        if error is not None:
            self._notify(
                RepositoryEvent(
                    kind="persist_failed", task_id=task_id, tasks=self.list(), error=error
                )
            )

    def _persist(self) -> str | None:
        if not self._tasks:
            get_metrics().increment("persist_skipped_empty", {})
            self._logger.debug("empty collection not written", extra={"event": "save_skipped"})
            return None
        try:
            self._adapter.save(self._tasks)
        except StoreError as exc:
            self._logger.warning(
                "could not persist tasks; keeping in-memory state",
                extra={"event": "save_failed", "metadata": {"error": str(exc)[:200]}},
            )
            get_metrics().increment("persist_errors", {})
            return str(exc)
        return None

    def _notify(self, event: RepositoryEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                self._logger.exception(
                    "observer failed", extra={"event": "observer_error", "task_id": event.task_id}
                )


def _dedupe(tasks: list[Task]) -> list[Task]:
    seen: set[int] = set()
    out: list[Task] = []
    for task in tasks:
        if task.id in seen:
            continue
        seen.add(task.id)
        out.append(task)
    return out


__all__ = ["EventKind", "Observer", "RepositoryEvent", "TaskRepository"]
