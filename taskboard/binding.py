from __future__ import annotations

from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, Field

from taskboard.models.task import Draft, Priority, Task
from taskboard.repository import Observer, RepositoryEvent, TaskRepository
from taskboard.session import EditSession
from taskboard.sorting import sort_tasks


class BoardView(BaseModel):
    """Everything a view needs to render one frame."""

    tasks: list[Task] = Field(default_factory=list)
    draft: Draft = Field(default_factory=Draft)
    editing_id: int | None = None
    action: Literal["Add", "Save"] = "Add"
    warnings: list[str] = Field(default_factory=list)


class TaskBoard:
    """Presentation binding between a view and the task core.

    The view reads `tasks()` or `snapshot()` and forwards user intents
    (typing, add/save, toggle, delete, edit) to the methods below.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repo = repository.open()
        self._session = EditSession(self._repo)
        self._warnings: list[str] = []
        self._repo.subscribe(self._on_event)

    @property
    def repository(self) -> TaskRepository:
        return self._repo

    @property
    def session(self) -> EditSession:
        return self._session

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    def take_warnings(self) -> list[str]:
        out, self._warnings = self._warnings, []
        return out

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        return self._repo.subscribe(observer)

    def close(self) -> None:
        self._repo.close()

    # read side
    def tasks(self) -> list[Task]:
        return sort_tasks(self._repo.list())

    def snapshot(self) -> BoardView:
        return BoardView(
            tasks=self.tasks(),
            draft=self._session.draft,
            editing_id=self._session.editing_id,
            action="Save" if self._session.is_editing else "Add",
            warnings=self.warnings,
        )

    # form input
    def set_title(self, value: str) -> None:
        self._session.set_title(value)

    def set_description(self, value: str) -> None:
        self._session.set_description(value)

    def set_priority(self, value: Priority | str) -> None:
        self._session.set_priority(value)

    # intents
    def add_or_save(self) -> Task:
        if self._session.is_editing:
            return self._session.commit_edit()
        return self._session.submit_new()

    def begin_edit(self, task_id: int) -> Task:
        return self._session.begin_edit(task_id)

    def toggle_complete(self, task_id: int) -> Task:
        return self._repo.toggle_complete(task_id)

    def delete_task(self, task_id: int) -> bool:
        return self._repo.delete(task_id)

    def _on_event(self, event: RepositoryEvent) -> None:
        if event.kind == "persist_failed":
            self._warnings.append(f"tasks not saved: {event.error}")


__all__ = ["BoardView", "TaskBoard"]
