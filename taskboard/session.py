from __future__ import annotations

from dataclasses import dataclass

from taskboard.errors import InvalidStateError, NotFoundError
from taskboard.models.task import Draft, Priority, Task
from taskboard.repository import TaskRepository


@dataclass(frozen=True, slots=True)
class Idle:
    """No task targeted; the draft describes a new task."""


@dataclass(frozen=True, slots=True)
class Editing:
    task_id: int


SessionState = Idle | Editing


class EditSession:
    """Tracks at most one task under edit and the form's staging buffer.

    Transitions:
    - Idle --begin_edit(id)--> Editing(id)
    - Editing(a) --begin_edit(b)--> Editing(b), unsaved draft discarded
    - Editing(id) --commit_edit--> Idle
    - Idle --submit_new--> Idle

    There is no cancel transition.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repo = repository
        self._state: SessionState = Idle()
        self._draft = Draft()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def editing_id(self) -> int | None:
        return self._state.task_id if isinstance(self._state, Editing) else None

    @property
    def is_editing(self) -> bool:
        return isinstance(self._state, Editing)

    @property
    def draft(self) -> Draft:
        return self._draft.model_copy()

    # form input
    def set_title(self, value: str) -> None:
        self._draft.title = value

    def set_description(self, value: str) -> None:
        self._draft.description = value

    def set_priority(self, value: Priority | str) -> None:
        self._draft.priority = Priority.parse(value)

    def begin_edit(self, task_id: int) -> Task:
        task = self._repo.get(task_id)
        self._draft = Draft(
            title=task.title, description=task.description, priority=task.priority
        )
        self._state = Editing(task.id)
        return task

    def commit_edit(self) -> Task:
        state = self._state
        if not isinstance(state, Editing):
            raise InvalidStateError("no task is being edited")
        try:
            task = self._repo.update(
                state.task_id,
                self._draft.title,
                self._draft.description,
                self._draft.priority,
            )
        except NotFoundError:
            # The target vanished while being edited
            self._reset()
            raise
        self._reset()
        return task

    def submit_new(self) -> Task:
        if isinstance(self._state, Editing):
            raise InvalidStateError(
                f"task {self._state.task_id} is being edited; commit it before adding"
            )
        task = self._repo.create(
            self._draft.title, self._draft.description, self._draft.priority
        )
        self._reset()
        return task

    def _reset(self) -> None:
        self._state = Idle()
        self._draft = Draft()


__all__ = ["Idle", "Editing", "SessionState", "EditSession"]
