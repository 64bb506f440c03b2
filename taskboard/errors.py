from __future__ import annotations


class TaskboardError(Exception):
    """Base class for recoverable, user-facing taskboard errors."""


class ValidationError(TaskboardError, ValueError):
    """A required text field is empty or a field value is not allowed."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(TaskboardError, LookupError):
    """An operation targeted a task id that is not in the collection."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class InvalidStateError(TaskboardError):
    """An edit-session transition was requested from the wrong state."""


class StoreError(TaskboardError):
    """The key-value store could not be read or written."""


__all__ = [
    "TaskboardError",
    "ValidationError",
    "NotFoundError",
    "InvalidStateError",
    "StoreError",
]
