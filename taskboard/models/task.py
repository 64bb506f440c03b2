from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, TypeAdapter

from taskboard.errors import ValidationError


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: Priority | str) -> Priority:
        if isinstance(raw, Priority):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValidationError(
                f"priority must be one of {allowed}", field="priority"
            ) from None


class Task(BaseModel):
    """One unit of work in the collection.

    - `id` is assigned by the repository at creation and never changes
    - Records round-trip through the store as plain JSON objects
    """

    id: int
    title: str
    description: str
    completed: bool = False
    priority: Priority = Priority.LOW


class Draft(BaseModel):
    """Staging buffer mirroring the add/edit form."""

    title: str = ""
    description: str = ""
    priority: Priority = Priority.LOW


TaskList = TypeAdapter(list[Task])


def require_text(name: str, value: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string", field=name)
    if not value.strip():
        raise ValidationError(f"{name} must be non-empty", field=name)
    return value


__all__ = ["Priority", "Task", "Draft", "TaskList", "require_text"]
