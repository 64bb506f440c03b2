from __future__ import annotations

import pytest

from taskboard.errors import ValidationError
from taskboard.models.task import Draft, Priority, Task, TaskList, require_text


def test_task_defaults() -> None:
    t = Task(id=1, title="Buy milk", description="2%")
    assert t.completed is False
    assert t.priority is Priority.LOW


def test_priority_parse_accepts_enum_and_value() -> None:
    assert Priority.parse("High") is Priority.HIGH
    assert Priority.parse(Priority.MEDIUM) is Priority.MEDIUM


@pytest.mark.parametrize("bad", ["high", "Urgent", "", "1"])
def test_priority_parse_rejects_unknown(bad: str) -> None:
    with pytest.raises(ValidationError) as ei:
        Priority.parse(bad)
    assert ei.value.field == "priority"


def test_task_json_shape_matches_persisted_record() -> None:
    t = Task(id=42, title="Pay rent", description="rent", priority=Priority.HIGH)
    assert t.model_dump(mode="json") == {
        "id": 42,
        "title": "Pay rent",
        "description": "rent",
        "completed": False,
        "priority": "High",
    }


def test_task_list_reads_plain_records() -> None:
    raw = b'[{"id":1,"title":"a","description":"b","completed":true,"priority":"Medium"}]'
    (task,) = TaskList.validate_json(raw)
    assert task.completed is True
    assert task.priority is Priority.MEDIUM


@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
def test_require_text_rejects_blank(value: str) -> None:
    with pytest.raises(ValidationError) as ei:
        require_text("title", value)
    assert "title" in str(ei.value)
    assert ei.value.field == "title"


def test_require_text_keeps_value_as_entered() -> None:
    assert require_text("description", "  padded ") == "  padded "


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        require_text("title", "")


def test_draft_defaults() -> None:
    d = Draft()
    assert (d.title, d.description, d.priority) == ("", "", Priority.LOW)
