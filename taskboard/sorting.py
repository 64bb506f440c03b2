from __future__ import annotations

import functools
from collections.abc import Iterable

from taskboard.models.task import Priority, Task

PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


def priority_rank(priority: Priority | str) -> int:
    return PRIORITY_RANK[Priority.parse(priority)]


def compare(a: Task, b: Task) -> int:
    """Order two tasks by priority tier alone: -1, 0 or 1."""
    ra = priority_rank(a.priority)
    rb = priority_rank(b.priority)
    return (ra > rb) - (ra < rb)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Return a new list in display order, High first.

    `sorted` is stable, so equal-priority tasks keep their input order and
    the input sequence itself is left untouched.
    """
    return sorted(tasks, key=functools.cmp_to_key(compare))


__all__ = ["PRIORITY_RANK", "priority_rank", "compare", "sort_tasks"]
