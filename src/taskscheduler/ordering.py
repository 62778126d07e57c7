"""Display ordering and urgency classification.

Pure functions over task records: nothing here touches the store.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from enum import Enum

from taskscheduler.models import Priority, Task

PRIORITY_RANK: dict[str, int] = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}

DUE_SOON_DAYS = 3


class Urgency(str, Enum):
    """Advisory display tag derived from a task's status and due date."""

    DONE = "Done"
    OVERDUE = "Overdue"
    DUE_SOON = "DueSoon"
    NORMAL = "Normal"


def priority_rank(priority: str) -> int:
    """Numeric weight of a priority; unrecognised values rank 0."""
    key = priority.value if isinstance(priority, Priority) else priority
    return PRIORITY_RANK.get(key, 0)


def sort_key(task: Task) -> tuple[int, object]:
    return (-priority_rank(task.priority), task.due)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Highest priority first, then earliest due.

    ``sorted`` is stable, so tasks with equal rank and due keep their
    relative order.
    """
    return sorted(tasks, key=sort_key)


def classify(task: Task, today: date, due_soon_days: int = DUE_SOON_DAYS) -> Urgency:
    """Classify ``task`` relative to ``today``, ignoring time of day."""
    if isinstance(today, datetime):
        today = today.date()
    if task.is_finished:
        return Urgency.DONE

    due_day = task.due.date()
    if due_day < today:
        return Urgency.OVERDUE
    if due_day < today + timedelta(days=due_soon_days):
        return Urgency.DUE_SOON
    return Urgency.NORMAL
