"""Task repository: CRUD operations over the record store.

Every operation reloads the whole store, applies one change and rewrites the
whole store. Nothing is cached between calls, so the file stays the single
source of truth.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from taskscheduler.errors import NotFoundError
from taskscheduler.models import (
    Priority,
    Status,
    Task,
    clean_title,
    coerce_due,
    parse_priority,
    parse_status,
)
from taskscheduler.ordering import DUE_SOON_DAYS, Urgency, classify, sort_tasks
from taskscheduler.store import RecordStore

logger = logging.getLogger(__name__)


def _next_id(tasks: list[Task]) -> int:
    return max((task.id for task in tasks), default=0) + 1


def _index_of(tasks: list[Task], task_id: int) -> int:
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i
    raise NotFoundError(task_id)


class TaskRepository:
    """CRUD access to the tasks held in a ``RecordStore``."""

    def __init__(self, store: RecordStore, due_soon_days: int = DUE_SOON_DAYS) -> None:
        self.store = store
        self.due_soon_days = due_soon_days

    def next_id(self) -> int:
        """One more than the largest id in the store, or 1 when empty."""
        return _next_id(self.store.load())

    def get(self, task_id: int) -> Task:
        tasks = self.store.load()
        return tasks[_index_of(tasks, task_id)]

    def add(self, title: str, due: datetime | str | None) -> Task:
        """Create a task with Medium priority and In process status.

        Raises:
            ValidationError: if the title is blank or the due value is
                missing or malformed. Nothing is written in that case.
        """
        title = clean_title(title)
        due = coerce_due(due)

        tasks = self.store.load()
        task = Task(
            id=_next_id(tasks),
            title=title,
            due=due,
            priority=Priority.MEDIUM,
            status=Status.IN_PROCESS,
        )
        tasks.append(task)
        self.store.replace(tasks)

        logger.info("Added task %d: %s", task.id, task.title)
        return task

    def delete(self, task_id: int) -> Task:
        """Remove the task with ``task_id`` and return it.

        Raises:
            NotFoundError: if no such task exists; the store is not rewritten.
        """
        tasks = self.store.load()
        removed = tasks.pop(_index_of(tasks, task_id))
        self.store.replace(tasks)

        logger.info("Deleted task %d", task_id)
        return removed

    def update_fields(
        self,
        task_id: int,
        priority: str | Priority | None = None,
        status: str | Status | None = None,
    ) -> Task:
        """Set priority and/or status on an existing task."""
        changes: dict[str, object] = {}
        if priority is not None:
            changes["priority"] = parse_priority(priority)
        if status is not None:
            changes["status"] = parse_status(status)

        tasks = self.store.load()
        index = _index_of(tasks, task_id)
        if not changes:
            return tasks[index]

        tasks[index] = tasks[index].with_fields(**changes)
        self.store.replace(tasks)

        logger.info("Updated task %d: %s", task_id, changes)
        return tasks[index]

    def edit(self, task_id: int, title: str, due: datetime | str | None) -> Task:
        """Replace title and due date, putting the task back In process."""
        title = clean_title(title)
        due = coerce_due(due)

        tasks = self.store.load()
        index = _index_of(tasks, task_id)
        tasks[index] = tasks[index].with_fields(
            title=title, due=due, status=Status.IN_PROCESS
        )
        self.store.replace(tasks)

        logger.info("Edited task %d", task_id)
        return tasks[index]

    def list_ordered(self) -> list[Task]:
        """All tasks in display order."""
        return sort_tasks(self.store.load())

    def list_with_urgency(self, today: date | None = None) -> list[tuple[Task, Urgency]]:
        """Ordered tasks paired with their urgency relative to ``today``."""
        if today is None:
            today = date.today()
        return [
            (task, classify(task, today, self.due_soon_days))
            for task in self.list_ordered()
        ]
