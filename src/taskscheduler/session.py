"""Edit session state for a presentation layer.

Only one task may be in edit mode at a time. While a task is being edited,
adding new tasks is blocked, and deleting the task under edit drops the
session back to idle.
"""

from __future__ import annotations

import logging
from datetime import datetime

from taskscheduler.errors import EditSessionError, NotFoundError
from taskscheduler.models import Task
from taskscheduler.repository import TaskRepository

logger = logging.getLogger(__name__)


class EditSession:
    """Tracks which task, if any, is currently being edited."""

    def __init__(self, repository: TaskRepository) -> None:
        self.repository = repository
        self._editing_id: int | None = None

    @property
    def editing_id(self) -> int | None:
        return self._editing_id

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    def begin(self, task_id: int) -> Task:
        """Enter edit mode for ``task_id`` and return its current values."""
        if self.is_editing:
            raise EditSessionError(f"Task {self._editing_id} is already being edited")

        task = self.repository.get(task_id)
        self._editing_id = task.id
        logger.debug("Editing task %d", task.id)
        return task

    def commit(self, title: str, due: datetime | str | None) -> Task:
        """Save the edit and return to idle.

        A validation failure keeps the session open so the caller can retry.
        If the task disappeared in the meantime the session is closed and
        NotFoundError propagates.
        """
        if self._editing_id is None:
            raise EditSessionError("No task is being edited")

        try:
            task = self.repository.edit(self._editing_id, title, due)
        except NotFoundError:
            self._editing_id = None
            raise

        self._editing_id = None
        return task

    def cancel(self) -> None:
        self._editing_id = None

    def add(self, title: str, due: datetime | str | None) -> Task:
        if self.is_editing:
            raise EditSessionError("Finish or cancel the current edit before adding tasks")
        return self.repository.add(title, due)

    def delete(self, task_id: int) -> Task:
        if self._editing_id == task_id:
            logger.debug("Deleting task %d under edit; leaving edit mode", task_id)
            self._editing_id = None
        return self.repository.delete(task_id)
