"""Error types raised by taskscheduler."""

from __future__ import annotations

from pathlib import Path


class TaskSchedulerError(Exception):
    """Base class for all taskscheduler errors."""


class ValidationError(TaskSchedulerError):
    """Caller-supplied input violates a precondition.

    ``field`` names the input that failed (``title``, ``date``, ``time``,
    ``due``, ``priority`` or ``status``).
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class NotFoundError(TaskSchedulerError):
    """The referenced task id does not exist in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StoreError(TaskSchedulerError):
    """The backing file could not be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class StoreCorruptError(StoreError):
    """The backing file is missing, unreadable or cannot be decoded."""


class StoreWriteError(StoreError):
    """The backing file could not be rewritten; the previous content is intact."""


class EditSessionError(TaskSchedulerError):
    """An edit-session rule was violated."""
