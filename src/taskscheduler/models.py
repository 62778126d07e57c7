"""Data models for taskscheduler."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from enum import Enum

from taskscheduler.errors import ValidationError

DUE_FORMAT = "%d/%m/%y %H:%M"
DATE_FORMAT = "%d/%m/%y"
TIME_FORMAT = "%H:%M"

TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")
DATE_PATTERN = re.compile(r"^[0-9]{2}/[0-9]{2}/[0-9]{2}$")

# Years a two-digit %y field reads back as themselves
MIN_YEAR = 1969
MAX_YEAR = 2068


class Priority(str, Enum):
    """Task priority levels, valued as written to the store."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Status(str, Enum):
    """Task status values, valued as written to the store."""

    IN_PROCESS = "In process"
    FINISHED = "Finish"


@dataclass(frozen=True)
class Task:
    """A single task record.

    ``priority`` and ``status`` hold enum members for known values. Values
    read from a hand-edited store that match neither are kept verbatim as
    plain strings so the file round-trips unchanged.
    """

    id: int
    title: str
    due: datetime
    priority: str = Priority.MEDIUM
    status: str = Status.IN_PROCESS

    @property
    def is_finished(self) -> bool:
        return field_text(self.status).lower() == Status.FINISHED.value.lower()

    def with_fields(self, **changes: object) -> Task:
        """Return a copy of this task with ``changes`` applied."""
        return replace(self, **changes)

    def to_row(self) -> list[str]:
        """Encode as a store row in column order."""
        return [
            str(self.id),
            self.title,
            format_due(self.due),
            field_text(self.priority),
            field_text(self.status),
        ]

    @classmethod
    def from_row(cls, row: list[str]) -> Task:
        """Decode a store row.

        Raises ValueError if the row does not hold five fields, a positive
        integer id and a ``dd/mm/yy HH:MM`` due date.
        """
        if len(row) != 5:
            raise ValueError(f"expected 5 fields, got {len(row)}")

        raw_id, title, raw_due, raw_priority, raw_status = row
        task_id = int(raw_id.strip())
        if task_id < 1:
            raise ValueError(f"id must be positive, got {task_id}")

        return cls(
            id=task_id,
            title=title,
            due=parse_due(raw_due.strip()),
            priority=_known_or_raw(Priority, raw_priority),
            status=_known_or_raw(Status, raw_status),
        )


def field_text(value: str) -> str:
    """Store text of a priority or status, enum member or raw string."""
    return value.value if isinstance(value, Enum) else str(value)


def _known_or_raw(enum_cls: type[Enum], raw: str) -> str:
    for member in enum_cls:
        if member.value == raw:
            return member
    return raw


def format_due(due: datetime) -> str:
    """Format a due datetime the way the store writes it."""
    return due.strftime(DUE_FORMAT)


def parse_due(text: str) -> datetime:
    """Parse a ``dd/mm/yy HH:MM`` due string. Raises ValueError.

    Both parts need two-digit fields, so a parsed value formats back to the
    same text.
    """
    date_part, sep, time_part = text.partition(" ")
    if not sep or not DATE_PATTERN.match(date_part) or not TIME_PATTERN.match(time_part):
        raise ValueError(f"malformed due date: {text!r}")
    return datetime.strptime(text, DUE_FORMAT)


def parse_time(text: str | None) -> time:
    """Parse a 24-hour ``HH:MM`` time of day.

    Anything else, including single-digit hours, is rejected rather than
    clamped.
    """
    value = (text or "").strip()
    if not TIME_PATTERN.match(value):
        raise ValidationError("time", f"Time must be HH:MM (00:00-23:59), got {text!r}")
    return datetime.strptime(value, TIME_FORMAT).time()


def parse_date(text: str | date | None) -> date:
    """Parse a ``dd/mm/yy`` date, passing ``date`` objects through."""
    if isinstance(text, datetime):
        return text.date()
    if isinstance(text, date):
        return text

    value = (text or "").strip()
    if not value:
        raise ValidationError("date", "Due date is required")
    if not DATE_PATTERN.match(value):
        raise ValidationError("date", f"Date must be dd/mm/yy, got {text!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError("date", f"Date must be dd/mm/yy, got {text!r}") from None


def combine_due(day: str | date | None, time_text: str | None) -> datetime:
    """Build a due datetime from separate date and time inputs."""
    return datetime.combine(parse_date(day), parse_time(time_text))


def coerce_due(due: datetime | str | None) -> datetime:
    """Validate a caller-supplied due value and truncate it to the minute.

    Only naive datetimes between ``MIN_YEAR`` and ``MAX_YEAR`` are accepted,
    since the store keeps no timezone and a two-digit year.
    """
    if due is None:
        raise ValidationError("due", "Due date and time are required")
    if isinstance(due, datetime):
        if due.tzinfo is not None:
            raise ValidationError("due", f"Due must not carry a timezone, got {due!r}")
        if not MIN_YEAR <= due.year <= MAX_YEAR:
            raise ValidationError(
                "due", f"Due year must be {MIN_YEAR}-{MAX_YEAR}, got {due.year}"
            )
        return due.replace(second=0, microsecond=0)
    if isinstance(due, str):
        try:
            return parse_due(due.strip())
        except ValueError:
            raise ValidationError(
                "due", f"Due must be dd/mm/yy HH:MM, got {due!r}"
            ) from None
    raise ValidationError("due", f"Unsupported due value: {due!r}")


def clean_title(title: str | None) -> str:
    """Trim a title, rejecting empty ones."""
    value = (title or "").strip()
    if not value:
        raise ValidationError("title", "Title is required")
    return value


def parse_priority(value: str | Priority) -> Priority:
    """Resolve a priority from its value or name, case-insensitively."""
    if isinstance(value, Priority):
        return value
    key = str(value).strip().lower()
    for member in Priority:
        if key in (member.value.lower(), member.name.lower()):
            return member
    choices = ", ".join(p.value for p in Priority)
    raise ValidationError("priority", f"Priority must be one of {choices}, got {value!r}")


def parse_status(value: str | Status) -> Status:
    """Resolve a status from its value or name.

    Accepts ``In process``/``Finish`` as stored, the enum names, and the
    spellings ``inprocess``/``finished``.
    """
    if isinstance(value, Status):
        return value
    key = str(value).strip().lower().replace("_", " ")
    aliases = {
        "in process": Status.IN_PROCESS,
        "inprocess": Status.IN_PROCESS,
        "finish": Status.FINISHED,
        "finished": Status.FINISHED,
    }
    if key in aliases:
        return aliases[key]
    choices = ", ".join(s.value for s in Status)
    raise ValidationError("status", f"Status must be one of {choices}, got {value!r}")
