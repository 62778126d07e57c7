"""Tests for taskscheduler.models module."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from taskscheduler.errors import ValidationError
from taskscheduler.models import (
    Priority,
    Status,
    Task,
    clean_title,
    coerce_due,
    combine_due,
    format_due,
    parse_date,
    parse_due,
    parse_priority,
    parse_status,
    parse_time,
)


class TestTask:
    """Tests for the Task record."""

    def test_defaults(self) -> None:
        """Test default priority and status."""
        task = Task(id=1, title="Test", due=datetime(2024, 1, 1, 13, 0))
        assert task.priority == Priority.MEDIUM
        assert task.status == Status.IN_PROCESS
        assert task.is_finished is False

    def test_is_immutable(self) -> None:
        """Test records cannot be mutated in place."""
        task = Task(id=1, title="Test", due=datetime(2024, 1, 1, 13, 0))
        with pytest.raises(AttributeError):
            task.title = "Changed"  # type: ignore[misc]

    def test_with_fields_returns_copy(self) -> None:
        """Test with_fields leaves the original untouched."""
        task = Task(id=1, title="Test", due=datetime(2024, 1, 1, 13, 0))
        changed = task.with_fields(status=Status.FINISHED)
        assert changed.is_finished is True
        assert task.is_finished is False
        assert changed.id == 1

    def test_to_row(self) -> None:
        """Test encoding uses the store's text values."""
        task = Task(
            id=7,
            title="Ship it",
            due=datetime(2024, 6, 9, 8, 5),
            priority=Priority.HIGH,
            status=Status.FINISHED,
        )
        assert task.to_row() == ["7", "Ship it", "09/06/24 08:05", "High", "Finish"]

    def test_from_row(self) -> None:
        """Test decoding a well-formed row."""
        task = Task.from_row(["3", "Plan trip", "31/12/24 23:59", "Low", "In process"])
        assert task.id == 3
        assert task.title == "Plan trip"
        assert task.due == datetime(2024, 12, 31, 23, 59)
        assert task.priority is Priority.LOW
        assert task.status is Status.IN_PROCESS

    def test_from_row_keeps_unknown_values(self) -> None:
        """Test unrecognised priority and status text survive decoding."""
        task = Task.from_row(["3", "Odd", "01/01/24 10:00", "Urgent", "Blocked"])
        assert task.priority == "Urgent"
        assert task.status == "Blocked"
        assert task.to_row()[3:] == ["Urgent", "Blocked"]

    def test_finish_is_case_insensitive(self) -> None:
        """Test hand-edited status casing still counts as finished."""
        task = Task.from_row(["3", "Odd", "01/01/24 10:00", "Low", "FINISH"])
        assert task.is_finished is True

    @pytest.mark.parametrize(
        "row",
        [
            ["1", "Too few", "01/01/24 10:00", "Low"],
            ["x", "Bad id", "01/01/24 10:00", "Low", "In process"],
            ["0", "Zero id", "01/01/24 10:00", "Low", "In process"],
            ["1", "Bad due", "2024-01-01 10:00", "Low", "In process"],
            ["1", "Bad time", "01/01/24 9:00", "Low", "In process"],
        ],
    )
    def test_from_row_rejects_malformed(self, row: list[str]) -> None:
        """Test malformed rows raise ValueError."""
        with pytest.raises(ValueError):
            Task.from_row(row)


class TestDueParsing:
    """Tests for due date helpers."""

    def test_format_due(self) -> None:
        """Test two-digit year, 24-hour time."""
        assert format_due(datetime(2024, 3, 5, 17, 45)) == "05/03/24 17:45"

    def test_parse_due(self) -> None:
        """Test parsing the store's due format."""
        assert parse_due("05/03/24 17:45") == datetime(2024, 3, 5, 17, 45)

    @pytest.mark.parametrize("text", ["00:00", "09:30", "13:00", "23:59"])
    def test_parse_time_valid(self, text: str) -> None:
        """Test valid 24-hour times."""
        parsed = parse_time(text)
        assert parsed.strftime("%H:%M") == text

    @pytest.mark.parametrize("text", ["24:00", "9:30", "12:60", "12:5", "1200", "", None, "noon"])
    def test_parse_time_invalid(self, text: str | None) -> None:
        """Test anything but HH:MM is rejected, not clamped."""
        with pytest.raises(ValidationError) as exc_info:
            parse_time(text)
        assert exc_info.value.field == "time"

    def test_parse_date(self) -> None:
        """Test dd/mm/yy dates."""
        assert parse_date("10/06/24") == date(2024, 6, 10)
        assert parse_date(date(2024, 6, 10)) == date(2024, 6, 10)
        assert parse_date(datetime(2024, 6, 10, 8, 0)) == date(2024, 6, 10)

    @pytest.mark.parametrize("text", ["", None, "2024-06-10", "31/02/24", "1/6/24", "10/6/24"])
    def test_parse_date_invalid(self, text: str | None) -> None:
        """Test missing or malformed dates."""
        with pytest.raises(ValidationError) as exc_info:
            parse_date(text)
        assert exc_info.value.field == "date"

    def test_combine_due(self) -> None:
        """Test combining date and time inputs."""
        assert combine_due("10/06/24", "13:00") == datetime(2024, 6, 10, 13, 0)
        assert combine_due(date(2024, 6, 10), "07:15") == datetime.combine(
            date(2024, 6, 10), time(7, 15)
        )

    def test_coerce_due(self) -> None:
        """Test datetimes are truncated to the minute and strings parsed."""
        assert coerce_due(datetime(2024, 6, 10, 13, 0, 42, 7)) == datetime(2024, 6, 10, 13, 0)
        assert coerce_due("10/06/24 13:00") == datetime(2024, 6, 10, 13, 0)

    @pytest.mark.parametrize("due", [None, "", "tomorrow", "10/06/24", 12])
    def test_coerce_due_invalid(self, due: object) -> None:
        """Test missing or unparseable due values."""
        with pytest.raises(ValidationError) as exc_info:
            coerce_due(due)  # type: ignore[arg-type]
        assert exc_info.value.field == "due"

    @pytest.mark.parametrize(
        "due",
        [
            datetime(2070, 1, 1, 9, 0),
            datetime(1968, 12, 31, 23, 59),
            datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc),
            datetime(2024, 6, 1, 9, 0, tzinfo=timezone(timedelta(hours=2))),
        ],
    )
    def test_coerce_due_unstorable(self, due: datetime) -> None:
        """Test datetimes the two-digit-year, zoneless format cannot hold."""
        with pytest.raises(ValidationError) as exc_info:
            coerce_due(due)
        assert exc_info.value.field == "due"

    @pytest.mark.parametrize("year", [1969, 2068])
    def test_coerce_due_year_bounds(self, year: int) -> None:
        due = datetime(year, 1, 1, 9, 0)
        assert coerce_due(due) == due
        assert parse_due(format_due(due)) == due

    @pytest.mark.parametrize("text", ["1/6/24 09:30", "01/6/24 09:30", "01/06/2024 09:30"])
    def test_parse_due_requires_two_digit_fields(self, text: str) -> None:
        """Test short or long date fields are rejected rather than normalised."""
        with pytest.raises(ValueError):
            parse_due(text)


class TestInputValidation:
    """Tests for title, priority and status validation."""

    def test_clean_title_trims(self) -> None:
        assert clean_title("  Buy milk  ") == "Buy milk"

    @pytest.mark.parametrize("title", ["", "   ", "\t\n", None])
    def test_clean_title_empty(self, title: str | None) -> None:
        with pytest.raises(ValidationError) as exc_info:
            clean_title(title)
        assert exc_info.value.field == "title"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("High", Priority.HIGH),
            ("low", Priority.LOW),
            ("MEDIUM", Priority.MEDIUM),
            (Priority.HIGH, Priority.HIGH),
        ],
    )
    def test_parse_priority(self, value: str, expected: Priority) -> None:
        assert parse_priority(value) is expected

    def test_parse_priority_rejects_unknown(self) -> None:
        """Test unknown priorities are rejected on input."""
        with pytest.raises(ValidationError) as exc_info:
            parse_priority("Urgent")
        assert exc_info.value.field == "priority"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("In process", Status.IN_PROCESS),
            ("IN_PROCESS", Status.IN_PROCESS),
            ("InProcess", Status.IN_PROCESS),
            ("Finish", Status.FINISHED),
            ("finished", Status.FINISHED),
            (Status.FINISHED, Status.FINISHED),
        ],
    )
    def test_parse_status(self, value: str, expected: Status) -> None:
        assert parse_status(value) is expected

    def test_parse_status_rejects_unknown(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_status("Blocked")
        assert exc_info.value.field == "status"
