"""Shared fixtures for taskscheduler tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest

from taskscheduler.models import Priority, Status, Task
from taskscheduler.repository import TaskRepository
from taskscheduler.store import HEADER, RecordStore


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Path to an empty store file (header only)."""
    path = tmp_path / "data" / "tasks.csv"
    path.parent.mkdir()
    path.write_text(",".join(HEADER) + "\n")
    return path


@pytest.fixture
def store(store_path: Path) -> RecordStore:
    return RecordStore(store_path)


@pytest.fixture
def repository(store: RecordStore) -> TaskRepository:
    return TaskRepository(store)


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Three tasks with mixed priorities and statuses."""
    return [
        Task(
            id=1,
            title="Pay rent",
            due=datetime(2024, 6, 1, 9, 0),
            priority=Priority.LOW,
            status=Status.FINISHED,
        ),
        Task(
            id=2,
            title="Call the bank, then email Sam",
            due=datetime(2024, 6, 12, 13, 0),
            priority=Priority.HIGH,
            status=Status.IN_PROCESS,
        ),
        Task(
            id=4,
            title='Read "Dune"',
            due=datetime(2024, 6, 20, 18, 30),
            priority=Priority.MEDIUM,
            status=Status.IN_PROCESS,
        ),
    ]


@pytest.fixture
def populated_store(store: RecordStore, sample_tasks: list[Task]) -> RecordStore:
    store.replace(sample_tasks)
    return store
