"""CSV record store.

The store owns the backing file. Every read loads the whole file and every
write replaces it: records go to a temporary file in the same directory which
is then renamed over the original, so a failed write leaves the previously
committed content in place.
"""

from __future__ import annotations

import csv
import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

from taskscheduler.errors import StoreCorruptError, StoreWriteError
from taskscheduler.models import Task

logger = logging.getLogger(__name__)

HEADER = ["ID", "Title", "Due Date (dd/MM/yy HH:MM)", "Priority", "Status"]


def write_csv(path: Path, tasks: Iterable[Task]) -> None:
    """Write the header and ``tasks`` to ``path``, flushed to disk.

    Raises OSError on failure.
    """
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(HEADER)
        writer.writerows(task.to_row() for task in tasks)
        f.flush()
        os.fsync(f.fileno())


class RecordStore:
    """Reads and rewrites the full set of task records in a CSV file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def initialize(self, force: bool = False) -> bool:
        """Create an empty store holding only the header.

        Returns False without touching anything if the store already exists
        and ``force`` is not set.
        """
        if self.exists() and not force:
            return False

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreWriteError(self.path, f"cannot create directory: {e}") from e

        self.replace([])
        logger.info("Initialised store %s", self.path)
        return True

    def load(self) -> list[Task]:
        """Load all records in file order, skipping the header row."""
        try:
            with open(self.path, newline="", encoding="utf-8") as f:
                rows = list(csv.reader(f))
        except FileNotFoundError as e:
            logger.error("Store file missing: %s", self.path)
            raise StoreCorruptError(self.path, "store file does not exist") from e
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            logger.error("Cannot read store %s: %s", self.path, e)
            raise StoreCorruptError(self.path, f"cannot read store: {e}") from e

        tasks: list[Task] = []
        seen: dict[int, int] = {}
        # Line numbers are 1-based and include the header
        for line_no, row in enumerate(rows[1:], start=2):
            if not row:
                continue
            try:
                task = Task.from_row(row)
            except ValueError as e:
                logger.error("Bad record at %s:%d: %s", self.path, line_no, e)
                raise StoreCorruptError(self.path, f"line {line_no}: {e}") from e
            if task.id in seen:
                logger.error("Duplicate id %d at %s:%d", task.id, self.path, line_no)
                raise StoreCorruptError(
                    self.path,
                    f"line {line_no}: id {task.id} already used on line {seen[task.id]}",
                )
            seen[task.id] = line_no
            tasks.append(task)

        logger.debug("Loaded %d records from %s", len(tasks), self.path)
        return tasks

    def replace(self, records: Iterable[Task]) -> None:
        """Atomically overwrite the store with ``records``."""
        records = list(records)
        directory = self.path.parent
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            os.close(fd)
            write_csv(Path(tmp_name), records)
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error("Cannot write store %s: %s", self.path, e)
            raise StoreWriteError(self.path, f"cannot write store: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        logger.debug("Wrote %d records to %s", len(records), self.path)
