"""Export of the ordered task list to a standalone CSV file."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from taskscheduler.models import Task
from taskscheduler.store import write_csv

logger = logging.getLogger(__name__)

EXPORT_FILE = Path("ExportData") / "ExportData.csv"


def export_tasks(tasks: Iterable[Task], path: Path | None = None) -> bool:
    """Write ``tasks`` in the store's header and row format.

    Returns True on success and False if the file could not be written;
    I/O errors are logged, not raised.
    """
    if path is None:
        path = EXPORT_FILE

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_csv(path, tasks)
    except OSError as e:
        logger.error("Export to %s failed: %s", path, e)
        return False

    logger.info("Exported tasks to %s", path)
    return True
