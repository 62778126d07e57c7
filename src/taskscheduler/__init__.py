"""taskscheduler - a CSV-backed task list with priority ordering."""

__version__ = "0.1.0"
