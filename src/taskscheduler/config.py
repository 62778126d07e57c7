"""Configuration models for taskscheduler."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from taskscheduler.models import TIME_PATTERN


class StoreConfig(BaseModel):
    """Where tasks are stored and exported."""

    path: str = "data/tasks.csv"
    export_path: str = "ExportData/ExportData.csv"


class DisplayConfig(BaseModel):
    """Configuration for listing and input defaults."""

    due_soon_days: int = Field(default=3, ge=1)
    default_time: str = "13:00"

    @field_validator("default_time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError(f"default_time must be HH:MM, got {value!r}")
        return value


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str | None = None


class SchedulerConfig(BaseModel):
    """Main configuration for taskscheduler."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> SchedulerConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(exclude_none=True), f, indent=2)


# Default config directory
CONFIG_DIR = Path(".taskscheduler")
CONFIG_FILE = CONFIG_DIR / "config.json"
