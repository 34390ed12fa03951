"""Configuration models for tasklist."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from tasklist.persistence import STORAGE_KEY

# Default config directory
TASKLIST_DIR = Path(".tasklist")
CONFIG_FILE = TASKLIST_DIR / "config.json"
STORAGE_FILE = TASKLIST_DIR / "storage.json"


class StorageConfig(BaseModel):
    """Where tasks are stored."""

    path: str = str(STORAGE_FILE)
    key: str = STORAGE_KEY


class LoggingConfig(BaseModel):
    """Configuration for the diagnostic log."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str | None = None


class TasklistConfig(BaseModel):
    """Main configuration for tasklist."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TasklistConfig:
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
