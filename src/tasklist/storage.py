"""Key-value storage services.

These play the part of the browser's ``localStorage``: string keys mapping
to string values, with ``get``/``set`` that may fail. Failures are raised
here and absorbed by :mod:`tasklist.persistence`.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage service cannot read or write a value."""


class StorageQuotaExceeded(StorageError):
    """Raised when a write would exceed the storage quota."""


class KeyValueStorage(Protocol):
    """Anything with localStorage-like ``get``/``set``."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-process storage, optionally limited to ``quota`` characters."""

    def __init__(self, data: dict[str, str] | None = None, quota: int | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})
        self.quota = quota

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota is not None:
            used = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
            if used + len(key) + len(value) > self.quota:
                raise StorageQuotaExceeded(
                    f"Writing {key!r} would exceed quota of {self.quota} characters"
                )
        self._data[key] = value


class JsonFileStorage:
    """Storage backed by a single JSON object file.

    A missing file means every key is absent. The file is replaced
    atomically on every write.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not contain a JSON object")

        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"Value for {key!r} in {self.path} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        """Write one key. A corrupt file is discarded and rewritten."""
        try:
            data = self._read_all()
        except StorageError as e:
            logger.warning("Discarding unreadable storage file: %s", e)
            data = {}
        data[key] = value

        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StorageError(f"Cannot write {self.path}: {e}") from e
