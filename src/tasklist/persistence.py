"""Persistence adapter between the task list and a key-value storage service.

The adapter never raises. A storage or decoding failure is logged and
treated as "storage is empty" on read and as a no-op on write; the
in-memory list stays the source of truth for the session.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from tasklist.models import Task, TaskRecord
from tasklist.storage import KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

STORAGE_KEY = "todo-devops-assignment-tasks"


class TaskPersistence:
    """Loads and saves the task list under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> list[Task]:
        """Read tasks from storage.

        Records are validated one at a time; a record missing or mis-typing
        ``id``, ``text`` or ``completed`` is dropped and the rest are kept.
        A payload that is not a list, or cannot be read at all, yields an
        empty list.
        """
        try:
            raw = self.storage.get(self.key)
            if not raw:
                return []
            data = json.loads(raw)
        except (StorageError, OSError, ValueError, TypeError, RecursionError) as e:
            logger.error("Failed to read tasks from storage: %s", e)
            return []

        if not isinstance(data, list):
            logger.warning(
                "Stored tasks under %r are not a list (got %s), ignoring",
                self.key,
                type(data).__name__,
            )
            return []

        tasks: list[Task] = []
        for index, item in enumerate(data):
            try:
                record = TaskRecord.model_validate(item)
            except ValidationError as e:
                logger.debug("Dropping malformed task record %d: %s", index, e.errors())
                continue
            tasks.append(record.to_task())

        return tasks

    def save(self, tasks: Iterable[Task]) -> bool:
        """Write the full task list to storage.

        Returns False if the write failed. The failure is logged and not
        retried.
        """
        try:
            serialized = json.dumps([task.to_record() for task in tasks])
            self.storage.set(self.key, serialized)
        except (StorageError, OSError, ValueError, TypeError, RecursionError) as e:
            logger.error("Failed to save tasks to storage: %s", e)
            return False

        return True
