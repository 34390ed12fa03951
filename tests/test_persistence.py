"""Tests for tasklist.persistence module."""

from __future__ import annotations

import json
import logging

import pytest

from tasklist.models import Task
from tasklist.persistence import STORAGE_KEY, TaskPersistence
from tasklist.storage import MemoryStorage, StorageError


class FailingStorage:
    """Storage whose reads and writes always fail."""

    def get(self, key: str) -> str | None:
        raise StorageError("storage unavailable")

    def set(self, key: str, value: str) -> None:
        raise StorageError("storage unavailable")


class TestLoad:
    """Tests for TaskPersistence.load."""

    def test_absent_key(self, persistence: TaskPersistence) -> None:
        """Test nothing stored yields an empty list."""
        assert persistence.load() == []

    def test_empty_value(self) -> None:
        """Test an empty stored string yields an empty list."""
        persistence = TaskPersistence(MemoryStorage({STORAGE_KEY: ""}))
        assert persistence.load() == []

    def test_well_formed(self) -> None:
        """Test records load in stored order."""
        raw = json.dumps(
            [
                {"id": "b", "text": "Walk dog", "completed": True},
                {"id": "a", "text": "Buy milk", "completed": False},
            ]
        )
        persistence = TaskPersistence(MemoryStorage({STORAGE_KEY: raw}))
        assert persistence.load() == [
            Task(id="b", text="Walk dog", completed=True),
            Task(id="a", text="Buy milk", completed=False),
        ]

    def test_drops_invalid_records_only(self) -> None:
        """Test a record missing completed is dropped, the rest kept."""
        raw = json.dumps(
            [
                {"id": "a", "text": "Buy milk", "completed": False},
                {"id": "b", "text": "Walk dog"},
            ]
        )
        persistence = TaskPersistence(MemoryStorage({STORAGE_KEY: raw}))
        assert persistence.load() == [Task(id="a", text="Buy milk")]

    def test_drops_mistyped_and_non_object_records(self) -> None:
        """Test mis-typed fields and non-objects are dropped."""
        raw = json.dumps(
            [
                {"id": 1, "text": "a", "completed": False},
                {"id": "2", "text": "b", "completed": "yes"},
                "task",
                None,
                {"id": "3", "text": "c", "completed": True, "extra": "ignored"},
            ]
        )
        persistence = TaskPersistence(MemoryStorage({STORAGE_KEY: raw}))
        assert persistence.load() == [Task(id="3", text="c", completed=True)]

    @pytest.mark.parametrize("raw", ['{"id": "a"}', "42", '"tasks"', "null"])
    def test_non_list_payload(self, raw: str, caplog: pytest.LogCaptureFixture) -> None:
        """Test a payload that is not a list yields an empty list."""
        persistence = TaskPersistence(MemoryStorage({STORAGE_KEY: raw}))
        with caplog.at_level(logging.WARNING, logger="tasklist"):
            assert persistence.load() == []
        assert "not a list" in caplog.text

    def test_malformed_json(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test malformed data yields an empty list and an error log."""
        persistence = TaskPersistence(MemoryStorage({STORAGE_KEY: "[{oops"}))
        with caplog.at_level(logging.ERROR, logger="tasklist"):
            assert persistence.load() == []
        assert "Failed to read tasks" in caplog.text

    def test_deeply_nested_payload(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test nesting too deep to decode yields an empty list."""
        raw = "[" * 200000 + "]" * 200000
        persistence = TaskPersistence(MemoryStorage({STORAGE_KEY: raw}))
        with caplog.at_level(logging.ERROR, logger="tasklist"):
            assert persistence.load() == []
        assert "Failed to read tasks" in caplog.text

    def test_storage_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a failing storage read yields an empty list."""
        persistence = TaskPersistence(FailingStorage())
        with caplog.at_level(logging.ERROR, logger="tasklist"):
            assert persistence.load() == []
        assert "storage unavailable" in caplog.text

    def test_custom_key(self) -> None:
        """Test the adapter reads only its own key."""
        raw = json.dumps([{"id": "a", "text": "x", "completed": False}])
        storage = MemoryStorage({"other": raw})
        assert TaskPersistence(storage).load() == []
        assert TaskPersistence(storage, key="other").load() == [Task(id="a", text="x")]


class TestSave:
    """Tests for TaskPersistence.save."""

    def test_writes_records(self, memory_storage: MemoryStorage) -> None:
        """Test the full list is written as JSON records."""
        persistence = TaskPersistence(memory_storage)
        assert persistence.save([Task(id="a", text="Buy milk", completed=True)]) is True

        stored = json.loads(memory_storage.get(STORAGE_KEY) or "")
        assert stored == [{"id": "a", "text": "Buy milk", "completed": True}]

    def test_round_trip(self, persistence: TaskPersistence) -> None:
        """Test saving then loading keeps ids, text, flags and order."""
        tasks = [
            Task(id="3", text="Write report"),
            Task(id="2", text="Walk dog", completed=True),
            Task(id="1", text="Buy milk"),
        ]
        persistence.save(tasks)
        assert persistence.load() == tasks

    def test_storage_failure_is_swallowed(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a failing write returns False and logs."""
        persistence = TaskPersistence(FailingStorage())
        with caplog.at_level(logging.ERROR, logger="tasklist"):
            assert persistence.save([Task(id="a", text="x")]) is False
        assert "Failed to save tasks" in caplog.text

    def test_quota_exceeded_is_swallowed(self) -> None:
        """Test a quota failure keeps the previous stored value."""
        storage = MemoryStorage({STORAGE_KEY: "[]"}, quota=40)
        persistence = TaskPersistence(storage)
        assert persistence.save([Task(id="a", text="x" * 100)]) is False
        assert storage.get(STORAGE_KEY) == "[]"
