"""Shared fixtures for tasklist tests."""

from __future__ import annotations

import itertools
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from tasklist.persistence import TaskPersistence
from tasklist.storage import MemoryStorage
from tasklist.store import TaskStore


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
def memory_storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def persistence(memory_storage: MemoryStorage) -> TaskPersistence:
    """Persistence adapter over in-memory storage."""
    return TaskPersistence(memory_storage)


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Predictable ids: task-1, task-2, ..."""
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def store(persistence: TaskPersistence, id_factory: Callable[[], str]) -> TaskStore:
    """Empty store with predictable ids."""
    return TaskStore.open(persistence, id_factory=id_factory)


@pytest.fixture
def three_task_store(store: TaskStore) -> TaskStore:
    """Store holding task-3, task-2, task-1 (newest first)."""
    store.add_task("Buy milk")
    store.add_task("Walk dog")
    store.add_task("Write report")
    return store


@pytest.fixture(autouse=True)
def reset_tasklist_logger() -> Generator[None, None, None]:
    """Drop handlers the CLI attaches so they don't outlive the test."""
    logger = logging.getLogger("tasklist")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for h in list(logger.handlers):
        if h not in handlers:
            logger.removeHandler(h)
            h.close()
    logger.setLevel(level)
