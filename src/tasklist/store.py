"""Task store - the authoritative in-memory task list and filter.

Every mutation follows the same sequence: change state, save the full list,
then notify observers with a fresh snapshot. Filter changes skip the save
because the filter is session-only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from tasklist.ids import IdGenerator
from tasklist.models import Task, TaskCounts, TaskFilter
from tasklist.persistence import TaskPersistence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    """What a view needs to render after a change."""

    visible: tuple[Task, ...]
    counts: TaskCounts
    filter: TaskFilter

    @property
    def empty(self) -> bool:
        """True when nothing is visible under the current filter."""
        return not self.visible


Observer = Callable[[StoreSnapshot], None]


class TaskStore:
    """Holds the task list (newest first) and the active filter."""

    def __init__(
        self,
        persistence: TaskPersistence,
        tasks: list[Task] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._persistence = persistence
        self._tasks: list[Task] = list(tasks or [])
        self._filter = TaskFilter.ALL
        self._new_id = id_factory or IdGenerator()
        self._observers: list[Observer] = []

    @classmethod
    def open(
        cls,
        persistence: TaskPersistence,
        id_factory: Callable[[], str] | None = None,
    ) -> TaskStore:
        """Create a store hydrated from persistence."""
        return cls(persistence, tasks=persistence.load(), id_factory=id_factory)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def filter(self) -> TaskFilter:
        return self._filter

    def add_task(self, text: str) -> Task | None:
        """Add a task to the front of the list.

        Blank text is ignored: nothing is created, saved or rendered.
        """
        trimmed = text.strip()
        if not trimmed:
            return None

        task = Task(id=self._new_id(), text=trimmed, completed=False)
        self._tasks.insert(0, task)
        self._commit()
        return task

    def delete_task(self, task_id: str) -> None:
        """Remove the task with this id, if there is one."""
        self._tasks = [task for task in self._tasks if task.id != task_id]
        self._commit()

    def toggle_complete(self, task_id: str) -> None:
        """Flip the completion flag of the task with this id."""
        self._tasks = [task.toggled() if task.id == task_id else task for task in self._tasks]
        self._commit()

    def filter_tasks(self, filter_type: TaskFilter | str) -> None:
        """Change the active filter. Unknown values are ignored."""
        parsed = TaskFilter.parse(filter_type)
        if parsed is None:
            logger.debug("Ignoring unknown filter %r", filter_type)
            return

        self._filter = parsed
        self._notify()

    def counts(self) -> TaskCounts:
        return TaskCounts.of(self._tasks)

    # Name kept from the view contract; counts are derived, never stored.
    update_counter = counts

    def visible_tasks(self) -> tuple[Task, ...]:
        """Tasks matching the current filter, newest first."""
        return tuple(task for task in self._tasks if self._filter.matches(task))

    def is_empty_view(self) -> bool:
        return not self.visible_tasks()

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            visible=self.visible_tasks(),
            counts=self.counts(),
            filter=self._filter,
        )

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a function that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _commit(self) -> None:
        self._persistence.save(self._tasks)
        self._notify()

    def _notify(self) -> None:
        if not self._observers:
            return

        snapshot = self.snapshot()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("View observer %r failed", observer)
