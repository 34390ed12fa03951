"""Data models for tasklist."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class Task:
    """A single to-do item."""

    id: str
    text: str
    completed: bool = False

    def toggled(self) -> Task:
        """Return a copy with the completion flag flipped."""
        return replace(self, completed=not self.completed)

    def to_record(self) -> dict:
        """Convert to the persisted record shape."""
        return {"id": self.id, "text": self.text, "completed": self.completed}


class TaskFilter(str, Enum):
    """Which tasks the view shows."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: TaskFilter | str | None) -> TaskFilter | None:
        """Return the matching filter, or None for anything outside the enumeration."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    def matches(self, task: Task) -> bool:
        """Check whether a task is visible under this filter."""
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True


@dataclass(frozen=True)
class TaskCounts:
    """Counters shown alongside the list.

    ``active`` is derived, so ``active + completed == total`` always holds.
    """

    total: int = 0
    completed: int = 0

    @property
    def active(self) -> int:
        return self.total - self.completed

    @classmethod
    def of(cls, tasks: list[Task] | tuple[Task, ...]) -> TaskCounts:
        """Count a sequence of tasks."""
        return cls(total=len(tasks), completed=sum(1 for t in tasks if t.completed))


class TaskRecord(BaseModel):
    """Structural shape of one persisted task.

    Strict mode: no coercion, so ``"true"`` is not a boolean and ``1`` is
    not a string. Unknown fields are ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    id: str
    text: str
    completed: bool

    def to_task(self) -> Task:
        return Task(id=self.id, text=self.text, completed=self.completed)
