"""
TaskStore - In-memory task collection.

Owns id assignment, title validation, completion state and statistics.

Functional Core - signals failures by raising, never logs.
"""

from __future__ import annotations

from collections.abc import Iterable
from threading import RLock
from typing import Any

from src.adapters.clock import SystemClock
from src.domain.entities import SeedTask, Task, TaskStats, TaskStatusFilter
from src.ports.clock import ClockPort

TITLE_REQUIRED_MESSAGE = "title must not be empty"

# --- Errors ---


class TaskStoreError(Exception):
    """Base class for task store failures."""


class InvalidTitleError(TaskStoreError):
    """Title is missing or blank after trimming."""

    def __init__(self, message: str = TITLE_REQUIRED_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class TaskNotFoundError(TaskStoreError):
    """No task carries the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


# --- Validation Functions ---


def normalize_title(title: Any) -> str:
    """Return the trimmed title, or raise InvalidTitleError."""
    if not isinstance(title, str) or not title.strip():
        raise InvalidTitleError()
    return title.strip()


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


# --- Task Store ---


class TaskStore:
    """
    In-memory task store.

    Every public method holds the store lock for its whole duration, so
    concurrent requests see each mutation as atomic. Returned tasks are
    snapshots; changing them does not touch the store.
    """

    def __init__(self, clock: ClockPort | None = None) -> None:
        self._clock = clock if clock is not None else SystemClock()
        self._tasks: list[Task] = []
        self._lock = RLock()

    def load_seed(self, entries: Iterable[SeedTask]) -> int:
        """Create one task per seed entry. Returns the number created."""
        count = 0
        with self._lock:
            for entry in entries:
                task = self._append(entry.title)
                task.done = entry.done
                count += 1
        return count

    def _next_id(self) -> int:
        if not self._tasks:
            return 1
        return max(task.id for task in self._tasks) + 1

    def _find(self, task_id: int) -> Task | None:
        return next((task for task in self._tasks if task.id == task_id), None)

    def _append(self, title: Any) -> Task:
        clean_title = normalize_title(title)
        with self._lock:
            task = Task(
                id=self._next_id(),
                title=clean_title,
                done=False,
                created_at=self._clock.now(),
            )
            self._tasks.append(task)
            return task

    def create(self, title: Any) -> Task:
        with self._lock:
            return self._append(title).model_copy()

    def list(self, status: TaskStatusFilter = "all") -> list[Task]:
        with self._lock:
            if status == "pending":
                return [task.model_copy() for task in self._tasks if not task.done]
            if status == "done":
                return [task.model_copy() for task in self._tasks if task.done]
            return [task.model_copy() for task in self._tasks]

    def get(self, task_id: int) -> Task:
        with self._lock:
            task = self._find(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            return task.model_copy()

    def update(self, task_id: int, title: Any = None, done: Any = None) -> Task:
        """
        Update title and/or done.

        A blank title rejects the whole update. A non-boolean done is ignored.
        """
        with self._lock:
            task = self._find(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)

            clean_title = normalize_title(title) if title is not None else None

            if clean_title is not None:
                task.title = clean_title
            if isinstance(done, bool):
                task.done = done
            return task.model_copy()

    def delete(self, task_id: int) -> Task:
        with self._lock:
            task = self._find(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            self._tasks.remove(task)
            return task.model_copy()

    def toggle(self, task_id: int) -> Task | None:
        """Flip done. Unknown ids are a no-op and return None."""
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return None
            task.done = not task.done
            return task.model_copy()

    def complete_all(self) -> int:
        with self._lock:
            for task in self._tasks:
                task.done = True
            return len(self._tasks)

    def clear_completed(self) -> int:
        with self._lock:
            remaining = [task for task in self._tasks if not task.done]
            removed = len(self._tasks) - len(remaining)
            self._tasks = remaining
            return removed

    def stats(self) -> TaskStats:
        with self._lock:
            total = len(self._tasks)
            completed = sum(1 for task in self._tasks if task.done)
        return TaskStats(
            total=total,
            completed=completed,
            pending=total - completed,
            completion_rate=completion_rate(completed, total),
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
