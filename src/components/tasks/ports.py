"""
Tasks component - Port interfaces.
"""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.entities import Task, TaskStats, TaskStatusFilter


class TaskStorePort(Protocol):
    """Store interface the component shell drives."""

    def create(self, title: Any) -> Task:
        """Create a task, raising InvalidTitleError on a blank title."""
        ...

    def list(self, status: TaskStatusFilter = "all") -> list[Task]:
        """List tasks in insertion order."""
        ...

    def get(self, task_id: int) -> Task:
        """Get task, raising TaskNotFoundError if absent."""
        ...

    def update(self, task_id: int, title: Any = None, done: Any = None) -> Task:
        """Update title and/or done."""
        ...

    def delete(self, task_id: int) -> Task:
        """Delete and return task."""
        ...

    def toggle(self, task_id: int) -> Task | None:
        """Flip done; None when absent."""
        ...

    def complete_all(self) -> int:
        """Mark every task done."""
        ...

    def clear_completed(self) -> int:
        """Remove done tasks."""
        ...

    def stats(self) -> TaskStats:
        """Aggregate counts."""
        ...
