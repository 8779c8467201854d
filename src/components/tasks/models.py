"""
Tasks component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.domain.entities import Task, TaskStats, TaskStatusFilter

# --- Validation Errors ---


@dataclass(frozen=True)
class TaskValidationError:
    """Task operation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateTaskInput:
    """Input for creating a task."""

    title: Any


@dataclass(frozen=True)
class ListTasksInput:
    """Input for listing tasks."""

    status: TaskStatusFilter = "all"


@dataclass(frozen=True)
class GetTaskInput:
    """Input for getting a task."""

    task_id: int


@dataclass(frozen=True)
class UpdateTaskInput:
    """Input for updating a task. None means "leave unchanged"."""

    task_id: int
    title: Any = None
    done: Any = None


@dataclass(frozen=True)
class DeleteTaskInput:
    """Input for deleting a task."""

    task_id: int


@dataclass(frozen=True)
class ToggleTaskInput:
    """Input for toggling a task."""

    task_id: int


# --- Output Models ---


@dataclass(frozen=True)
class TaskOperationOutput:
    """Output from a single-task operation."""

    task: Task | None
    errors: tuple[TaskValidationError, ...]
    success: bool

    @property
    def not_found(self) -> bool:
        return any(err.code == "task_not_found" for err in self.errors)


@dataclass(frozen=True)
class TaskListOutput:
    """Output from list operation."""

    tasks: tuple[Task, ...]
    total: int


@dataclass(frozen=True)
class TaskBulkOutput:
    """Output from a bulk operation."""

    affected: int


@dataclass(frozen=True)
class TaskStatsOutput:
    """Output from stats operation."""

    stats: TaskStats
