"""
Tasks component - Task list management.

Shell Layer - converts store exceptions into structured errors so the JSON
and HTML adapters share one validation path.
"""

from __future__ import annotations

from ._impl import InvalidTitleError, TaskNotFoundError
from .models import (
    CreateTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListTasksInput,
    TaskBulkOutput,
    TaskListOutput,
    TaskOperationOutput,
    TaskStatsOutput,
    TaskValidationError,
    ToggleTaskInput,
    UpdateTaskInput,
)
from .ports import TaskStorePort

# --- Error Conversion ---


def _title_error(exc: InvalidTitleError) -> TaskValidationError:
    return TaskValidationError(code="title_required", message=exc.message, field="title")


def _not_found_error(exc: TaskNotFoundError) -> TaskValidationError:
    return TaskValidationError(code="task_not_found", message=str(exc))


def _failed(error: TaskValidationError) -> TaskOperationOutput:
    return TaskOperationOutput(task=None, errors=(error,), success=False)


# --- Shell Layer Functions ---


def run_create(input_data: CreateTaskInput, store: TaskStorePort) -> TaskOperationOutput:
    """Create a new task."""
    try:
        task = store.create(input_data.title)
    except InvalidTitleError as e:
        return _failed(_title_error(e))
    return TaskOperationOutput(task=task, errors=(), success=True)


def run_list(store: TaskStorePort, input_data: ListTasksInput | None = None) -> TaskListOutput:
    """List tasks, optionally filtered by completion state."""
    status = input_data.status if input_data else "all"
    tasks = store.list(status)
    return TaskListOutput(tasks=tuple(tasks), total=len(tasks))


def run_get(input_data: GetTaskInput, store: TaskStorePort) -> TaskOperationOutput:
    """Get a task by ID."""
    try:
        task = store.get(input_data.task_id)
    except TaskNotFoundError as e:
        return _failed(_not_found_error(e))
    return TaskOperationOutput(task=task, errors=(), success=True)


def run_update(input_data: UpdateTaskInput, store: TaskStorePort) -> TaskOperationOutput:
    """Update an existing task."""
    try:
        task = store.update(input_data.task_id, title=input_data.title, done=input_data.done)
    except TaskNotFoundError as e:
        return _failed(_not_found_error(e))
    except InvalidTitleError as e:
        return _failed(_title_error(e))
    return TaskOperationOutput(task=task, errors=(), success=True)


def run_delete(input_data: DeleteTaskInput, store: TaskStorePort) -> TaskOperationOutput:
    """Delete a task, returning the removed record."""
    try:
        task = store.delete(input_data.task_id)
    except TaskNotFoundError as e:
        return _failed(_not_found_error(e))
    return TaskOperationOutput(task=task, errors=(), success=True)


def run_toggle(input_data: ToggleTaskInput, store: TaskStorePort) -> TaskOperationOutput:
    """
    Toggle a task's done flag.

    The store treats unknown ids as a no-op; here that is reported as a
    task_not_found error and callers decide whether to surface it.
    """
    task = store.toggle(input_data.task_id)
    if task is None:
        return _failed(
            TaskValidationError(
                code="task_not_found",
                message=f"Task with ID {input_data.task_id} not found",
            )
        )
    return TaskOperationOutput(task=task, errors=(), success=True)


def run_complete_all(store: TaskStorePort) -> TaskBulkOutput:
    """Mark every task done."""
    return TaskBulkOutput(affected=store.complete_all())


def run_clear_completed(store: TaskStorePort) -> TaskBulkOutput:
    """Remove every done task."""
    return TaskBulkOutput(affected=store.clear_completed())


def run_stats(store: TaskStorePort) -> TaskStatsOutput:
    """Aggregate task counts."""
    return TaskStatsOutput(stats=store.stats())
