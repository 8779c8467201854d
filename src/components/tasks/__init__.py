"""
Tasks component - In-memory task list with CRUD and completion tracking.
"""

from ._impl import (
    InvalidTitleError,
    TaskNotFoundError,
    TaskStore,
    TaskStoreError,
    completion_rate,
    normalize_title,
)
from .component import (
    run_clear_completed,
    run_complete_all,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_stats,
    run_toggle,
    run_update,
)
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

__all__ = [
    # Entry points
    "run_create",
    "run_list",
    "run_get",
    "run_update",
    "run_delete",
    "run_toggle",
    "run_complete_all",
    "run_clear_completed",
    "run_stats",
    # Input models
    "CreateTaskInput",
    "ListTasksInput",
    "GetTaskInput",
    "UpdateTaskInput",
    "DeleteTaskInput",
    "ToggleTaskInput",
    # Output models
    "TaskOperationOutput",
    "TaskListOutput",
    "TaskBulkOutput",
    "TaskStatsOutput",
    "TaskValidationError",
    # Ports
    "TaskStorePort",
    # Core
    "TaskStore",
    "TaskStoreError",
    "InvalidTitleError",
    "TaskNotFoundError",
    "normalize_title",
    "completion_rate",
]
