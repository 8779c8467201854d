"""
Task JSON API.

Every response uses the ApiEnvelope shape: {success, data, error, message, total}.
Errors are raised as HTTPException and rendered into the envelope by the
handlers registered in src.api.main.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from src.api.deps import get_task_store, require_task_id
from src.api.schemas import (
    ApiEnvelope,
    TaskCreateRequest,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdateRequest,
)
from src.components.tasks import (
    CreateTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListTasksInput,
    TaskOperationOutput,
    TaskStore,
    ToggleTaskInput,
    UpdateTaskInput,
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
from src.domain.entities import Task, TaskStatusFilter

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Helpers ---


def _respond(envelope: ApiEnvelope, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_content())


def _raise_for_failure(result: TaskOperationOutput) -> Task:
    """Map a failed operation to 404/400, else return its task."""
    if not result.success:
        if result.not_found:
            raise HTTPException(status_code=404, detail="task not found")
        message = result.errors[0].message if result.errors else "invalid request"
        logger.warning("Rejected task input: %s", message)
        raise HTTPException(status_code=400, detail=message)

    task = result.task
    assert task is not None  # Success guarantees task is not None
    return task


# --- Routes ---


@router.get("/tasks")
def list_tasks(
    status: TaskStatusFilter = Query(default="all"),
    store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    """List tasks in insertion order."""
    result = run_list(store, ListTasksInput(status=status))
    return _respond(
        ApiEnvelope(
            success=True,
            data=[TaskResponse.from_task(task).to_payload() for task in result.tasks],
            total=result.total,
        )
    )


@router.post("/tasks", status_code=201)
def create_task(
    data: TaskCreateRequest | None = None,
    store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    """Create a new task."""
    result = run_create(CreateTaskInput(title=data.title if data else None), store)
    task = _raise_for_failure(result)

    logger.info("Created task %s", task.id)
    return _respond(
        ApiEnvelope(
            success=True,
            message="task created",
            data=TaskResponse.from_task(task).to_payload(),
        ),
        status_code=201,
    )


@router.post("/tasks/complete-all")
def complete_all_tasks(store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    """Mark every task done."""
    result = run_complete_all(store)
    return _respond(
        ApiEnvelope(
            success=True,
            message="all tasks completed",
            data={"affected": result.affected},
        )
    )


@router.post("/tasks/clear-completed")
def clear_completed_tasks(store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    """Remove every done task."""
    result = run_clear_completed(store)
    if result.affected:
        logger.info("Cleared %d completed tasks", result.affected)
    return _respond(
        ApiEnvelope(
            success=True,
            message="completed tasks cleared",
            data={"removed": result.affected},
        )
    )


@router.get("/tasks/{task_id}")
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    """Get a task by ID."""
    result = run_get(GetTaskInput(task_id=require_task_id(task_id)), store)
    task = _raise_for_failure(result)
    return _respond(ApiEnvelope(success=True, data=TaskResponse.from_task(task).to_payload()))


@router.put("/tasks/{task_id}")
def update_task(
    task_id: str,
    data: TaskUpdateRequest | None = None,
    store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    """Update a task's title and/or done flag."""
    data = data or TaskUpdateRequest()
    input_data = UpdateTaskInput(
        task_id=require_task_id(task_id),
        title=data.title,
        done=data.done,
    )
    task = _raise_for_failure(run_update(input_data, store))
    return _respond(
        ApiEnvelope(
            success=True,
            message="task updated",
            data=TaskResponse.from_task(task).to_payload(),
        )
    )


@router.delete("/tasks/{task_id}")
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    """Delete a task and return the removed record."""
    result = run_delete(DeleteTaskInput(task_id=require_task_id(task_id)), store)
    task = _raise_for_failure(result)

    logger.info("Deleted task %s", task.id)
    return _respond(
        ApiEnvelope(
            success=True,
            message="task deleted",
            data=TaskResponse.from_task(task).to_payload(),
        )
    )


@router.post("/tasks/{task_id}/toggle")
def toggle_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    """Flip a task's done flag. Unknown ids are a 404 on this surface."""
    result = run_toggle(ToggleTaskInput(task_id=require_task_id(task_id)), store)
    task = _raise_for_failure(result)
    return _respond(
        ApiEnvelope(
            success=True,
            message="task toggled",
            data=TaskResponse.from_task(task).to_payload(),
        )
    )


@router.get("/stats")
def get_stats(store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    """Aggregate counts and completion rate."""
    result = run_stats(store)
    return _respond(
        ApiEnvelope(success=True, data=TaskStatsResponse.from_stats(result.stats).to_payload())
    )
