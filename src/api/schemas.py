from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import Task, TaskStats

# --- Requests ---


class TaskCreateRequest(BaseModel):
    title: str | None = None


class TaskUpdateRequest(BaseModel):
    title: str | None = None
    # Non-boolean values are accepted here and ignored by the store
    done: Any = None


# --- Responses ---


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    done: bool
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(id=task.id, title=task.title, done=task.done, created_at=task.created_at)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class TaskStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    completed: int
    pending: int
    completion_rate: int = Field(serialization_alias="completionRate")

    @classmethod
    def from_stats(cls, stats: TaskStats) -> "TaskStatsResponse":
        return cls(
            total=stats.total,
            completed=stats.completed,
            pending=stats.pending,
            completion_rate=stats.completion_rate,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ApiEnvelope(BaseModel):
    """Shape shared by every JSON API response."""

    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None
    total: int | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
