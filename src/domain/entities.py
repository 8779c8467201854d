from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# --- Enums / Literals ---
TaskStatusFilter = Literal["all", "pending", "done"]

# --- Tasks ---


class Task(BaseModel):
    id: int = Field(gt=0)
    title: str = Field(min_length=1)
    done: bool = False
    created_at: datetime = Field(default_factory=datetime.now)


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: int = Field(default=0, ge=0, le=100)


class SeedTask(BaseModel):
    title: str
    done: bool = False
