import os
from functools import lru_cache
from pathlib import Path

from fastapi import HTTPException, Request

from src.components.tasks import TaskStore
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("TASKS_RULES_PATH", str(self.base_dir / "rules.yaml")))
        self.host_override = os.environ.get("TASKS_HOST")
        port = os.environ.get("TASKS_PORT")
        self.port_override = int(port) if port else None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- App State ---
# The app factory owns the single TaskStore and Rules instance; routes
# reach them through request.app.state.


def get_task_store(request: Request) -> TaskStore:
    store: TaskStore | None = getattr(request.app.state, "task_store", None)
    if store is None:
        raise RuntimeError("Task store not initialised on application state")
    return store


def get_rules(request: Request) -> Rules:
    rules: Rules | None = getattr(request.app.state, "rules", None)
    return rules if rules is not None else Rules()


# --- Path Parsing ---


def parse_task_id(raw: str) -> int | None:
    """Parse a path id; anything but a positive integer yields None."""
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value > 0 else None


def require_task_id(raw: str) -> int:
    """Parse a path id or raise 404, since no task can match it."""
    task_id = parse_task_id(raw)
    if task_id is None:
        raise HTTPException(status_code=404, detail="task not found")
    return task_id
