from datetime import datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.clock import FixedClock
from src.api.main import create_app
from src.components.tasks import TaskStore
from src.domain.entities import SeedTask
from src.rules.models import Rules

FIXED_NOW = datetime(2025, 1, 1, 9, 30, 0)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def store(clock: FixedClock) -> TaskStore:
    """Empty store on a frozen clock."""
    return TaskStore(clock=clock)


@pytest.fixture
def seeded_store(store: TaskStore) -> TaskStore:
    """
    Store holding [{1, A, pending}, {2, B, pending}, {3, C, done}].
    """
    store.load_seed(
        [
            SeedTask(title="A", done=False),
            SeedTask(title="B", done=False),
            SeedTask(title="C", done=True),
        ]
    )
    return store


@pytest.fixture
def rules() -> Rules:
    return Rules()


@pytest.fixture
def app(rules: Rules, seeded_store: TaskStore) -> FastAPI:
    return create_app(rules=rules, store=seeded_store)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client that answers 500s instead of re-raising them."""
    return TestClient(app, raise_server_exceptions=False)
