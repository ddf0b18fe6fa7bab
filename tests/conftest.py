# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.core.queries import QueryService
from taskflow.core.reducer import StoreState
from taskflow.core.session import SessionGate
from taskflow.core.state import AppState
from taskflow.core.store import TaskStore
from taskflow.data.seed import EMPLOYEES, PROJECTS, TASKS
from taskflow.storage.local_storage import MemoryStorage

from .fakes import NOW


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="taskflow-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        storage_path=tmp_path / "local_storage.json",
        session_key="currentUser",
        load_delay_seconds=0.0,
        due_soon_days=7,
        tasks_per_page=12,
        projects_per_page=9,
        employees_per_page=12,
    )


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store() -> TaskStore:
    """Store preloaded with the demo dataset and a fixed clock."""
    seeded = StoreState(
        tasks=TASKS,
        projects=PROJECTS,
        employees=EMPLOYEES,
        is_loading=False,
    )
    return TaskStore(initial=seeded, clock=lambda: NOW)


@pytest.fixture()
def session(store: TaskStore, storage: MemoryStorage) -> SessionGate:
    return SessionGate(store, storage)


@pytest.fixture()
def queries(store: TaskStore) -> QueryService:
    return QueryService(store)


@pytest.fixture()
def state(settings, store, session, queries) -> AppState:
    return AppState(settings=settings, store=store, session=session, queries=queries)
