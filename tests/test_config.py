# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskflow.config import Settings

_VARS = (
    "TASKFLOW_APP_NAME",
    "TASKFLOW_LOG_LEVEL",
    "TASKFLOW_CONSOLE_ENABLED",
    "TASKFLOW_DATA_DIR",
    "TASKFLOW_STORAGE_PATH",
    "TASKFLOW_SESSION_KEY",
    "TASKFLOW_LOAD_DELAY_SECONDS",
    "TASKFLOW_DUE_SOON_DAYS",
    "TASKFLOW_TASKS_PER_PAGE",
    "TASKFLOW_PROJECTS_PER_PAGE",
    "TASKFLOW_EMPLOYEES_PER_PAGE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env(dotenv=False)
    assert s.app_name == "taskflow"
    assert s.console_enabled is True
    assert s.data_dir == Path(".local/taskflow")
    assert s.storage_path == Path(".local/taskflow/local_storage.json")
    assert s.session_key == "currentUser"
    assert s.load_delay_seconds == 1.0
    assert (s.tasks_per_page, s.projects_per_page, s.employees_per_page) == (12, 9, 12)
    assert s.due_soon_days == 7


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKFLOW_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKFLOW_CONSOLE_ENABLED", "no")
    monkeypatch.setenv("TASKFLOW_LOAD_DELAY_SECONDS", "0.25")
    monkeypatch.setenv("TASKFLOW_PROJECTS_PER_PAGE", "3")

    s = Settings.from_env(dotenv=False)
    assert s.data_dir == tmp_path
    assert s.storage_path == tmp_path / "local_storage.json"
    assert s.console_enabled is False
    assert s.load_delay_seconds == 0.25
    assert s.projects_per_page == 3


def test_bad_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKFLOW_TASKS_PER_PAGE", "lots")
    monkeypatch.setenv("TASKFLOW_LOAD_DELAY_SECONDS", "-5")
    monkeypatch.setenv("TASKFLOW_DUE_SOON_DAYS", "0")

    s = Settings.from_env(dotenv=False)
    assert s.tasks_per_page == 12
    assert s.load_delay_seconds == 0.0
    assert s.due_soon_days == 1
