# src/taskflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app, passed in where needed.
- Nothing is read at import time; get_settings() builds it on first use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKFLOW"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path
    session_key: str

    # ---- Loading ----
    load_delay_seconds: float

    # ---- Views ----
    due_soon_days: int
    tasks_per_page: int
    projects_per_page: int
    employees_per_page: int

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(override=False)

        app_name = _env(_k("APP_NAME"), "taskflow") or "taskflow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskflow"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "local_storage.json")
        session_key = _env(_k("SESSION_KEY"), "currentUser") or "currentUser"

        load_delay_seconds = max(0.0, _env_float(_k("LOAD_DELAY_SECONDS"), 1.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            storage_path=storage_path,
            session_key=session_key,
            load_delay_seconds=load_delay_seconds,
            due_soon_days=max(1, _env_int(_k("DUE_SOON_DAYS"), 7)),
            tasks_per_page=max(1, _env_int(_k("TASKS_PER_PAGE"), 12)),
            projects_per_page=max(1, _env_int(_k("PROJECTS_PER_PAGE"), 9)),
            employees_per_page=max(1, _env_int(_k("EMPLOYEES_PER_PAGE"), 12)),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
