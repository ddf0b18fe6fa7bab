# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage, store, session gate and queries into AppState,
- builds the initial-data loader.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.loader import DataLoader
from ..core.ports import KeyValueStorage, SeedSource
from ..core.queries import QueryService
from ..core.session import SessionGate
from ..core.state import AppState
from ..core.store import TaskStore
from ..data.seed import StaticSeedSource
from ..storage.local_storage import FileStorage

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage: KeyValueStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and storage injectable makes the app easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = FileStorage(settings.storage_path)

    store = TaskStore()
    session = SessionGate(store, storage, key=settings.session_key)

    return AppState(
        settings=settings,
        store=store,
        session=session,
        queries=QueryService(store),
    )


def create_loader(state: AppState, source: SeedSource | None = None) -> DataLoader:
    delay = float(getattr(state.settings, "load_delay_seconds", 1.0))
    return DataLoader(state.store, source or StaticSeedSource(), delay_seconds=delay)
