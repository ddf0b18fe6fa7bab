# src/taskflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .queries import QueryService
from .session import SessionGate
from .store import TaskStore


@dataclass
class AppState:
    # Settings object (real Settings or a test namespace with the same fields).
    settings: object

    store: TaskStore
    session: SessionGate
    queries: QueryService
