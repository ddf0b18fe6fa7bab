# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations,
so storage backends, auth strategies and data sources stay swappable
and tests can pass in small fakes.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .models import CurrentUser, Employee, Project, Role, Task


class KeyValueStorage(Protocol):
    """Browser-localStorage-like text store: string keys, string values."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class AuthStrategy(Protocol):
    """
    Turns login input into a CurrentUser.

    Returns None when the credentials do not match anyone.
    """

    def authenticate(
            self,
            email: str,
            role: Role,
            employees: Sequence[Employee],
    ) -> CurrentUser | None: ...


@dataclass(slots=True, frozen=True)
class SeedData:
    employees: tuple[Employee, ...]
    projects: tuple[Project, ...]
    tasks: tuple[Task, ...]


class SeedSource(Protocol):
    """Supplies the initial dataset once at startup."""

    def load(self) -> SeedData: ...
