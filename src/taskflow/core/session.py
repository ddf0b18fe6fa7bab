# src/taskflow/core/session.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from .models import CurrentUser, Employee, Role
from .ports import AuthStrategy, KeyValueStorage
from .store import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "currentUser"


class DemoAuthStrategy:
    """
    Development/demo authentication: NO credential check.

    The employee is looked up by exact email and the role is taken as given
    by the caller. Swap in a real AuthStrategy for anything beyond demos.
    """

    def authenticate(
        self,
        email: str,
        role: Role,
        employees: Sequence[Employee],
    ) -> CurrentUser | None:
        employee = next((e for e in employees if e.email == email), None)
        if employee is None:
            return None
        return CurrentUser.from_employee(employee, role)


class SessionGate:
    """
    Anonymous/authenticated session backed by one persisted record.

    The current user itself lives in the store (SET_CURRENT_USER) so that
    queries can read it from state. This class only handles auth and the
    storage record.
    """

    def __init__(
        self,
        store: TaskStore,
        storage: KeyValueStorage,
        *,
        auth: AuthStrategy | None = None,
        key: str = DEFAULT_SESSION_KEY,
    ) -> None:
        self._store = store
        self._storage = storage
        self._auth: AuthStrategy = auth if auth is not None else DemoAuthStrategy()
        self._key = key
        self._restore()

    def _restore(self) -> None:
        raw = self._storage.get_item(self._key)
        if raw is None:
            return

        try:
            user = CurrentUser.from_dict(json.loads(raw))
        except (ValueError, TypeError) as e:
            # json.JSONDecodeError is a ValueError too.
            logger.warning("Dropping corrupt session record key=%s: %s", self._key, e)
            self._storage.remove_item(self._key)
            return

        self._store.set_current_user(user)
        logger.info("Session restored user_id=%s role=%s", user.id, user.role.value)

    @property
    def current_user(self) -> CurrentUser | None:
        return self._store.state.current_user

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def is_admin(self) -> bool:
        user = self.current_user
        return user is not None and user.role is Role.ADMIN

    def login(self, email: str, role: Role | str) -> CurrentUser | None:
        """Return the new CurrentUser, or None when no employee has this email."""
        session_role = Role(role)
        user = self._auth.authenticate(email, session_role, self._store.state.employees)
        if user is None:
            logger.info("Login failed: no employee with email=%s", email)
            return None

        self._storage.set_item(self._key, json.dumps(user.to_dict(), ensure_ascii=False))
        self._store.set_current_user(user)
        logger.info("Logged in user_id=%s role=%s", user.id, user.role.value)
        return user

    def logout(self) -> None:
        self._storage.remove_item(self._key)
        self._store.set_current_user(None)
        logger.info("Logged out")


def register_employee(
    store: TaskStore,
    session: SessionGate,
    *,
    name: str,
    email: str,
) -> CurrentUser | None:
    """Create an employee account and sign it in with the employee role."""
    store.add_employee(name=name, email=email, role="employee", avatar="")
    return session.login(email.strip(), Role.EMPLOYEE)
