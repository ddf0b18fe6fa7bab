# src/taskflow/core/store.py

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import UTC, date, datetime

from . import actions
from .actions import Action
from .models import CurrentUser, Employee, Priority, Project, Status, Task, dedupe_ids
from .reducer import StoreState, reduce

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(n: int) -> str:
    if n <= 0:
        return "0"
    out = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def generate_id() -> str:
    """Millisecond timestamp in base 36 followed by a random base-36 suffix."""
    return _to_base36(int(time.time() * 1000)) + _to_base36(random.getrandbits(52))


def utc_now() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """
    In-memory store for tasks, projects and employees.

    Owns the current StoreState and funnels every change through reduce().
    The clock and id factory are injectable so tests can pin them.
    """

    def __init__(
        self,
        *,
        initial: StoreState | None = None,
        clock: Clock = utc_now,
        id_factory: IdFactory = generate_id,
    ) -> None:
        self._state = initial if initial is not None else StoreState()
        self._clock = clock
        self._new_id = id_factory

    @property
    def state(self) -> StoreState:
        return self._state

    def now(self) -> datetime:
        return self._clock()

    def dispatch(self, action: Action) -> StoreState:
        prev = self._state
        self._state = reduce(prev, action)
        if self._state is prev:
            logger.debug("Action %s left state unchanged", action.type.value)
        return self._state

    # ---- lookups ----

    def get_task(self, task_id: str) -> Task | None:
        return next((t for t in self._state.tasks if t.id == task_id), None)

    def get_project(self, project_id: str) -> Project | None:
        return next((p for p in self._state.projects if p.id == project_id), None)

    def get_employee(self, employee_id: str) -> Employee | None:
        return next((e for e in self._state.employees if e.id == employee_id), None)

    # ---- bulk / flags ----

    def set_collections(
        self,
        *,
        employees: Iterable[Employee],
        projects: Iterable[Project],
        tasks: Iterable[Task],
    ) -> None:
        self.dispatch(actions.set_employees(employees))
        self.dispatch(actions.set_projects(projects))
        self.dispatch(actions.set_tasks(tasks))

    def set_current_user(self, user: CurrentUser | None) -> None:
        self.dispatch(actions.set_current_user(user))

    def set_loading(self, is_loading: bool) -> None:
        self.dispatch(actions.set_loading(is_loading))

    def set_error(self, message: str | None) -> None:
        self.dispatch(actions.set_error(message))

    # ---- tasks ----

    def add_task(
        self,
        *,
        title: str,
        description: str = "",
        status: Status | str = Status.TODO,
        priority: Priority | str = Priority.MEDIUM,
        project_id: str = "",
        assignee_id: str = "",
        due_date: date,
        completed_at: datetime | None = None,
    ) -> Task:
        if not title or not title.strip():
            raise ValueError("title is required")

        task = Task(
            id=self._new_id(),
            title=title.strip(),
            description=description,
            status=Status(status),
            priority=Priority(priority),
            project_id=project_id,
            assignee_id=assignee_id,
            due_date=due_date,
            created_at=self._clock(),
            completed_at=completed_at,
        )
        self.dispatch(actions.add_task(task))
        logger.debug("Task added id=%s project=%s assignee=%s", task.id, project_id, assignee_id)
        return task

    def update_task(self, task: Task) -> bool:
        """Replace the task with the same id. completed_at is the caller's job."""
        prev = self._state
        return self.dispatch(actions.update_task(task)) is not prev

    def delete_task(self, task_id: str) -> bool:
        prev = self._state
        return self.dispatch(actions.delete_task(task_id)) is not prev

    # ---- projects ----

    def add_project(
        self,
        *,
        name: str,
        description: str = "",
        start_date: date,
        end_date: date,
        status: Status | str = Status.TODO,
        team_ids: Iterable[str] = (),
    ) -> Project:
        if not name or not name.strip():
            raise ValueError("name is required")

        project = Project(
            id=self._new_id(),
            name=name.strip(),
            description=description,
            start_date=start_date,
            end_date=end_date,
            status=Status(status),
            team_ids=dedupe_ids(team_ids),
        )
        self.dispatch(actions.add_project(project))
        logger.debug("Project added id=%s team=%s", project.id, list(project.team_ids))
        return project

    def update_project(self, project: Project) -> bool:
        prev = self._state
        clean = replace(project, team_ids=dedupe_ids(project.team_ids))
        return self.dispatch(actions.update_project(clean)) is not prev

    def delete_project(self, project_id: str) -> bool:
        prev = self._state
        return self.dispatch(actions.delete_project(project_id)) is not prev

    def toggle_team_member(self, project_id: str, employee_id: str) -> Project | None:
        """Add employee_id to the project's team, or remove it if already there."""
        project = self.get_project(project_id)
        if project is None:
            return None

        if employee_id in project.team_ids:
            team_ids = tuple(i for i in project.team_ids if i != employee_id)
        else:
            team_ids = project.team_ids + (employee_id,)

        updated = replace(project, team_ids=team_ids)
        self.update_project(updated)
        return updated

    # ---- employees ----

    def add_employee(
        self,
        *,
        name: str,
        email: str,
        role: str = "",
        avatar: str = "",
    ) -> Employee:
        if not name or not name.strip():
            raise ValueError("name is required")
        if not email or not email.strip():
            raise ValueError("email is required")

        employee = Employee(
            id=self._new_id(),
            name=name.strip(),
            role=role,
            avatar=avatar,
            email=email.strip(),
        )
        self.dispatch(actions.add_employee(employee))
        logger.debug("Employee added id=%s email=%s", employee.id, employee.email)
        return employee

    def update_employee(self, employee: Employee) -> bool:
        prev = self._state
        return self.dispatch(actions.update_employee(employee)) is not prev

    def delete_employee(self, employee_id: str) -> bool:
        prev = self._state
        return self.dispatch(actions.delete_employee(employee_id)) is not prev
