# src/taskflow/core/queries.py

from __future__ import annotations

"""
Role-aware read functions.

Every read is access-controlled here rather than in the store:
- admin sees everything,
- an authenticated employee sees tasks assigned to them and projects
  whose team includes them,
- an anonymous session sees nothing.

Nothing is cached; each call recomputes from the store's current state.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from .models import CurrentUser, Employee, Priority, Project, Role, Status, Task
from .store import TaskStore

UNASSIGNED = "Unassigned"


@dataclass(slots=True, frozen=True)
class SearchResults:
    tasks: tuple[Task, ...]
    projects: tuple[Project, ...]


@dataclass(slots=True, frozen=True)
class ProjectProgress:
    total: int
    completed: int
    percent: int


@dataclass(slots=True, frozen=True)
class DashboardStats:
    total_tasks: int
    tasks_by_status: dict[Status, int]
    total_projects: int
    completed_projects: int
    in_progress_projects: int
    team_size: int
    due_soon: int
    recent_projects: tuple[Project, ...]
    active_tasks: tuple[Task, ...]


def _contains(haystack: str, needle: str) -> bool:
    return needle in (haystack or "").lower()


class QueryService:
    def __init__(self, store: TaskStore) -> None:
        self._store = store

    # ---- session helpers ----

    def _user(self) -> CurrentUser | None:
        return self._store.state.current_user

    def _is_admin(self) -> bool:
        user = self._user()
        return user is not None and user.role is Role.ADMIN

    def _may_view_employee(self, employee_id: str) -> bool:
        user = self._user()
        if user is None:
            return False
        return user.role is Role.ADMIN or user.id == employee_id

    # ---- core reads ----

    def tasks_by_project(self, project_id: str) -> list[Task]:
        user = self._user()
        if user is None:
            return []
        tasks = [t for t in self._store.state.tasks if t.project_id == project_id]
        if user.role is Role.ADMIN:
            return tasks
        return [t for t in tasks if t.assignee_id == user.id]

    def tasks_by_employee(self, employee_id: str) -> list[Task]:
        if not self._may_view_employee(employee_id):
            return []
        return [t for t in self._store.state.tasks if t.assignee_id == employee_id]

    def projects_by_employee(self, employee_id: str) -> list[Project]:
        if not self._may_view_employee(employee_id):
            return []
        return [p for p in self._store.state.projects if employee_id in p.team_ids]

    def visible_tasks(self) -> list[Task]:
        user = self._user()
        if user is None:
            return []
        if user.role is Role.ADMIN:
            return list(self._store.state.tasks)
        return self.tasks_by_employee(user.id)

    def visible_projects(self) -> list[Project]:
        user = self._user()
        if user is None:
            return []
        if user.role is Role.ADMIN:
            return list(self._store.state.projects)
        return self.projects_by_employee(user.id)

    def search(self, query: str) -> SearchResults:
        """Case-insensitive substring search, results kept in store order."""
        q = (query or "").strip().lower()
        tasks = [
            t for t in self.visible_tasks()
            if _contains(t.title, q) or _contains(t.description, q)
        ]
        projects = [
            p for p in self.visible_projects()
            if _contains(p.name, q) or _contains(p.description, q)
        ]
        return SearchResults(tasks=tuple(tasks), projects=tuple(projects))

    # ---- list pages ----

    def filter_tasks(
        self,
        *,
        query: str = "",
        status: Status | str | None = None,
        priority: Priority | str | None = None,
        project_id: str | None = None,
        assignee_id: str | None = None,
    ) -> list[Task]:
        """Visible tasks narrowed by every given filter, earliest due date first."""
        tasks = list(self.search(query).tasks) if query else self.visible_tasks()

        if status is not None:
            wanted_status = Status(status)
            tasks = [t for t in tasks if t.status is wanted_status]
        if priority is not None:
            wanted_priority = Priority(priority)
            tasks = [t for t in tasks if t.priority is wanted_priority]
        if project_id is not None:
            tasks = [t for t in tasks if t.project_id == project_id]
        if assignee_id is not None:
            tasks = [t for t in tasks if t.assignee_id == assignee_id]

        tasks.sort(key=lambda t: t.due_date)
        return tasks

    def filter_projects(
        self,
        *,
        query: str = "",
        status: Status | str | None = None,
    ) -> list[Project]:
        """Visible projects narrowed by query/status, latest start date first."""
        projects = list(self.search(query).projects) if query else self.visible_projects()
        if status is not None:
            wanted = Status(status)
            projects = [p for p in projects if p.status is wanted]
        projects.sort(key=lambda p: p.start_date, reverse=True)
        return projects

    def filter_employees(self, *, query: str = "") -> list[Employee]:
        if self._user() is None:
            return []
        q = (query or "").strip().lower()
        employees = [
            e for e in self._store.state.employees
            if not q or _contains(e.name, q) or _contains(e.role, q) or _contains(e.email, q)
        ]
        employees.sort(key=lambda e: e.name.lower())
        return employees

    def due_soon_tasks(self, *, days: int = 7, today: date | None = None) -> list[Task]:
        """Open visible tasks due after today and within the next `days` days."""
        if today is None:
            today = self._store.now().date()
        horizon = today + timedelta(days=days)
        tasks = [
            t for t in self.visible_tasks()
            if t.status is not Status.DONE and today < t.due_date <= horizon
        ]
        tasks.sort(key=lambda t: t.due_date)
        return tasks

    # ---- project detail ----

    def project_progress(self, project_id: str) -> ProjectProgress:
        tasks = self.tasks_by_project(project_id)
        total = len(tasks)
        completed = sum(1 for t in tasks if t.status is Status.DONE)
        percent = round(completed / total * 100) if total else 0
        return ProjectProgress(total=total, completed=completed, percent=percent)

    def team_members(self, project: Project) -> list[Employee]:
        """Resolve team ids in team order; ids of missing employees are skipped."""
        members = []
        for employee_id in project.team_ids:
            employee = self.resolve_employee(employee_id)
            if employee is not None:
                members.append(employee)
        return members

    # ---- weak references ----

    def resolve_employee(self, employee_id: str) -> Employee | None:
        return self._store.get_employee(employee_id)

    def resolve_project(self, project_id: str) -> Project | None:
        return self._store.get_project(project_id)

    def assignee_name(self, task: Task) -> str:
        employee = self.resolve_employee(task.assignee_id)
        return employee.name if employee is not None else UNASSIGNED

    # ---- dashboard ----

    def dashboard_stats(
        self,
        *,
        due_soon_days: int = 7,
        recent_limit: int = 3,
        active_limit: int = 8,
    ) -> DashboardStats:
        tasks = self.visible_tasks()
        projects = self.visible_projects()

        by_status = {s: 0 for s in Status}
        for t in tasks:
            by_status[t.status] += 1

        recent = sorted(
            (p for p in projects if p.status is not Status.DONE),
            key=lambda p: p.start_date,
            reverse=True,
        )[:recent_limit]
        active = sorted(
            (t for t in tasks if t.status is not Status.DONE),
            key=lambda t: t.created_at,
            reverse=True,
        )[:active_limit]

        return DashboardStats(
            total_tasks=len(tasks),
            tasks_by_status=by_status,
            total_projects=len(projects),
            completed_projects=sum(1 for p in projects if p.status is Status.DONE),
            in_progress_projects=sum(1 for p in projects if p.status is Status.IN_PROGRESS),
            team_size=len(self._store.state.employees),
            due_soon=len(self.due_soon_tasks(days=due_soon_days)),
            recent_projects=tuple(recent),
            active_tasks=tuple(active),
        )
