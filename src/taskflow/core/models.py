# src/taskflow/core/models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import StrEnum


class Status(StrEnum):
    """Lifecycle status shared by tasks and projects."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Role(StrEnum):
    """Session role. Not the same thing as Employee.role (a job title)."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


_STATUS_LABELS = {
    Status.TODO: "To Do",
    Status.IN_PROGRESS: "In Progress",
    Status.REVIEW: "In Review",
    Status.DONE: "Completed",
}


@dataclass(slots=True, frozen=True)
class Employee:
    id: str
    name: str
    role: str
    avatar: str
    email: str


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    title: str
    description: str
    status: Status
    priority: Priority
    project_id: str
    assignee_id: str
    due_date: date
    created_at: datetime
    completed_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class Project:
    id: str
    name: str
    description: str
    start_date: date
    end_date: date
    status: Status
    team_ids: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class CurrentUser:
    """Session-scoped projection of an Employee plus the self-declared role."""

    id: str
    name: str
    role: Role
    email: str
    avatar: str

    @classmethod
    def from_employee(cls, employee: Employee, role: Role) -> CurrentUser:
        return cls(
            id=employee.id,
            name=employee.name,
            role=role,
            email=employee.email,
            avatar=employee.avatar,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "email": self.email,
            "avatar": self.avatar,
        }

    @classmethod
    def from_dict(cls, data: object) -> CurrentUser:
        """
        Rebuild a user from its persisted dict form.

        Raises ValueError when the payload is not a dict of five strings
        or the role is unknown.
        """
        if not isinstance(data, dict):
            raise ValueError("current user payload must be an object")
        fields = ("id", "name", "role", "email", "avatar")
        for name in fields:
            if not isinstance(data.get(name), str):
                raise ValueError(f"current user field {name!r} missing or not a string")
        if not data["id"]:
            raise ValueError("current user id is empty")
        return cls(
            id=data["id"],
            name=data["name"],
            role=Role(data["role"]),
            email=data["email"],
            avatar=data["avatar"],
        )


def with_status(task: Task, status: Status | str, now: datetime) -> Task:
    """
    Return a copy of task moved to status.

    completed_at is stamped only on a transition into DONE. Leaving DONE keeps
    the old completed_at.
    """
    new_status = Status(status)
    completed_at = task.completed_at
    if new_status is Status.DONE and task.status is not Status.DONE:
        completed_at = now
    return replace(task, status=new_status, completed_at=completed_at)


def dedupe_ids(ids) -> tuple[str, ...]:
    """Drop repeated ids, keeping the first occurrence order."""
    return tuple(dict.fromkeys(ids))
