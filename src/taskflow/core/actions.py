# src/taskflow/core/actions.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ActionType(StrEnum):
    SET_TASKS = "set_tasks"
    ADD_TASK = "add_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"

    SET_PROJECTS = "set_projects"
    ADD_PROJECT = "add_project"
    UPDATE_PROJECT = "update_project"
    DELETE_PROJECT = "delete_project"

    SET_EMPLOYEES = "set_employees"
    ADD_EMPLOYEE = "add_employee"
    UPDATE_EMPLOYEE = "update_employee"
    DELETE_EMPLOYEE = "delete_employee"

    SET_CURRENT_USER = "set_current_user"
    SET_LOADING = "set_loading"
    SET_ERROR = "set_error"


@dataclass(slots=True, frozen=True)
class Action:
    """
    A state transition request.

    payload depends on type:
    - SET_*      -> iterable of entities
    - ADD/UPDATE -> one entity
    - DELETE     -> entity id
    - SET_CURRENT_USER -> CurrentUser | None
    - SET_LOADING -> bool, SET_ERROR -> str | None
    """

    type: ActionType
    payload: Any = None


def set_tasks(tasks) -> Action:
    return Action(ActionType.SET_TASKS, tuple(tasks))


def add_task(task) -> Action:
    return Action(ActionType.ADD_TASK, task)


def update_task(task) -> Action:
    return Action(ActionType.UPDATE_TASK, task)


def delete_task(task_id: str) -> Action:
    return Action(ActionType.DELETE_TASK, task_id)


def set_projects(projects) -> Action:
    return Action(ActionType.SET_PROJECTS, tuple(projects))


def add_project(project) -> Action:
    return Action(ActionType.ADD_PROJECT, project)


def update_project(project) -> Action:
    return Action(ActionType.UPDATE_PROJECT, project)


def delete_project(project_id: str) -> Action:
    return Action(ActionType.DELETE_PROJECT, project_id)


def set_employees(employees) -> Action:
    return Action(ActionType.SET_EMPLOYEES, tuple(employees))


def add_employee(employee) -> Action:
    return Action(ActionType.ADD_EMPLOYEE, employee)


def update_employee(employee) -> Action:
    return Action(ActionType.UPDATE_EMPLOYEE, employee)


def delete_employee(employee_id: str) -> Action:
    return Action(ActionType.DELETE_EMPLOYEE, employee_id)


def set_current_user(user) -> Action:
    return Action(ActionType.SET_CURRENT_USER, user)


def set_loading(is_loading: bool) -> Action:
    return Action(ActionType.SET_LOADING, bool(is_loading))


def set_error(message: str | None) -> Action:
    return Action(ActionType.SET_ERROR, message)
