# src/taskflow/core/reducer.py

from __future__ import annotations

"""
Pure state transitions.

reduce() never mutates its input and performs no I/O. Id generation,
timestamps and persistence happen in the store's write functions before
an action reaches here.
"""

from dataclasses import dataclass, replace
from typing import Any

from .actions import Action, ActionType
from .models import CurrentUser, Employee, Project, Task


@dataclass(slots=True, frozen=True)
class StoreState:
    tasks: tuple[Task, ...] = ()
    projects: tuple[Project, ...] = ()
    employees: tuple[Employee, ...] = ()
    current_user: CurrentUser | None = None
    is_loading: bool = True
    error: str | None = None


# action type -> (collection field, operation)
_COLLECTION_OPS: dict[ActionType, tuple[str, str]] = {
    ActionType.SET_TASKS: ("tasks", "set"),
    ActionType.ADD_TASK: ("tasks", "add"),
    ActionType.UPDATE_TASK: ("tasks", "update"),
    ActionType.DELETE_TASK: ("tasks", "delete"),
    ActionType.SET_PROJECTS: ("projects", "set"),
    ActionType.ADD_PROJECT: ("projects", "add"),
    ActionType.UPDATE_PROJECT: ("projects", "update"),
    ActionType.DELETE_PROJECT: ("projects", "delete"),
    ActionType.SET_EMPLOYEES: ("employees", "set"),
    ActionType.ADD_EMPLOYEE: ("employees", "add"),
    ActionType.UPDATE_EMPLOYEE: ("employees", "update"),
    ActionType.DELETE_EMPLOYEE: ("employees", "delete"),
}


def _apply_collection(state: StoreState, field: str, op: str, payload: Any) -> StoreState:
    items: tuple[Any, ...] = getattr(state, field)

    if op == "set":
        return replace(state, **{field: tuple(payload)})

    if op == "add":
        return replace(state, **{field: items + (payload,)})

    if op == "update":
        if not any(item.id == payload.id for item in items):
            return state
        updated = tuple(payload if item.id == payload.id else item for item in items)
        return replace(state, **{field: updated})

    # delete
    kept = tuple(item for item in items if item.id != payload)
    if len(kept) == len(items):
        return state
    return replace(state, **{field: kept})


def reduce(state: StoreState, action: Action) -> StoreState:
    """Map (state, action) to the next state. Misses return state as-is."""
    op = _COLLECTION_OPS.get(action.type)
    if op is not None:
        field, kind = op
        return _apply_collection(state, field, kind, action.payload)

    if action.type == ActionType.SET_CURRENT_USER:
        return replace(state, current_user=action.payload)

    if action.type == ActionType.SET_LOADING:
        return replace(state, is_loading=bool(action.payload))

    if action.type == ActionType.SET_ERROR:
        return replace(state, error=action.payload)

    return state
