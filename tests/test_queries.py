# tests/test_queries.py

from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from taskflow.core.models import Role, Status
from taskflow.core.queries import UNASSIGNED, QueryService
from taskflow.core.session import SessionGate
from taskflow.core.store import TaskStore

from .fakes import ADMIN_EMAIL, ALEX_EMAIL, MICHAEL_EMAIL


def _ids(items) -> list[str]:
    return [i.id for i in items]


# ---- anonymous ----


def test_anonymous_sees_nothing(queries: QueryService) -> None:
    assert queries.tasks_by_project("proj1") == []
    assert queries.tasks_by_employee("emp1") == []
    assert queries.projects_by_employee("emp1") == []
    assert queries.visible_tasks() == []
    assert queries.visible_projects() == []
    assert queries.filter_employees() == []
    results = queries.search("")
    assert results.tasks == () and results.projects == ()


# ---- by project ----


def test_tasks_by_project_admin_vs_employee(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    admin_view = queries.tasks_by_project("proj1")
    assert _ids(admin_view) == ["task1", "task2", "task3", "task11"]

    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    employee_view = queries.tasks_by_project("proj1")
    assert _ids(employee_view) == ["task2", "task3", "task11"]
    assert set(_ids(employee_view)) <= set(_ids(admin_view))
    assert all(t.assignee_id == "emp1" for t in employee_view)

    session.logout()
    assert queries.tasks_by_project("proj1") == []


# ---- by employee ----


def test_tasks_by_employee_self_or_admin_only(session: SessionGate, queries: QueryService) -> None:
    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    assert _ids(queries.tasks_by_employee("emp1")) == ["task2", "task3", "task11"]
    assert queries.tasks_by_employee("emp3") == []

    session.login(ADMIN_EMAIL, Role.ADMIN)
    assert _ids(queries.tasks_by_employee("emp3")) == ["task5", "task7", "task8"]


def test_projects_by_employee_self_or_admin_only(session: SessionGate, queries: QueryService) -> None:
    session.login(MICHAEL_EMAIL, Role.EMPLOYEE)
    assert _ids(queries.projects_by_employee("emp3")) == ["proj2", "proj3", "proj4"]
    assert queries.projects_by_employee("emp1") == []

    session.login(ADMIN_EMAIL, Role.ADMIN)
    assert _ids(queries.projects_by_employee("emp1")) == ["proj1", "proj2", "proj5"]


def test_reads_are_recomputed_each_call(store: TaskStore, session: SessionGate, queries: QueryService) -> None:
    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    assert len(queries.tasks_by_employee("emp1")) == 3
    store.add_task(title="New one", project_id="proj1", assignee_id="emp1", due_date=date(2023, 11, 3))
    assert len(queries.tasks_by_employee("emp1")) == 4


# ---- search ----


def test_search_is_case_insensitive(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    upper = queries.search("API")
    lower = queries.search("api")
    assert upper == lower
    assert _ids(upper.tasks) == ["task5", "task7"]
    assert _ids(upper.projects) == ["proj3"]


def test_search_keeps_store_order_and_matches_descriptions(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    results = queries.search("wireframes")
    assert _ids(results.tasks) == ["task1", "task4", "task10"]
    assert results.projects == ()


def test_search_restricted_for_employees(session: SessionGate, queries: QueryService) -> None:
    session.login(MICHAEL_EMAIL, Role.EMPLOYEE)
    results = queries.search("api")
    assert _ids(results.tasks) == ["task5", "task7"]
    assert _ids(results.projects) == ["proj3"]

    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    results = queries.search("API")
    assert results.tasks == ()
    assert results.projects == ()


# ---- list filters ----


def test_filter_tasks_combines_filters_and_sorts_by_due_date(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)

    everything = queries.filter_tasks()
    due_dates = [t.due_date for t in everything]
    assert due_dates == sorted(due_dates)
    assert len(everything) == 12

    todo_medium = queries.filter_tasks(status="todo", priority="medium")
    assert _ids(todo_medium) == ["task7", "task8", "task10"]

    by_project = queries.filter_tasks(project_id="proj4", assignee_id="emp5")
    assert _ids(by_project) == ["task6", "task12"]

    searched = queries.filter_tasks(query="setup", status=Status.DONE)
    assert _ids(searched) == ["task6", "task3", "task12"]


def test_filter_tasks_rejects_unknown_status(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    with pytest.raises(ValueError):
        queries.filter_tasks(status="blocked")


def test_filter_tasks_only_visible(session: SessionGate, queries: QueryService) -> None:
    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    assert _ids(queries.filter_tasks()) == ["task3", "task2", "task11"]
    assert queries.filter_tasks(assignee_id="emp3") == []


def test_filter_projects_sorted_by_start_desc(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    assert _ids(queries.filter_projects()) == ["proj5", "proj3", "proj1", "proj2", "proj4"]
    assert _ids(queries.filter_projects(status="in-progress")) == ["proj1", "proj2"]
    assert _ids(queries.filter_projects(query="DASHBOARD")) == ["proj5"]


def test_filter_employees_by_name_role_email(session: SessionGate, queries: QueryService) -> None:
    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    names = [e.name for e in queries.filter_employees()]
    assert names == sorted(names)
    assert len(names) == 6

    assert _ids(queries.filter_employees(query="developer")) == ["emp1", "emp3"]
    assert _ids(queries.filter_employees(query="SOPHIE.taylor")) == ["emp6"]


# ---- due soon ----


def test_due_soon_window(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    assert _ids(queries.due_soon_tasks(days=7)) == ["task2", "task5"]
    assert _ids(queries.due_soon_tasks(days=3)) == ["task2"]

    # Due exactly today is not "soon"; done tasks are excluded.
    assert queries.due_soon_tasks(days=7, today=date(2023, 11, 1))[0].id == "task5"
    assert "task1" not in _ids(queries.due_soon_tasks(days=7, today=date(2023, 10, 10)))


def test_due_soon_respects_role(session: SessionGate, queries: QueryService) -> None:
    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    assert _ids(queries.due_soon_tasks(days=7)) == ["task2"]
    session.logout()
    assert queries.due_soon_tasks(days=7) == []


# ---- project detail ----


def test_project_progress(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    p = queries.project_progress("proj1")
    assert (p.total, p.completed, p.percent) == (4, 2, 50)

    assert queries.project_progress("proj4").percent == 100
    assert queries.project_progress("missing").percent == 0

    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    p = queries.project_progress("proj1")
    assert (p.total, p.completed, p.percent) == (3, 1, 33)


def test_weak_references_resolve_to_unknown(store: TaskStore, session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    task = store.get_task("task2")
    assert queries.assignee_name(task) == "Alex Johnson"

    store.delete_employee("emp1")
    assert queries.assignee_name(task) == UNASSIGNED
    assert queries.resolve_employee("emp1") is None
    assert queries.resolve_project("nope") is None

    project = replace(store.get_project("proj1"), team_ids=("emp1", "ghost", "emp2"))
    assert _ids(queries.team_members(project)) == ["emp2"]


# ---- dashboard ----


def test_dashboard_stats_admin(session: SessionGate, queries: QueryService) -> None:
    session.login(ADMIN_EMAIL, Role.ADMIN)
    stats = queries.dashboard_stats()

    assert stats.total_tasks == 12
    assert stats.tasks_by_status == {
        Status.TODO: 4,
        Status.IN_PROGRESS: 2,
        Status.REVIEW: 2,
        Status.DONE: 4,
    }
    assert stats.total_projects == 5
    assert stats.completed_projects == 1
    assert stats.in_progress_projects == 2
    assert stats.team_size == 6
    assert stats.due_soon == 2
    assert _ids(stats.recent_projects) == ["proj5", "proj3", "proj1"]
    assert len(stats.active_tasks) == 8
    assert stats.active_tasks[0].id == "task10"
    assert all(t.status is not Status.DONE for t in stats.active_tasks)


def test_dashboard_stats_employee(session: SessionGate, queries: QueryService) -> None:
    session.login(ALEX_EMAIL, Role.EMPLOYEE)
    stats = queries.dashboard_stats()

    assert stats.total_tasks == 3
    assert stats.tasks_by_status[Status.DONE] == 1
    assert stats.total_projects == 3
    assert stats.due_soon == 1
    assert _ids(stats.recent_projects) == ["proj5", "proj1", "proj2"]
    assert _ids(stats.active_tasks) == ["task11", "task2"]
