# src/taskflow/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import replace
from datetime import date

from ..core.models import Priority, Project, Role, Status, Task, with_status
from ..core.pagination import paginate
from ..core.session import register_employee
from ..core.state import AppState

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
    ) -> str | None:
        """
        Handle a string like '/command arg "quoted arg" key=value'.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----

NOT_LOGGED_IN = "You are not logged in. Use /login <email> [admin|employee]."
ADMIN_ONLY = "Only admins can do that."
STILL_LOADING = "Data is still loading, try again in a moment."


def _split_options(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Separate key=value options from positional arguments."""
    opts: dict[str, str] = {}
    rest: list[str] = []
    for a in args:
        key, sep, value = a.partition("=")
        if sep and key:
            opts[key.lower()] = value
        else:
            rest.append(a)
    return opts, rest


def _page_number(opts: dict[str, str]) -> int:
    try:
        return int(opts.get("page", "1"))
    except ValueError:
        return 1


def _guard(state: AppState, *, admin: bool = False) -> str | None:
    if state.store.state.is_loading:
        return STILL_LOADING
    if not state.session.is_authenticated:
        return NOT_LOGGED_IN
    if admin and not state.session.is_admin():
        return ADMIN_ONLY
    return None


def _may_see_details(state: AppState, employee_id: str) -> bool:
    user = state.session.current_user
    return user is not None and (state.session.is_admin() or user.id == employee_id)


def _fmt_task(state: AppState, t: Task) -> str:
    return (
        f"[{t.id}] {t.title} | {t.status.label} | {t.priority.label} | "
        f"due {t.due_date.isoformat()} | {state.queries.assignee_name(t)}"
    )


def _fmt_project(state: AppState, p: Project) -> str:
    progress = state.queries.project_progress(p.id)
    return (
        f"[{p.id}] {p.name} | {p.status.label} | "
        f"{p.start_date.isoformat()} -> {p.end_date.isoformat()} | "
        f"{progress.percent}% ({progress.completed}/{progress.total})"
    )


def _page_footer(page) -> str:
    if page.total_pages <= 1:
        return ""
    return f"\nPage {page.page}/{page.total_pages} (use page=N)"


# ---- session commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    s = state.store.state
    user = state.session.current_user
    who = f"{user.name} ({user.role.value})" if user else "anonymous"
    loading = "yes" if s.is_loading else "no"
    lines = [
        "Status:",
        f"  Session: {who}",
        f"  Loading: {loading}",
        f"  Employees/Projects/Tasks: {len(s.employees)}/{len(s.projects)}/{len(s.tasks)}",
    ]
    if s.error:
        lines.append(f"  Error: {s.error}")
    return "\n".join(lines)


def cmd_login(state: AppState, args: list[str]) -> str:
    """
    /login <email>           -> sign in as employee
    /login <email> admin     -> sign in as admin (demo only)
    """
    if state.store.state.is_loading:
        return STILL_LOADING
    if not args:
        return "Usage: /login <email> [admin|employee]"

    email = args[0]
    role = args[1].lower() if len(args) > 1 else Role.EMPLOYEE.value
    try:
        user = state.session.login(email, role)
    except ValueError:
        return "Role must be 'admin' or 'employee'."

    if user is None:
        return "User not found. Try another email or /register."
    return f"Logged in as {user.name} ({user.role.value})."


def cmd_logout(state: AppState, args: list[str]) -> str:
    if not state.session.is_authenticated:
        return "You are not logged in."
    state.session.logout()
    return "Logged out."


def cmd_whoami(state: AppState, args: list[str]) -> str:
    user = state.session.current_user
    if user is None:
        return "Anonymous."
    return f"{user.name} <{user.email}> id={user.id} role={user.role.value}"


def cmd_register(state: AppState, args: list[str]) -> str:
    """/register <email> <name...>"""
    if state.store.state.is_loading:
        return STILL_LOADING
    if len(args) < 2:
        return 'Usage: /register <email> "<full name>"'

    email, name = args[0], " ".join(args[1:])
    try:
        user = register_employee(state.store, state.session, name=name, email=email)
    except ValueError as e:
        return f"Registration failed: {e}."
    if user is None:
        return "Something went wrong during login. Please try again."
    return f"Account created for {user.name}."


# ---- dashboard ----


def cmd_dashboard(state: AppState, args: list[str]) -> str:
    if err := _guard(state):
        return err

    settings = state.settings
    stats = state.queries.dashboard_stats(due_soon_days=int(getattr(settings, "due_soon_days", 7)))
    user = state.session.current_user
    if user is None:
        return NOT_LOGGED_IN
    scope = "your team's" if state.session.is_admin() else "your"

    counts = ", ".join(f"{s.label}: {n}" for s, n in stats.tasks_by_status.items())
    lines = [
        f"Welcome back, {user.name}. Here's an overview of {scope} work.",
        f"  Projects: {stats.total_projects} ({stats.in_progress_projects} in progress, "
        f"{stats.completed_projects} completed)",
        f"  Tasks: {stats.total_tasks} ({counts})",
        f"  Team members: {stats.team_size}",
        f"  Due soon: {stats.due_soon}",
        "Recent projects:",
    ]
    lines.extend(f"  {_fmt_project(state, p)}" for p in stats.recent_projects)
    if not stats.recent_projects:
        lines.append("  (none)")
    lines.append("Active tasks:")
    lines.extend(f"  {_fmt_task(state, t)}" for t in stats.active_tasks)
    if not stats.active_tasks:
        lines.append("  (none)")
    return "\n".join(lines)


# ---- tasks ----


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """/tasks [q=..] [status=..] [priority=..] [project=..] [assignee=..] [page=N]"""
    if err := _guard(state):
        return err

    opts, rest = _split_options(args)
    query = opts.get("q", " ".join(rest))
    try:
        tasks = state.queries.filter_tasks(
            query=query,
            status=opts.get("status"),
            priority=opts.get("priority"),
            project_id=opts.get("project"),
            assignee_id=opts.get("assignee"),
        )
    except ValueError:
        return "Unknown status or priority. Status: todo|in-progress|review|done, priority: low|medium|high."

    if not tasks:
        return "No tasks found. Try adjusting your search or filters."

    page = paginate(tasks, _page_number(opts), int(getattr(state.settings, "tasks_per_page", 12)))
    lines = [f"Tasks ({page.total}):"]
    lines.extend(f"  {_fmt_task(state, t)}" for t in page.items)
    return "\n".join(lines) + _page_footer(page)


def cmd_task(state: AppState, args: list[str]) -> str:
    if err := _guard(state):
        return err
    if not args:
        return "Usage: /task <task_id>"

    task = state.store.get_task(args[0])
    if task is None or task not in state.queries.visible_tasks():
        return f"Task not found: {args[0]}"

    project = state.queries.resolve_project(task.project_id)
    lines = [
        f"{task.title} [{task.id}]",
        f"  {task.description}",
        f"  Status: {task.status.label}",
        f"  Priority: {task.priority.label}",
        f"  Project: {project.name if project else 'Unknown project'}",
        f"  Assignee: {state.queries.assignee_name(task)}",
        f"  Due: {task.due_date.isoformat()}",
        f"  Created: {task.created_at.date().isoformat()}",
    ]
    if task.completed_at is not None:
        lines.append(f"  Completed on {task.completed_at.date().isoformat()}")
    return "\n".join(lines)


def cmd_newtask(state: AppState, args: list[str]) -> str:
    """/newtask <project_id> <assignee_id> <due YYYY-MM-DD> "<title>" [priority=..] [desc=..]"""
    if err := _guard(state, admin=True):
        return err

    opts, rest = _split_options(args)
    if len(rest) < 4:
        return 'Usage: /newtask <project_id> <assignee_id> <YYYY-MM-DD> "<title>" [priority=high] [desc="..."]'

    project_id, assignee_id, due_raw = rest[0], rest[1], rest[2]
    title = " ".join(rest[3:])
    try:
        task = state.store.add_task(
            title=title,
            description=opts.get("desc", ""),
            priority=opts.get("priority", Priority.MEDIUM.value),
            project_id=project_id,
            assignee_id=assignee_id,
            due_date=date.fromisoformat(due_raw),
        )
    except ValueError as e:
        return f"Could not create task: {e}."
    return f"Task created: {_fmt_task(state, task)}"


def cmd_setstatus(state: AppState, args: list[str]) -> str:
    """/setstatus <task_id> <todo|in-progress|review|done>"""
    if err := _guard(state):
        return err
    if len(args) < 2:
        return "Usage: /setstatus <task_id> <todo|in-progress|review|done>"

    task = state.store.get_task(args[0])
    user = state.session.current_user
    if user is None:
        return NOT_LOGGED_IN
    if task is None or task not in state.queries.visible_tasks():
        return f"Task not found: {args[0]}"
    if not state.session.is_admin() and task.assignee_id != user.id:
        return ADMIN_ONLY

    try:
        updated = with_status(task, args[1].lower(), state.store.now())
    except ValueError:
        return "Status must be one of: todo, in-progress, review, done."

    state.store.update_task(updated)
    return f"Task updated: {_fmt_task(state, updated)}"


def cmd_edittask(state: AppState, args: list[str]) -> str:
    """
    /edittask <task_id> [title=..] [desc=..] [status=..] [priority=..] [assignee=..] [due=YYYY-MM-DD]

    Only the given fields change. Moving into done stamps completed_at;
    moving out of done keeps it.
    """
    if err := _guard(state, admin=True):
        return err

    opts, rest = _split_options(args)
    if not rest:
        return "Usage: /edittask <task_id> [title=..] [desc=..] [status=..] [priority=..] [assignee=..] [due=YYYY-MM-DD]"

    task = state.store.get_task(rest[0])
    if task is None:
        return f"Task not found: {rest[0]}"

    title = opts.get("title", task.title).strip()
    if not title:
        return "Could not update task: title is required."

    try:
        updated = replace(
            task,
            title=title,
            description=opts.get("desc", task.description),
            priority=Priority(opts.get("priority", task.priority)),
            assignee_id=opts.get("assignee", task.assignee_id),
            due_date=date.fromisoformat(opts["due"]) if "due" in opts else task.due_date,
        )
        updated = with_status(updated, opts.get("status", task.status), state.store.now())
    except ValueError as e:
        return f"Could not update task: {e}."

    state.store.update_task(updated)
    logger.info("Task edited id=%s fields=%s", task.id, sorted(opts))
    return f"Task updated: {_fmt_task(state, updated)}"


def cmd_deltask(state: AppState, args: list[str]) -> str:
    if err := _guard(state, admin=True):
        return err
    if not args:
        return "Usage: /deltask <task_id>"
    if not state.store.delete_task(args[0]):
        return f"Task not found: {args[0]}"
    logger.info("Task deleted id=%s", args[0])
    return f"Task deleted: {args[0]}"


# ---- projects ----


def cmd_projects(state: AppState, args: list[str]) -> str:
    """/projects [q=..] [status=..] [page=N]"""
    if err := _guard(state):
        return err

    opts, rest = _split_options(args)
    try:
        projects = state.queries.filter_projects(
            query=opts.get("q", " ".join(rest)),
            status=opts.get("status"),
        )
    except ValueError:
        return "Status must be one of: todo, in-progress, review, done."

    if not projects:
        return "No projects found. Try adjusting your search or filters."

    page = paginate(projects, _page_number(opts), int(getattr(state.settings, "projects_per_page", 9)))
    lines = [f"Projects ({page.total}):"]
    lines.extend(f"  {_fmt_project(state, p)}" for p in page.items)
    return "\n".join(lines) + _page_footer(page)


def cmd_project(state: AppState, args: list[str]) -> str:
    if err := _guard(state):
        return err
    if not args:
        return "Usage: /project <project_id>"

    project = state.store.get_project(args[0])
    if project is None or project not in state.queries.visible_projects():
        return f"Project not found: {args[0]}"

    members = state.queries.team_members(project)
    tasks = state.queries.tasks_by_project(project.id)
    lines = [
        _fmt_project(state, project),
        f"  {project.description}",
        "Team: " + (", ".join(f"{m.name} [{m.id}]" for m in members) or "(no members)"),
        "Tasks:",
    ]
    lines.extend(f"  {_fmt_task(state, t)}" for t in tasks)
    if not tasks:
        lines.append("  (none)")
    return "\n".join(lines)


def cmd_newproject(state: AppState, args: list[str]) -> str:
    """/newproject <start> <end> "<name>" [status=..] [team=emp1,emp2] [desc=..]"""
    if err := _guard(state, admin=True):
        return err

    opts, rest = _split_options(args)
    if len(rest) < 3:
        return 'Usage: /newproject <YYYY-MM-DD> <YYYY-MM-DD> "<name>" [team=emp1,emp2] [status=todo] [desc="..."]'

    team = [i for i in opts.get("team", "").split(",") if i]
    try:
        project = state.store.add_project(
            name=" ".join(rest[2:]),
            description=opts.get("desc", ""),
            start_date=date.fromisoformat(rest[0]),
            end_date=date.fromisoformat(rest[1]),
            status=opts.get("status", Status.TODO.value),
            team_ids=team,
        )
    except ValueError as e:
        return f"Could not create project: {e}."
    return f"Project created: {_fmt_project(state, project)}"


def cmd_togglemember(state: AppState, args: list[str]) -> str:
    if err := _guard(state, admin=True):
        return err
    if len(args) < 2:
        return "Usage: /togglemember <project_id> <employee_id>"

    project_id, employee_id = args[0], args[1]
    if state.store.get_employee(employee_id) is None:
        return f"Employee not found: {employee_id}"
    project = state.store.toggle_team_member(project_id, employee_id)
    if project is None:
        return f"Project not found: {project_id}"

    verb = "added to" if employee_id in project.team_ids else "removed from"
    return f"{employee_id} {verb} {project.name}."


def cmd_editproject(state: AppState, args: list[str]) -> str:
    """/editproject <project_id> [name=..] [desc=..] [status=..] [start=..] [end=..] [team=emp1,emp2]"""
    if err := _guard(state, admin=True):
        return err

    opts, rest = _split_options(args)
    if not rest:
        return "Usage: /editproject <project_id> [name=..] [desc=..] [status=..] [start=..] [end=..] [team=emp1,emp2]"

    project = state.store.get_project(rest[0])
    if project is None:
        return f"Project not found: {rest[0]}"

    name = opts.get("name", project.name).strip()
    if not name:
        return "Could not update project: name is required."

    try:
        updated = replace(
            project,
            name=name,
            description=opts.get("desc", project.description),
            status=Status(opts.get("status", project.status)),
            start_date=date.fromisoformat(opts["start"]) if "start" in opts else project.start_date,
            end_date=date.fromisoformat(opts["end"]) if "end" in opts else project.end_date,
            team_ids=tuple(i for i in opts["team"].split(",") if i) if "team" in opts else project.team_ids,
        )
    except ValueError as e:
        return f"Could not update project: {e}."

    state.store.update_project(updated)
    logger.info("Project edited id=%s fields=%s", project.id, sorted(opts))
    return f"Project updated: {_fmt_project(state, state.store.get_project(project.id) or updated)}"


def cmd_delproject(state: AppState, args: list[str]) -> str:
    if err := _guard(state, admin=True):
        return err
    if not args:
        return "Usage: /delproject <project_id>"
    if not state.store.delete_project(args[0]):
        return f"Project not found: {args[0]}"
    logger.info("Project deleted id=%s", args[0])
    return f"Project deleted: {args[0]}"


# ---- team ----


def cmd_team(state: AppState, args: list[str]) -> str:
    """/team [q=..] [page=N]"""
    if err := _guard(state):
        return err

    opts, rest = _split_options(args)
    employees = state.queries.filter_employees(query=opts.get("q", " ".join(rest)))
    if not employees:
        return "No team members found."

    page = paginate(employees, _page_number(opts), int(getattr(state.settings, "employees_per_page", 12)))
    lines = [f"Team ({page.total}):"]
    for e in page.items:
        line = f"  [{e.id}] {e.name} | {e.role} | {e.email}"
        if _may_see_details(state, e.id):
            n_tasks = len(state.queries.tasks_by_employee(e.id))
            n_projects = len(state.queries.projects_by_employee(e.id))
            line += f" | tasks {n_tasks} | projects {n_projects}"
        lines.append(line)
    return "\n".join(lines) + _page_footer(page)


def cmd_member(state: AppState, args: list[str]) -> str:
    if err := _guard(state):
        return err
    if not args:
        return "Usage: /member <employee_id>"

    employee = state.queries.resolve_employee(args[0])
    if employee is None:
        return f"Team member not found: {args[0]}"

    lines = [f"{employee.name} [{employee.id}] | {employee.role} | {employee.email}"]
    if not _may_see_details(state, employee.id):
        lines.append("  (details are visible to admins and to the member themselves)")
        return "\n".join(lines)

    tasks = state.queries.tasks_by_employee(employee.id)
    projects = state.queries.projects_by_employee(employee.id)
    lines.append("Projects:")
    lines.extend(f"  {_fmt_project(state, p)}" for p in projects)
    lines.append("Tasks:")
    lines.extend(f"  {_fmt_task(state, t)}" for t in tasks)
    return "\n".join(lines)


def cmd_addmember(state: AppState, args: list[str]) -> str:
    """/addmember "<name>" <email> "<role title>" [avatar=..]"""
    if err := _guard(state, admin=True):
        return err

    opts, rest = _split_options(args)
    if len(rest) < 3:
        return 'Usage: /addmember "<full name>" <email> "<role title>" [avatar=url]'

    try:
        employee = state.store.add_employee(
            name=rest[0],
            email=rest[1],
            role=" ".join(rest[2:]),
            avatar=opts.get("avatar", ""),
        )
    except ValueError as e:
        return f"Could not add team member: {e}."
    return f"Team member added: {employee.name} [{employee.id}]"


def cmd_editmember(state: AppState, args: list[str]) -> str:
    """/editmember <employee_id> [name=..] [email=..] [role=..] [avatar=..]"""
    if err := _guard(state, admin=True):
        return err

    opts, rest = _split_options(args)
    if not rest:
        return "Usage: /editmember <employee_id> [name=..] [email=..] [role=..] [avatar=..]"

    employee = state.store.get_employee(rest[0])
    if employee is None:
        return f"Team member not found: {rest[0]}"

    name = opts.get("name", employee.name).strip()
    email = opts.get("email", employee.email).strip()
    if not name or not email:
        return "Could not update team member: name and email are required."

    updated = replace(
        employee,
        name=name,
        email=email,
        role=opts.get("role", employee.role),
        avatar=opts.get("avatar", employee.avatar),
    )
    state.store.update_employee(updated)
    logger.info("Employee edited id=%s fields=%s", employee.id, sorted(opts))
    return f"Team member updated: {updated.name} [{updated.id}]"


# ---- search / due soon ----


def cmd_search(state: AppState, args: list[str]) -> str:
    if err := _guard(state):
        return err
    if not args:
        return "Usage: /search <text>"

    results = state.queries.search(" ".join(args))
    if not results.tasks and not results.projects:
        return "Nothing matched."

    lines = [f"Tasks ({len(results.tasks)}):"]
    lines.extend(f"  {_fmt_task(state, t)}" for t in results.tasks)
    lines.append(f"Projects ({len(results.projects)}):")
    lines.extend(f"  {_fmt_project(state, p)}" for p in results.projects)
    return "\n".join(lines)


def cmd_due(state: AppState, args: list[str]) -> str:
    """/due [page=N]"""
    if err := _guard(state):
        return err

    opts, _ = _split_options(args)
    days = int(getattr(state.settings, "due_soon_days", 7))
    tasks = state.queries.due_soon_tasks(days=days)
    if not tasks:
        return f"No tasks due in the next {days} days."

    page = paginate(tasks, _page_number(opts), int(getattr(state.settings, "tasks_per_page", 12)))
    lines = [f"Due in the next {days} days ({page.total}):"]
    lines.extend(f"  {_fmt_task(state, t)}" for t in page.items)
    return "\n".join(lines) + _page_footer(page)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session and data status.")
registry.register("login", cmd_login, help_text="Sign in: /login <email> [admin|employee].")
registry.register("logout", cmd_logout, help_text="Sign out.")
registry.register("whoami", cmd_whoami, help_text="Show the signed-in user.")
registry.register("register", cmd_register, help_text='Create an account: /register <email> "<name>".')
registry.register("dashboard", cmd_dashboard, help_text="Overview of projects and tasks.", aliases=["dash"])
registry.register("tasks", cmd_tasks, help_text="List tasks: q= status= priority= project= assignee= page=.")
registry.register("task", cmd_task, help_text="Show task details: /task <id>.")
registry.register("newtask", cmd_newtask, help_text="Create a task (admin).")
registry.register("setstatus", cmd_setstatus, help_text="Change task status: /setstatus <id> <status>.")
registry.register("edittask", cmd_edittask, help_text="Edit a task: title= desc= status= priority= assignee= due= (admin).")
registry.register("deltask", cmd_deltask, help_text="Delete a task (admin).")
registry.register("projects", cmd_projects, help_text="List projects: q= status= page=.")
registry.register("project", cmd_project, help_text="Show project details: /project <id>.")
registry.register("newproject", cmd_newproject, help_text="Create a project (admin).")
registry.register("togglemember", cmd_togglemember, help_text="Add/remove a project team member (admin).")
registry.register("editproject", cmd_editproject, help_text="Edit a project: name= desc= status= start= end= team= (admin).")
registry.register("delproject", cmd_delproject, help_text="Delete a project (admin).")
registry.register("team", cmd_team, help_text="List team members: q= page=.")
registry.register("member", cmd_member, help_text="Show a team member: /member <id>.")
registry.register("addmember", cmd_addmember, help_text="Add a team member (admin).")
registry.register("editmember", cmd_editmember, help_text="Edit a team member: name= email= role= avatar= (admin).")
registry.register("search", cmd_search, help_text="Search tasks and projects.")
registry.register("due", cmd_due, help_text="Tasks due soon.")
