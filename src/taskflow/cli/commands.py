# src/taskflow/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
import shlex
import uuid
from collections.abc import Callable
from typing import cast

from ..config import normalize_language
from ..core.dashboard import current_summary, render_dashboard, seed_demo_data
from ..core.models import Project, Task
from ..core.navigation import NAVIGATION, resolve_route
from ..core.state import AppState
from ..i18n import t
from ..llm.client import friendly_llm_error_message
from ..reports import generate_report
from .bootstrap import make_login_form

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console (/help, /login, /task, ...)."""

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

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            # Unbalanced quotes: fall back to plain whitespace splitting.
            parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            return cast(CommandHandler3, handler)(state, args, emit)
        return cast(CommandHandler2, handler)(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


def _split_fields(tokens: list[str]) -> tuple[list[str], dict[str, str]]:
    """Separate `key=value` tokens from free words."""
    words: list[str] = []
    fields: dict[str, str] = {}
    for tok in tokens:
        key, sep, value = tok.partition("=")
        if sep and key and key.isidentifier():
            fields[key] = value
        else:
            words.append(tok)
    return words, fields


def _format_task(task: Task) -> str:
    due = f" due={task.due_date.isoformat()}" if task.due_date else ""
    project = f" project={task.project_id}" if task.project_id else ""
    assignee = f" @{task.assignee_id}" if task.assignee_id else ""
    return f"[{task.id}] {task.title} ({task.status}, {task.priority}){project}{assignee}{due}"


def _format_project(project: Project) -> str:
    return f"[{project.id}] {project.name} {project.progress}%"


def render_tasks(state: AppState) -> str:
    tasks = state.store.tasks
    if not tasks:
        return t("no_tasks", state.language)
    return "\n".join(_format_task(task) for task in tasks)


def render_projects(state: AppState) -> str:
    projects = state.store.projects
    if not projects:
        return t("no_projects", state.language)
    return "\n".join(_format_project(p) for p in projects)


def render_route(state: AppState, path: str) -> str:
    """Text rendering of the page behind `path`."""
    if path == "/dashboard":
        return render_dashboard(current_summary(state.store.snapshot), state.language)
    if path == "/dashboard/tasks":
        return render_tasks(state)
    if path == "/dashboard/projects":
        return render_projects(state)
    if path == "/dashboard/reports":
        return _run_report(state)
    if path == "/dashboard/settings":
        return cmd_status(state, [])
    return f"Route: {path}"


def _run_report(state: AppState) -> str:
    try:
        return generate_report(state)
    except RuntimeError as e:
        msg = friendly_llm_error_message(e)
        logger.info("Report failed: %s", msg)
        return f"[LLM] {msg}"


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    user = state.store.current_user
    identity_ok = bool(getattr(state.identity, "configured", True))
    return (
        "Status:\n"
        f"  User: {user.display_name if user else '-'}\n"
        f"  Route: {state.router.pathname}\n"
        f"  Language: {state.language}\n"
        f"  Tasks / projects: {len(state.store.tasks)} / {len(state.store.projects)}\n"
        f"  Identity provider: {'configured' if identity_ok else 'NOT configured'}\n"
        f"  AI reports: {state.llm.__class__.__name__}"
    )


def _submit_auth(state: AppState, tab: str, form: dict[str, str], emit: CommandEmitter | None) -> str:
    login = make_login_form(state)
    login.set_tab(tab)  # type: ignore[arg-type]
    if emit:
        emit(t("signing_in" if tab == "login" else "signing_up", state.language))
    session = asyncio.run(login.submit(form))
    if session is None:
        return ""
    if tab == "login" and session.user is not None:
        state.store.set_current_user(session.user)
        return render_route(state, state.router.pathname)
    return ""


def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/login <email> <password>"""
    if len(args) != 2:
        return "Usage: /login <email> <password>"
    return _submit_auth(state, "login", {"email": args[0], "password": args[1]}, emit)


def cmd_register(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/register <email> <password> <confirm-password>"""
    if len(args) != 3:
        return "Usage: /register <email> <password> <confirm-password>"
    form = {"email": args[0], "password": args[1], "confirm-password": args[2]}
    return _submit_auth(state, "register", form, emit)


def cmd_logout(state: AppState, args: list[str]) -> str:
    asyncio.run(state.identity.sign_out())
    state.store.set_current_user(None)
    state.router.push(getattr(state.settings, "login_route", "/auth/login"))
    state.notifier.success(t("logged_out", state.language))
    return ""


def cmd_whoami(state: AppState, args: list[str]) -> str:
    user = state.store.current_user
    if user is None:
        return t("login_required", state.language)
    return f"{user.display_name} <{user.email}> (id={user.id})"


def cmd_go(state: AppState, args: list[str]) -> str:
    if not args:
        lines = ["Usage: /go <route|name>. Routes:"]
        lines += [f"  {item.href}  ({item.label(state.language)})" for item in NAVIGATION]
        return "\n".join(lines)
    path = resolve_route(" ".join(args), state.language)
    if path is None:
        return f"Unknown route: {' '.join(args)}"
    state.router.push(path)
    state.sidebar.close()
    return render_route(state, path)


def cmd_menu(state: AppState, args: list[str]) -> str:
    state.sidebar.toggle()
    if not state.sidebar.open:
        return "Menu closed."
    return state.sidebar.render(state.router.pathname, state.language)


def cmd_dashboard(state: AppState, args: list[str]) -> str:
    return cmd_go(state, ["/dashboard"])


def cmd_tasks(state: AppState, args: list[str]) -> str:
    return render_tasks(state)


def cmd_task(state: AppState, args: list[str]) -> str:
    """
    /task add <title> [key=value ...]
    /task set <id> key=value ...
    /task done <id>
    /task rm <id>
    """
    usage = "Usage: /task add <title> [status=.. priority=.. project_id=.. assignee_id=.. due_date=YYYY-MM-DD] | /task set <id> key=value ... | /task done <id> | /task rm <id>"
    if not args:
        return usage
    sub, rest = args[0].lower(), args[1:]

    if sub == "add":
        words, fields = _split_fields(rest)
        if not words:
            return usage
        try:
            task = Task.from_dict({"id": fields.pop("id", None) or _new_id(), "title": " ".join(words), **fields})
        except ValueError as e:
            return f"Invalid task: {e}"
        state.store.add_task(task)
        return f"Added {_format_task(task)}"

    if sub in ("set", "done", "rm") and not rest:
        return usage
    task_id = rest[0] if rest else ""

    if sub == "set":
        _, fields = _split_fields(rest[1:])
        if not fields:
            return usage
        if state.store.get_task(task_id) is None:
            return f"No task with id {task_id}."
        try:
            state.store.update_task(task_id, fields)
        except ValueError as e:
            return f"Invalid value: {e}"
        return f"Updated {_format_task(state.store.get_task(task_id))}"

    if sub == "done":
        if state.store.get_task(task_id) is None:
            return f"No task with id {task_id}."
        state.store.update_task(task_id, status="done")
        return f"Done: {task_id}"

    if sub == "rm":
        if state.store.get_task(task_id) is None:
            return f"No task with id {task_id}."
        state.store.delete_task(task_id)
        return f"Deleted task {task_id}"

    return usage


def cmd_projects(state: AppState, args: list[str]) -> str:
    return render_projects(state)


def cmd_project(state: AppState, args: list[str]) -> str:
    """
    /project add <name> [key=value ...]
    /project set <id> key=value ...
    /project rm <id>
    """
    usage = "Usage: /project add <name> [progress=0-100 owner_id=..] | /project set <id> key=value ... | /project rm <id>"
    if not args:
        return usage
    sub, rest = args[0].lower(), args[1:]

    if sub == "add":
        words, fields = _split_fields(rest)
        if not words:
            return usage
        project = Project.from_dict({"id": fields.pop("id", None) or _new_id(), "name": " ".join(words), **fields})
        state.store.add_project(project)
        return f"Added {_format_project(project)}"

    if not rest:
        return usage
    project_id = rest[0]
    if state.store.get_project(project_id) is None:
        return f"No project with id {project_id}."

    if sub == "set":
        _, fields = _split_fields(rest[1:])
        if not fields:
            return usage
        state.store.update_project(project_id, fields)
        return f"Updated {_format_project(state.store.get_project(project_id))}"

    if sub == "rm":
        state.store.delete_project(project_id)
        return f"Deleted project {project_id}"

    return usage


def cmd_report(state: AppState, args: list[str]) -> str:
    return _run_report(state)


def cmd_demo(state: AppState, args: list[str]) -> str:
    seed_demo_data(state.store)
    return f"Demo data loaded: {len(state.store.tasks)} tasks, {len(state.store.projects)} projects."


def cmd_lang(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Language: {state.language}. Use /lang fr or /lang en."
    state.language = normalize_language(args[0])
    return f"Language: {state.language}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session, route and configuration.")
registry.register("login", cmd_login, help_text="Sign in: /login <email> <password>.")
registry.register(
    "register", cmd_register, help_text="Create an account: /register <email> <password> <confirm>."
)
registry.register("logout", cmd_logout, help_text="Sign out and return to the login screen.")
registry.register("whoami", cmd_whoami, help_text="Show the signed-in user.")
registry.register("go", cmd_go, help_text="Navigate: /go tasks | /go /dashboard/projects.")
registry.register("menu", cmd_menu, help_text="Open/close the sidebar menu.")
registry.register("dashboard", cmd_dashboard, help_text="Show the dashboard summary.")
registry.register("tasks", cmd_tasks, help_text="List tasks.")
registry.register("task", cmd_task, help_text="Manage tasks: /task add | set | done | rm.")
registry.register("projects", cmd_projects, help_text="List projects.")
registry.register("project", cmd_project, help_text="Manage projects: /project add | set | rm.")
registry.register("report", cmd_report, help_text="Generate an AI status report.")
registry.register("demo", cmd_demo, help_text="Load demo projects and tasks.")
registry.register("lang", cmd_lang, help_text="Switch language: /lang fr | /lang en.")
