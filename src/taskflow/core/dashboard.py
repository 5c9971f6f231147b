# src/taskflow/core/dashboard.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..i18n import t
from .models import Project, Task, TaskPriority, TaskStatus
from .store import Snapshot, Store


@dataclass(frozen=True, slots=True)
class ProjectProgress:
    name: str
    progress: int


@dataclass(frozen=True, slots=True)
class Activity:
    """Message keys, translated at render time (plain text passes through `t` unchanged)."""

    title: str
    description: str
    time: str


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    total_tasks: int
    in_progress: int
    overdue: int
    active_members: int
    total_members: int
    projects: tuple[ProjectProgress, ...]
    activity: tuple[Activity, ...] = ()


# Figures shown before any data is loaded.
DEMO_SUMMARY = DashboardSummary(
    total_tasks=24,
    in_progress=8,
    overdue=2,
    active_members=12,
    total_members=15,
    projects=(
        ProjectProgress("Refonte UI", 75),
        ProjectProgress("API REST", 45),
        ProjectProgress("Tests unitaires", 30),
    ),
    activity=(
        Activity("demo_task_assigned", "demo_task_assigned_detail", "demo_task_assigned_time"),
        Activity("demo_project_updated", "demo_project_updated_detail", "demo_project_updated_time"),
        Activity("demo_comment_added", "demo_comment_added_detail", "demo_comment_added_time"),
    ),
)


def summarize(snapshot: Snapshot, today: date | None = None) -> DashboardSummary:
    today = today or date.today()
    tasks = snapshot.tasks

    open_assignees = {task.assignee_id for task in tasks if task.assignee_id and not task.is_done}
    all_assignees = {task.assignee_id for task in tasks if task.assignee_id}

    return DashboardSummary(
        total_tasks=len(tasks),
        in_progress=sum(1 for task in tasks if task.status is TaskStatus.IN_PROGRESS),
        overdue=sum(1 for task in tasks if task.is_overdue(today)),
        active_members=len(open_assignees),
        total_members=len(all_assignees),
        projects=tuple(ProjectProgress(p.name or p.id, p.progress) for p in snapshot.projects),
    )


def current_summary(snapshot: Snapshot, today: date | None = None) -> DashboardSummary:
    """Store-backed figures, or the demo figures while the store is empty."""
    if not snapshot.tasks and not snapshot.projects:
        return DEMO_SUMMARY
    return summarize(snapshot, today)


def seed_demo_data(store: Store) -> None:
    """Fill the store with the demo projects and a handful of tasks."""
    store.set_projects(
        [
            Project(id="p-ui", name="Refonte UI", progress=75),
            Project(id="p-api", name="API REST", progress=45),
            Project(id="p-tests", name="Tests unitaires", progress=30),
        ]
    )
    store.set_tasks(
        [
            Task(id="t-1", title="Maquettes tableau de bord", status=TaskStatus.DONE, project_id="p-ui", assignee_id="u-alice"),
            Task(id="t-2", title="Composants formulaire", status=TaskStatus.IN_PROGRESS, project_id="p-ui", assignee_id="u-bob"),
            Task(
                id="t-3",
                title="Endpoints projets",
                status=TaskStatus.IN_PROGRESS,
                priority=TaskPriority.HIGH,
                project_id="p-api",
                assignee_id="u-carol",
            ),
            Task(id="t-4", title="Integration des tests E2E", project_id="p-tests", assignee_id="u-alice"),
        ]
    )


def _bar(progress: int, width: int = 20) -> str:
    filled = round(width * progress / 100)
    return "#" * filled + "-" * (width - filled)


def render_dashboard(summary: DashboardSummary, lang: str = "fr") -> str:
    lines = [
        t("nav_dashboard", lang),
        "",
        f"  {t('total_tasks', lang):<16} {summary.total_tasks}",
        f"  {t('in_progress', lang):<16} {summary.in_progress}",
        f"  {t('overdue', lang):<16} {summary.overdue}",
        f"  {t('active_members', lang):<16} {summary.active_members}  ({t('members_of', lang, total=summary.total_members)})",
        "",
        t("projects_in_progress", lang),
    ]
    if summary.projects:
        for p in summary.projects:
            lines.append(f"  {p.name:<20} [{_bar(p.progress)}] {p.progress:>3}%")
    else:
        lines.append(f"  {t('no_projects', lang)}")

    if summary.activity:
        lines += ["", t("recent_activity", lang)]
        for a in summary.activity:
            lines.append(f"  - {t(a.title, lang)}: {t(a.description, lang)} ({t(a.time, lang)})")
    return "\n".join(lines)
