# src/taskflow/core/navigation.py

"""Sidebar entries and the in-process router the shell navigates with."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..i18n import t

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NavItem:
    key: str  # i18n key for the label
    href: str
    icon: str

    def label(self, lang: str = "fr") -> str:
        return t(self.key, lang)


NAVIGATION: tuple[NavItem, ...] = (
    NavItem("nav_dashboard", "/dashboard", "layout-dashboard"),
    NavItem("nav_tasks", "/dashboard/tasks", "check-square"),
    NavItem("nav_projects", "/dashboard/projects", "folder-kanban"),
    NavItem("nav_reports", "/dashboard/reports", "bar-chart-3"),
    NavItem("nav_settings", "/dashboard/settings", "settings"),
)


def resolve_route(target: str, lang: str = "fr") -> str | None:
    """
    Map user input to a route: an exact href, a last path segment ("tasks"),
    or a sidebar label in either language (case-insensitive).
    """
    raw = target.strip()
    if not raw:
        return None
    if raw.startswith("/"):
        return raw
    needle = raw.lower()
    for item in NAVIGATION:
        if item.href.rsplit("/", 1)[-1] == needle:
            return item.href
        if needle in (item.label(lang).lower(), item.label("fr").lower(), item.label("en").lower()):
            return item.href
    return None


class Router:
    """Holds the current path; listeners are told about every push."""

    def __init__(self, initial: str = "/auth/login") -> None:
        self.pathname = initial
        self.history: list[str] = [initial]
        self._listeners: list[Callable[[str], None]] = []

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def push(self, path: str) -> None:
        logger.debug("navigate %s -> %s", self.pathname, path)
        self.pathname = path
        self.history.append(path)
        for listener in list(self._listeners):
            try:
                listener(path)
            except Exception:
                logger.exception("Route listener failed for %s", path)


@dataclass(slots=True)
class Sidebar:
    open: bool = False

    def toggle(self) -> None:
        self.open = not self.open

    def close(self) -> None:
        self.open = False

    @staticmethod
    def items(pathname: str) -> list[tuple[NavItem, bool]]:
        """Sidebar entries, each flagged active when its href is the current path."""
        return [(item, item.href == pathname) for item in NAVIGATION]

    def render(self, pathname: str, lang: str = "fr") -> str:
        lines = []
        for item, active in self.items(pathname):
            marker = ">" if active else " "
            lines.append(f" {marker} {item.label(lang):<18} {item.href}")
        return "\n".join(lines)
