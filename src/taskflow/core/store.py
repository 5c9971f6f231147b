# src/taskflow/core/store.py

"""
Client state store.

One in-memory source of truth for tasks, projects and the current user.
Every mutation builds a new immutable Snapshot, swaps it in, then notifies
subscribers synchronously with the new snapshot.

Mutations are total: an update or delete that matches no id changes nothing
(the snapshot is still replaced and subscribers still run).

Adding an entity whose id is already present overwrites the existing entry in
place (last write wins), so a collection never holds two entries with one id.

A listener may mutate the store; that mutation is applied once the current
round of notifications has finished, then announced in its own round.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any, Protocol, TypeVar

from .models import Project, Task, User

logger = logging.getLogger(__name__)


class _Entity(Protocol):
    @property
    def id(self) -> str: ...

    def merged(self, updates: Mapping[str, Any]) -> Any: ...


E = TypeVar("E", bound=_Entity)

Listener = Callable[["Snapshot"], None]
Transform = Callable[["Snapshot"], dict[str, Any]]


@dataclass(frozen=True, slots=True)
class Snapshot:
    tasks: tuple[Task, ...] = ()
    projects: tuple[Project, ...] = ()
    current_user: User | None = None


# ---- pure list operations ----


def upsert_by_id(items: tuple[E, ...], entity: E) -> tuple[E, ...]:
    """Append `entity`, or replace the entry with the same id in place."""
    for i, item in enumerate(items):
        if item.id == entity.id:
            logger.debug("Duplicate id=%s on add, overwriting existing entry", entity.id)
            return items[:i] + (entity,) + items[i + 1 :]
    return items + (entity,)


def merge_by_id(items: tuple[E, ...], entity_id: str, updates: Mapping[str, Any]) -> tuple[E, ...]:
    return tuple(item.merged(updates) if item.id == entity_id else item for item in items)


def remove_by_id(items: tuple[E, ...], entity_id: str) -> tuple[E, ...]:
    return tuple(item for item in items if item.id != entity_id)


class Store:
    """Observable holder of the current Snapshot."""

    def __init__(self, initial: Snapshot | None = None) -> None:
        self._snapshot = initial or Snapshot()
        self._listeners: list[Listener] = []
        self._notifying = False
        self._pending: deque[tuple[str, Transform]] = deque()

    # ---- reads ----

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._snapshot.tasks

    @property
    def projects(self) -> tuple[Project, ...]:
        return self._snapshot.projects

    @property
    def current_user(self) -> User | None:
        return self._snapshot.current_user

    def get_task(self, task_id: str) -> Task | None:
        return next((t for t in self._snapshot.tasks if t.id == task_id), None)

    def get_project(self, project_id: str) -> Project | None:
        return next((p for p in self._snapshot.projects if p.id == project_id), None)

    # ---- subscriptions ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns an idempotent unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    # ---- dispatch ----

    def _apply(self, op: str, transform: Transform) -> None:
        """
        Run one mutation, or queue it if subscribers are being notified.

        A mutation issued from inside a listener runs only after every
        listener has seen the current snapshot, so deliveries stay ordered
        and the last snapshot each listener gets is the live one.
        """
        if self._notifying:
            logger.debug("Queued %s issued during notification", op)
            self._pending.append((op, transform))
            return

        self._notifying = True
        try:
            self._commit(op, transform)
            while self._pending:
                queued_op, queued = self._pending.popleft()
                try:
                    self._commit(queued_op, queued)
                except Exception:
                    logger.exception("Queued %s failed", queued_op)
        finally:
            self._notifying = False

    def _commit(self, op: str, transform: Transform) -> None:
        self._snapshot = replace(self._snapshot, **transform(self._snapshot))
        snapshot = self._snapshot
        logger.debug(
            "%s -> tasks=%d projects=%d user=%s",
            op,
            len(snapshot.tasks),
            len(snapshot.projects),
            snapshot.current_user.id if snapshot.current_user else None,
        )
        # Copy: a listener may unsubscribe itself while we iterate.
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Store listener %r failed after %s", listener, op)

    # ---- full replacements ----

    def set_tasks(self, tasks: Iterable[Task]) -> None:
        items = tuple(tasks)
        self._apply("set_tasks", lambda s: {"tasks": items})

    def set_projects(self, projects: Iterable[Project]) -> None:
        items = tuple(projects)
        self._apply("set_projects", lambda s: {"projects": items})

    def set_current_user(self, user: User | None) -> None:
        self._apply("set_current_user", lambda s: {"current_user": user})

    # ---- tasks ----

    def add_task(self, task: Task) -> None:
        self._apply("add_task", lambda s: {"tasks": upsert_by_id(s.tasks, task)})

    def update_task(self, task_id: str, updates: Mapping[str, Any] | None = None, /, **fields: Any) -> None:
        merged = {**(updates or {}), **fields}
        self._apply("update_task", lambda s: {"tasks": merge_by_id(s.tasks, task_id, merged)})

    def delete_task(self, task_id: str) -> None:
        self._apply("delete_task", lambda s: {"tasks": remove_by_id(s.tasks, task_id)})

    # ---- projects ----

    def add_project(self, project: Project) -> None:
        self._apply("add_project", lambda s: {"projects": upsert_by_id(s.projects, project)})

    def update_project(
        self, project_id: str, updates: Mapping[str, Any] | None = None, /, **fields: Any
    ) -> None:
        merged = {**(updates or {}), **fields}
        self._apply("update_project", lambda s: {"projects": merge_by_id(s.projects, project_id, merged)})

    def delete_project(self, project_id: str) -> None:
        self._apply("delete_project", lambda s: {"projects": remove_by_id(s.projects, project_id)})
