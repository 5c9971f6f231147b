# src/taskflow/core/models.py

"""
Entities held by the store.

Only `id` carries meaning for the store itself. The remaining fields are what
the dashboard views read; anything else a backend sends along is kept in
`extra` so a round-trip through the store never drops data.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from datetime import date
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus:
        if isinstance(raw, cls):
            return raw
        if not raw:
            return cls.TODO
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.TODO


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: Any) -> TaskPriority:
        if isinstance(raw, cls):
            return raw
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.MEDIUM


def _parse_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    # Accept full ISO timestamps too ("2024-05-01T10:00:00Z").
    return date.fromisoformat(str(raw)[:10])


def _parse_progress(raw: Any) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, value))


def _split_updates(cls: type, updates: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a partial update into known dataclass fields and extra keys. `id` is dropped."""
    known_names = {f.name for f in fields(cls)} - {"id", "extra"}
    known: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in updates.items():
        if key == "id":
            continue
        if key in known_names:
            known[key] = value
        else:
            extra[key] = value
    return known, extra


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    project_id: str | None = None
    assignee_id: str | None = None
    due_date: date | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen: normalize through object.__setattr__ so raw strings from
        # commands or payloads end up as the proper types.
        object.__setattr__(self, "status", TaskStatus.parse(self.status))
        object.__setattr__(self, "priority", TaskPriority.parse(self.priority))
        object.__setattr__(self, "due_date", _parse_date(self.due_date))

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE

    def is_overdue(self, today: date) -> bool:
        return not self.is_done and self.due_date is not None and self.due_date < today

    def merged(self, updates: Mapping[str, Any]) -> Task:
        """Shallow merge: listed fields replaced, everything else kept."""
        known, extra = _split_updates(Task, updates)
        # Always a fresh copy: entities in older snapshots must not share it.
        known["extra"] = {**copy.deepcopy(self.extra), **extra}
        return replace(self, **known)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": str(self.status),
            "priority": str(self.priority),
            "project_id": self.project_id,
            "assignee_id": self.assignee_id,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Task:
        known, extra = _split_updates(cls, data)
        return cls(id=str(data["id"]), extra=extra, **known)


@dataclass(frozen=True, slots=True)
class Project:
    id: str
    name: str = ""
    description: str = ""
    progress: int = 0
    owner_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "progress", _parse_progress(self.progress))

    def merged(self, updates: Mapping[str, Any]) -> Project:
        known, extra = _split_updates(Project, updates)
        known["extra"] = {**copy.deepcopy(self.extra), **extra}
        return replace(self, **known)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "progress": self.progress,
            "owner_id": self.owner_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Project:
        known, extra = _split_updates(cls, data)
        return cls(id=str(data["id"]), extra=extra, **known)


@dataclass(frozen=True, slots=True)
class User:
    id: str
    email: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        """
        Build a User from an identity-provider user record.

        The display name may live in user metadata (Supabase: `user_metadata.full_name`).
        """
        meta = data.get("user_metadata") or {}
        name = data.get("name") or (meta.get("full_name") if isinstance(meta, Mapping) else None)
        return cls(id=str(data["id"]), email=str(data.get("email") or ""), name=name)
