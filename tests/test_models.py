# tests/test_models.py

from __future__ import annotations

from datetime import date

import pytest

from taskflow.core.models import Project, Task, TaskPriority, TaskStatus, User


def test_task_normalizes_raw_values() -> None:
    task = Task(id="t1", status="IN_PROGRESS", priority="urgent", due_date="2024-05-01T10:00:00Z")

    assert task.status is TaskStatus.IN_PROGRESS
    # Unknown priority falls back to the default instead of failing.
    assert task.priority is TaskPriority.MEDIUM
    assert task.due_date == date(2024, 5, 1)


def test_task_rejects_malformed_due_date() -> None:
    with pytest.raises(ValueError):
        Task(id="t1", due_date="next week")


def test_merged_is_shallow_and_keeps_unknown_keys() -> None:
    task = Task(id="t1", title="A", extra={"labels": ["ui"]})

    merged = task.merged({"title": "B", "estimate": 3})

    assert merged.title == "B"
    assert merged.extra == {"labels": ["ui"], "estimate": 3}
    # original untouched
    assert task.title == "A"
    assert task.extra == {"labels": ["ui"]}


def test_task_dict_round_trip_keeps_extra_fields() -> None:
    data = {"id": "t1", "title": "A", "status": "done", "due_date": "2024-01-02", "createdAt": "2024-01-01"}

    task = Task.from_dict(data)

    assert task.is_done
    assert task.extra == {"createdAt": "2024-01-01"}
    assert task.to_dict()["createdAt"] == "2024-01-01"
    assert task.to_dict()["due_date"] == "2024-01-02"


def test_overdue_only_for_open_tasks_past_due() -> None:
    today = date(2024, 6, 10)
    assert Task(id="a", due_date=date(2024, 6, 9)).is_overdue(today)
    assert not Task(id="b", due_date=date(2024, 6, 10)).is_overdue(today)
    assert not Task(id="c", due_date=date(2024, 6, 1), status="done").is_overdue(today)
    assert not Task(id="d").is_overdue(today)


def test_project_progress_is_clamped() -> None:
    assert Project(id="p", progress=150).progress == 100
    assert Project(id="p", progress="-3").progress == 0
    assert Project(id="p", progress="oops").progress == 0


def test_user_from_provider_record() -> None:
    user = User.from_dict({"id": "abc", "email": "ada@example.com", "user_metadata": {"full_name": "Ada"}})

    assert user == User(id="abc", email="ada@example.com", name="Ada")
    assert user.display_name == "Ada"
    assert User(id="x", email="x@example.com").display_name == "x@example.com"


def test_merged_gives_each_version_its_own_extra() -> None:
    project = Project(id="p1", extra={"tags": ["q3"]})

    renamed = project.merged({"name": "API"})
    renamed.extra["tags"].append("late")
    renamed.extra["owner_note"] = "x"

    assert project.extra == {"tags": ["q3"]}
    assert renamed.extra is not project.extra
