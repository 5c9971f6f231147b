# tests/test_store.py

from __future__ import annotations

import random

from taskflow.core.models import Project, Task, TaskStatus, User
from taskflow.core.store import Snapshot, Store


def test_add_update_delete_scenario() -> None:
    store = Store()
    store.add_task(Task(id="t1", title="A"))
    store.add_task(Task(id="t2", title="B"))
    store.update_task("t1", title="A2")

    assert store.tasks == (Task(id="t1", title="A2"), Task(id="t2", title="B"))

    store.delete_task("t1")
    assert store.tasks == (Task(id="t2", title="B"),)


def test_update_accepts_mapping_and_keeps_other_fields() -> None:
    store = Store()
    store.add_task(Task(id="t1", title="A", assignee_id="u1"))
    store.update_task("t1", {"status": "in_progress", "labels": ["ui"]})

    task = store.get_task("t1")
    assert task is not None
    assert task.status is TaskStatus.IN_PROGRESS
    assert task.assignee_id == "u1"
    assert task.extra == {"labels": ["ui"]}


def test_unknown_id_is_a_silent_noop() -> None:
    store = Store()
    store.set_tasks([Task(id="t1", title="A"), Task(id="t2", title="B")])
    store.set_projects([Project(id="p1", name="P")])
    before = store.snapshot

    store.update_task("missing", title="X")
    store.delete_task("missing")
    store.update_project("missing", name="X")
    store.delete_project("missing")

    assert store.tasks == before.tasks
    assert store.projects == before.projects
    # Snapshot is still replaced on every mutation.
    assert store.snapshot is not before


def test_update_never_rekeys() -> None:
    store = Store()
    store.add_task(Task(id="t1", title="A"))
    store.update_task("t1", {"id": "other", "title": "B"})
    assert store.tasks == (Task(id="t1", title="B"),)


def test_set_tasks_replaces_contents_in_order() -> None:
    store = Store()
    store.add_task(Task(id="old"))
    new = [Task(id="b"), Task(id="a"), Task(id="c")]

    store.set_tasks(new)

    assert store.tasks == tuple(new)


def test_duplicate_add_overwrites_in_place() -> None:
    store = Store()
    store.add_task(Task(id="t1", title="A"))
    store.add_task(Task(id="t2", title="B"))
    store.add_task(Task(id="t1", title="A again"))

    assert [t.id for t in store.tasks] == ["t1", "t2"]
    assert store.get_task("t1") == Task(id="t1", title="A again")


def test_current_user_cleared_without_touching_collections() -> None:
    store = Store()
    store.set_tasks([Task(id="t1")])
    store.set_projects([Project(id="p1")])
    store.set_current_user(User(id="u1", email="ada@example.com"))

    store.set_current_user(None)

    assert store.current_user is None
    assert store.tasks == (Task(id="t1"),)
    assert store.projects == (Project(id="p1"),)


def test_deleting_project_leaves_tasks_alone() -> None:
    store = Store()
    store.add_project(Project(id="p1", name="P"))
    store.add_task(Task(id="t1", project_id="p1"))

    store.delete_project("p1")

    assert store.projects == ()
    assert store.get_task("t1") == Task(id="t1", project_id="p1")


def test_project_operations_mirror_tasks() -> None:
    store = Store()
    store.add_project(Project(id="p1", name="Refonte UI", progress=10))
    store.add_project(Project(id="p2", name="API REST"))
    store.update_project("p1", progress=75)
    store.delete_project("p2")

    assert store.projects == (Project(id="p1", name="Refonte UI", progress=75),)


def test_random_sequences_match_reference_model() -> None:
    rng = random.Random(1234)
    store = Store()
    expected: dict[str, str] = {}

    for step in range(300):
        task_id = f"t{rng.randint(0, 9)}"
        op = rng.choice(["add", "update", "delete"])
        if op == "add":
            title = f"title-{step}"
            store.add_task(Task(id=task_id, title=title))
            expected[task_id] = title
        elif op == "update":
            title = f"updated-{step}"
            store.update_task(task_id, title=title)
            if task_id in expected:
                expected[task_id] = title
        else:
            store.delete_task(task_id)
            expected.pop(task_id, None)

    # dict preserves first-insertion order; overwrite-in-place keeps position too
    assert [(t.id, t.title) for t in store.tasks] == list(expected.items())


def test_subscribers_receive_every_snapshot() -> None:
    store = Store()
    seen: list[Snapshot] = []
    store.subscribe(seen.append)

    store.add_task(Task(id="t1"))
    store.update_task("missing", title="x")
    store.set_current_user(User(id="u1", email="ada@example.com"))

    assert len(seen) == 3
    assert seen[-1] is store.snapshot
    assert seen[0].tasks == (Task(id="t1"),)


def test_unsubscribe_is_idempotent() -> None:
    store = Store()
    calls: list[Snapshot] = []
    unsubscribe = store.subscribe(calls.append)

    store.add_task(Task(id="t1"))
    unsubscribe()
    unsubscribe()
    store.add_task(Task(id="t2"))

    assert len(calls) == 1


def test_failing_listener_does_not_block_others_or_the_mutation() -> None:
    store = Store()
    seen: list[Snapshot] = []

    def broken(_snapshot: Snapshot) -> None:
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(seen.append)

    store.add_task(Task(id="t1"))

    assert store.tasks == (Task(id="t1"),)
    assert len(seen) == 1


def test_listener_mutation_is_delivered_after_current_round() -> None:
    store = Store()
    first: list[Snapshot] = []
    last_seen: list[Snapshot] = []

    def fill_title(snapshot: Snapshot) -> None:
        first.append(snapshot)
        for task in snapshot.tasks:
            if not task.title:
                store.update_task(task.id, title="untitled")

    store.subscribe(fill_title)
    store.subscribe(last_seen.append)

    store.add_task(Task(id="t1"))

    assert store.get_task("t1").title == "untitled"
    # Both listeners see the add, then the follow-up update, in that order.
    assert [s.tasks[0].title for s in first] == ["", "untitled"]
    assert [s.tasks[0].title for s in last_seen] == ["", "untitled"]
    assert first[-1] is store.snapshot
    assert last_seen[-1] is store.snapshot


def test_queued_mutation_applies_to_latest_snapshot() -> None:
    store = Store()
    done = False

    def add_follow_up(snapshot: Snapshot) -> None:
        nonlocal done
        if not done:
            done = True
            store.add_task(Task(id="t2"))
            store.add_task(Task(id="t3"))

    store.subscribe(add_follow_up)
    store.add_task(Task(id="t1"))

    assert [t.id for t in store.tasks] == ["t1", "t2", "t3"]


def test_failing_queued_mutation_is_logged_and_store_keeps_working(caplog) -> None:
    store = Store()

    def bad_update(snapshot: Snapshot) -> None:
        if len(snapshot.tasks) == 1:
            store.update_task("t1", due_date="not-a-date")

    store.subscribe(bad_update)
    store.add_task(Task(id="t1"))

    assert store.tasks == (Task(id="t1"),)
    assert "Queued update_task failed" in caplog.text

    store.add_task(Task(id="t2"))
    assert len(store.tasks) == 2


def test_listener_unsubscribing_itself_mid_notification() -> None:
    store = Store()
    once: list[Snapshot] = []
    others: list[Snapshot] = []

    def only_once(snapshot: Snapshot) -> None:
        once.append(snapshot)
        unsubscribe()

    unsubscribe = store.subscribe(only_once)
    store.subscribe(others.append)

    store.add_task(Task(id="t1"))
    store.add_task(Task(id="t2"))

    assert len(once) == 1
    assert len(others) == 2
    assert others[-1] is store.snapshot


def test_update_accepts_fields_named_like_parameters() -> None:
    store = Store()
    store.add_task(Task(id="t1"))
    store.add_project(Project(id="p1"))

    store.update_task("t1", updates="x", task_id="y")
    store.update_project("p1", updates="x", project_id="y")

    assert store.get_task("t1").extra == {"updates": "x", "task_id": "y"}
    assert store.get_project("p1").extra == {"updates": "x", "project_id": "y"}


def test_older_snapshots_do_not_share_extra() -> None:
    store = Store()
    store.add_task(Task(id="t1", extra={"labels": ["ui"]}))
    before = store.snapshot

    store.update_task("t1", title="A")
    store.get_task("t1").extra["labels"].append("mutated")

    assert before.tasks[0].extra == {"labels": ["ui"]}
