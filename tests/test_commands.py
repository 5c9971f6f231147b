# tests/test_commands.py

from __future__ import annotations

from taskflow.cli.commands import CommandRegistry, registry


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_login_sets_current_user_and_opens_dashboard(state, notifier) -> None:
    out = registry.handle(state, "/login ada@example.com secret")

    assert state.store.current_user is not None
    assert state.store.current_user.email == "ada@example.com"
    assert state.router.pathname == "/dashboard"
    assert notifier.successes == ["Connexion réussie"]
    assert "Tableau de bord" in (out or "")


def test_failed_login_leaves_store_untouched(state, notifier) -> None:
    registry.handle(state, "/login ada@example.com nope")

    assert state.store.current_user is None
    assert state.router.pathname == "/auth/login"
    assert notifier.errors == ["Invalid login credentials"]


def test_register_mismatch_never_reaches_provider(state, identity, notifier) -> None:
    registry.handle(state, "/register new@example.com one two")

    assert identity.calls == []
    assert notifier.errors == ["Les mots de passe ne correspondent pas"]


def test_logout_clears_user_and_returns_to_login(state, identity) -> None:
    registry.handle(state, "/login ada@example.com secret")
    registry.handle(state, "/logout")

    assert state.store.current_user is None
    assert identity.signed_out is True
    assert state.router.pathname == "/auth/login"


def test_task_lifecycle_through_commands(state) -> None:
    out = registry.handle(state, '/task add "Write docs" id=t1 priority=high due_date=2030-01-01')
    assert out is not None and out.startswith("Added [t1] Write docs")

    registry.handle(state, "/task set t1 status=in_progress assignee_id=u-ada")
    task = state.store.get_task("t1")
    assert task is not None
    assert str(task.status) == "in_progress"
    assert task.assignee_id == "u-ada"

    registry.handle(state, "/task done t1")
    assert state.store.get_task("t1").is_done

    assert "No task" in (registry.handle(state, "/task rm missing") or "")
    registry.handle(state, "/task rm t1")
    assert state.store.tasks == ()


def test_task_add_with_bad_date_is_reported(state) -> None:
    out = registry.handle(state, "/task add Broken due_date=soon")
    assert out is not None and out.startswith("Invalid task")
    assert state.store.tasks == ()


def test_project_commands(state) -> None:
    registry.handle(state, "/project add Refonte UI id=p1 progress=40")
    registry.handle(state, "/project set p1 progress=75")

    assert registry.handle(state, "/projects") == "[p1] Refonte UI 75%"

    registry.handle(state, "/project rm p1")
    assert state.store.projects == ()


def test_go_resolves_names_and_renders(state) -> None:
    registry.handle(state, "/demo")

    out = registry.handle(state, "/go tâches")

    assert state.router.pathname == "/dashboard/tasks"
    assert "[t-1] Maquettes tableau de bord" in (out or "")
    assert "Unknown route" in (registry.handle(state, "/go nowhere") or "")


def test_menu_marks_active_entry(state) -> None:
    state.router.push("/dashboard/projects")

    out = registry.handle(state, "/menu") or ""

    active = [line for line in out.splitlines() if line.startswith(" >")]
    assert len(active) == 1 and "/dashboard/projects" in active[0]
    assert registry.handle(state, "/menu") == "Menu closed."


def test_lang_switch(state) -> None:
    registry.handle(state, "/lang en")
    assert state.language == "en"
    registry.handle(state, "/lang de")
    assert state.language == "fr"
