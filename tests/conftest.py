# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.core.navigation import Router
from taskflow.core.state import AppState
from taskflow.core.store import Store
from taskflow.llm.offline import OfflineLLMClient

from .fakes import FakeIdentityProvider, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    A SimpleNamespace keeps unit tests independent of the process environment.
    """
    return SimpleNamespace(
        app_name="TaskFlow Pro",
        language="fr",
        dashboard_route="/dashboard",
        login_route="/auth/login",
        data_dir=tmp_path,
    )


@pytest.fixture()
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider({"ada@example.com": "secret"})


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def state(settings, identity, notifier) -> AppState:
    return AppState(
        settings=settings,
        store=Store(),
        identity=identity,
        notifier=notifier,
        llm=OfflineLLMClient(),
        router=Router(initial="/auth/login"),
        language="fr",
    )
