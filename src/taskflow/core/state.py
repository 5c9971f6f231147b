# src/taskflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .navigation import Router, Sidebar
from .ports import IdentityProvider, LLMClient, Notifier
from .store import Store


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace).
    settings: Any

    store: Store
    identity: IdentityProvider
    notifier: Notifier
    llm: LLMClient

    router: Router = field(default_factory=Router)
    sidebar: Sidebar = field(default_factory=Sidebar)
    language: str = "fr"
