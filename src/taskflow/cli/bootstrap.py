# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the composition root:
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires concrete implementations into AppState (store/identity/LLM/notifier).
"""

from __future__ import annotations

import logging

from ..auth.identity import SupabaseIdentityClient
from ..auth.login import LoginForm
from ..config import get_settings
from ..core.navigation import Router
from ..core.ports import LLMClient, Notifier
from ..core.state import AppState
from ..core.store import Store
from ..llm.client import OpenRouterLLMClient
from ..llm.offline import OfflineLLMClient

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, notifier: Notifier | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings stay injectable to keep tests free of hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    if notifier is None:
        from ..connectors.console_connector import ConsoleNotifier

        notifier = ConsoleNotifier()

    llm_client: LLMClient
    try:
        llm_client = OpenRouterLLMClient(settings)
    except Exception as e:
        logger.info("LLM unavailable (%s); AI reports run offline.", e)
        llm_client = OfflineLLMClient()

    identity = SupabaseIdentityClient.from_settings(settings)
    if not identity.configured:
        logger.warning("Identity provider is not configured; /login and /register will fail.")

    return AppState(
        settings=settings,
        store=Store(),
        identity=identity,
        notifier=notifier,
        llm=llm_client,
        router=Router(initial=settings.login_route),
        language=settings.language,
    )


def make_login_form(state: AppState) -> LoginForm:
    return LoginForm(
        state.identity,
        state.notifier,
        state.router,
        dashboard_route=getattr(state.settings, "dashboard_route", "/dashboard"),
        lang=state.language,
    )
