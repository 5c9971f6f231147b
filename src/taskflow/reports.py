# src/taskflow/reports.py

"""AI status reports over the current store snapshot."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date

from .core.state import AppState
from .core.store import Snapshot

logger = logging.getLogger(__name__)

REPORT_SYSTEM_PROMPT = (
    "You are the reporting assistant of a project management dashboard. "
    "Write a short status report for the team: overall progress, what is at risk "
    "(overdue or blocked work), and the next priorities. Be concise and factual. "
    "Answer in {language}."
)

_LANGUAGE_NAMES = {"fr": "French", "en": "English"}


def build_report_prompt(snapshot: Snapshot, today: date | None = None) -> str:
    today = today or date.today()
    data = {
        "today": today.isoformat(),
        "tasks": [t.to_dict() for t in snapshot.tasks],
        "projects": [p.to_dict() for p in snapshot.projects],
    }
    return "Write the status report for this workspace.\nDATA:" + json.dumps(data, ensure_ascii=False, default=str)


def stream_report(state: AppState, today: date | None = None) -> Iterable[str]:
    lang = getattr(state.settings, "language", "fr")
    system_prompt = REPORT_SYSTEM_PROMPT.format(language=_LANGUAGE_NAMES.get(lang, "French"))
    prompt = build_report_prompt(state.store.snapshot, today)
    logger.info(
        "Generating report tasks=%d projects=%d",
        len(state.store.tasks),
        len(state.store.projects),
    )
    return state.llm.stream_chat([{"role": "user", "content": prompt}], system_prompt)


def generate_report(state: AppState, today: date | None = None) -> str:
    return "".join(stream_report(state, today)).strip()
