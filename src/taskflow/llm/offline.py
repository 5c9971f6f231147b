# src/taskflow/llm/offline.py

from __future__ import annotations

import json
from collections.abc import Iterable

from ..core.ports import ChatMessage


class OfflineLLMClient:
    """
    Deterministic stand-in used when no external LLM is configured.

    Report prompts carry the workspace data as a JSON block after a
    "DATA:" line; the offline client turns that into a plain status summary.
    """

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        user_text = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")

        _, sep, payload = user_text.partition("DATA:")
        try:
            data = json.loads(payload) if sep else {}
        except ValueError:
            data = {}

        tasks = data.get("tasks") or []
        projects = data.get("projects") or []
        done = sum(1 for t in tasks if t.get("status") == "done")
        doing = sum(1 for t in tasks if t.get("status") == "in_progress")

        yield "Offline report (no external LLM configured).\n"
        yield f"Tasks: {len(tasks)} total, {done} done, {doing} in progress, {len(tasks) - done - doing} to do.\n"
        for p in projects:
            yield f"Project {p.get('name') or p.get('id')}: {p.get('progress', 0)}%\n"
