# src/taskflow/llm/client.py

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Optional

import httpx
import openai
from openai import OpenAI

from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)


def _is_auth_error(exc: Exception) -> bool:
    return isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError))


def _is_skippable(exc: Exception) -> bool:
    """Errors after which the next model in the list is worth trying."""
    return isinstance(
        exc,
        (
            openai.NotFoundError,
            openai.RateLimitError,
            openai.APIConnectionError,  # includes APITimeoutError
            openai.InternalServerError,
        ),
    )


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "API key is not set" in msg:
        return "AI reports are not configured (missing API key). Set TASKFLOW_OPENROUTER_API_KEY in .env."
    if "model list is empty" in msg:
        return "AI reports are not configured (no models). Set TASKFLOW_LLM_MODELS in .env."
    return msg


class OpenRouterLLMClient:
    """
    OpenAI-compatible chat client with ordered model fallback.

    - Models are tried in settings order.
    - 404 / rate limit / network / 5xx -> next model (404s are parked for an hour).
    - Auth errors fail fast.
    """

    BAD_MODEL_PARK_SECONDS = 3600.0

    def __init__(self, settings, *, client: OpenAI | None = None) -> None:
        api_key = getattr(settings, "openrouter_api_key", None)
        if client is None and (not api_key or not str(api_key).strip()):
            raise RuntimeError("LLM API key is not set.")

        self._models: List[str] = [m.strip() for m in (getattr(settings, "llm_models", None) or []) if m.strip()]
        if not self._models:
            raise RuntimeError("LLM model list is empty.")

        self._headers: Dict[str, str] = dict(getattr(settings, "extra_headers", {}) or {})
        # Retries are off so a slow model falls through to the next one quickly.
        self._client = client or OpenAI(
            base_url=str(getattr(settings, "openrouter_base_url", "")),
            api_key=str(api_key),
            timeout=httpx.Timeout(connect=5.0, read=30.0, write=10.0, pool=5.0),
            max_retries=0,
        )
        self._bad_models: dict[str, float] = {}  # model -> retry_at (monotonic)

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        last_error: Optional[Exception] = None
        now = time.monotonic()

        for model in self._models:
            if self._bad_models.get(model, 0.0) > now:
                continue

            logger.info("LLM: trying model=%s", model)
            stream: Any = None
            produced = False
            try:
                stream = self._client.chat.completions.create(
                    model=model,
                    stream=True,
                    extra_headers=self._headers or None,
                    messages=[{"role": "system", "content": system_prompt}, *messages],
                )
                for chunk in stream:
                    content = chunk.choices[0].delta.content if chunk.choices else None
                    if content:
                        produced = True
                        yield content
                if produced:
                    return
                last_error = RuntimeError(f"Model returned no content: {model}")
            except Exception as e:
                if _is_auth_error(e):
                    raise RuntimeError("LLM authentication failed. Check TASKFLOW_OPENROUTER_API_KEY.") from e
                if isinstance(e, openai.NotFoundError):
                    self._bad_models[model] = time.monotonic() + self.BAD_MODEL_PARK_SECONDS
                if _is_skippable(e):
                    logger.info("LLM: %s on model=%s, trying next", e.__class__.__name__, model)
                else:
                    logger.warning("LLM: unexpected %s on model=%s, trying next", e.__class__.__name__, model)
                last_error = e
            finally:
                close = getattr(stream, "close", None)
                if callable(close):
                    close()

        raise RuntimeError("All LLM models failed.") from last_error
