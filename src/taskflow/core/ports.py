# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations, so the
hosted identity provider, the notification surface and the LLM backend stay
swappable and tests can use fakes.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from .models import User

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class AuthError(RuntimeError):
    """Identity provider failure (bad credentials, provider error, not configured)."""


@dataclass(frozen=True, slots=True)
class AuthSession:
    """
    Result of a successful sign-in or sign-up.

    `user` may be None after sign-up when the provider requires email
    confirmation first. `raw` is the provider payload, kept opaque.
    """

    user: User | None
    raw: dict[str, Any]


class IdentityProvider(Protocol):
    """Hosted authentication service. Failures raise AuthError."""

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession: ...
    async def sign_up(self, email: str, password: str) -> AuthSession: ...
    async def sign_out(self) -> None: ...


class Notifier(Protocol):
    """Transient user-facing messages (toasts)."""

    def success(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


class Navigator(Protocol):
    def push(self, path: str) -> None: ...


class LLMClient(Protocol):
    """Streaming chat completion client (OpenAI/OpenRouter-compatible)."""

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]: ...
