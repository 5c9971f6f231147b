# src/taskflow/auth/identity.py

"""
Client for a hosted Supabase-style (GoTrue) authentication API.

Only email+password sign-in and sign-up are used. The session returned by the
provider is kept on the client and never inspected by the rest of the app.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.models import User
from ..core.ports import AuthError, AuthSession

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    """Pick the most descriptive message from a provider error body."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("error_description", "msg", "message", "error"):
            val = data.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()
    return f"{resp.status_code} {resp.reason_phrase}".strip()


def _user_from_payload(data: dict[str, Any]) -> User | None:
    # Sign-in returns {"access_token", ..., "user": {...}}. Sign-up with email
    # confirmation enabled returns the user record itself.
    record = data.get("user") if isinstance(data.get("user"), dict) else data
    if not isinstance(record, dict) or not record.get("id"):
        return None
    return User.from_dict(record)


class SupabaseIdentityClient:
    def __init__(
        self,
        base_url: str,
        anon_key: str | None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or "").rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        # Injectable for tests (httpx.MockTransport).
        self._transport = transport
        self.session: AuthSession | None = None

    @classmethod
    def from_settings(cls, settings) -> SupabaseIdentityClient:
        return cls(
            getattr(settings, "identity_url", ""),
            getattr(settings, "identity_anon_key", None),
            timeout=float(getattr(settings, "identity_timeout_seconds", 10.0)),
        )

    @property
    def configured(self) -> bool:
        return bool(self._base_url and self._anon_key)

    def _client(self) -> httpx.AsyncClient:
        if not self.configured:
            raise AuthError("Identity provider is not configured (set TASKFLOW_IDENTITY_URL and TASKFLOW_IDENTITY_ANON_KEY).")
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "apikey": str(self._anon_key),
                "Authorization": f"Bearer {self._anon_key}",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _post(self, path: str, *, params: dict[str, str] | None = None, json: dict[str, Any]) -> dict[str, Any]:
        async with self._client() as client:
            try:
                resp = await client.post(path, params=params, json=json)
            except httpx.HTTPError as e:
                logger.info("Identity provider request failed: %s", e.__class__.__name__)
                raise AuthError(f"Identity provider unreachable: {e.__class__.__name__}") from e

        if resp.is_error:
            msg = _error_message(resp)
            logger.info("Identity provider rejected %s: %s", path, msg)
            raise AuthError(msg)

        try:
            data = resp.json()
        except ValueError as e:
            raise AuthError("Identity provider returned an invalid response") from e
        return data if isinstance(data, dict) else {}

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        data = await self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = AuthSession(user=_user_from_payload(data), raw=data)
        self.session = session
        logger.info("Signed in user_id=%s", session.user.id if session.user else None)
        return session

    async def sign_up(self, email: str, password: str) -> AuthSession:
        data = await self._post("/auth/v1/signup", json={"email": email, "password": password})
        session = AuthSession(user=_user_from_payload(data), raw=data)
        logger.info("Signed up user_id=%s", session.user.id if session.user else None)
        return session

    async def sign_out(self) -> None:
        # Only the local session is dropped; the provider token simply expires.
        self.session = None
