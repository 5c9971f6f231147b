# src/taskflow/auth/login.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Literal

from ..core.ports import AuthSession, IdentityProvider, Navigator, Notifier
from ..i18n import t

logger = logging.getLogger(__name__)

Tab = Literal["login", "register"]


class FormValidationError(ValueError):
    """Client-side validation failure, raised before the identity provider is contacted."""


class LoginForm:
    """
    Sign-in / registration screen.

    `submit` never raises: every failure ends up as an error notification and
    the form is back in a ready (not loading) state afterwards. The form does
    not touch the store; callers decide what to do with the returned session.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        notifier: Notifier,
        navigator: Navigator,
        *,
        dashboard_route: str = "/dashboard",
        lang: str = "fr",
    ) -> None:
        self.identity = identity
        self.notifier = notifier
        self.navigator = navigator
        self.dashboard_route = dashboard_route
        self.lang = lang
        self.active_tab: Tab = "login"
        self.is_loading = False

    def set_tab(self, tab: Tab) -> None:
        if tab not in ("login", "register"):
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab

    def _validate(self, email: str, password: str, form: Mapping[str, str]) -> None:
        if not email or not password:
            raise FormValidationError(t("missing_credentials", self.lang))
        if self.active_tab == "register" and password != form.get("confirm-password", ""):
            raise FormValidationError(t("passwords_mismatch", self.lang))

    async def submit(self, form: Mapping[str, str]) -> AuthSession | None:
        self.is_loading = True

        email = (form.get("email") or "").strip()
        password = form.get("password") or ""

        try:
            self._validate(email, password, form)

            if self.active_tab == "login":
                session = await self.identity.sign_in_with_password(email, password)
                self.notifier.success(t("login_success", self.lang))
                self.navigator.push(self.dashboard_route)
            else:
                session = await self.identity.sign_up(email, password)
                self.notifier.success(t("signup_success", self.lang))
            return session
        except Exception as e:
            logger.info("%s failed: %s", self.active_tab, e)
            self.notifier.error(str(e).strip() or t("generic_error", self.lang))
            return None
        finally:
            self.is_loading = False
