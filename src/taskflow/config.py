# src/taskflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the identity provider and LLM keys are
  only checked when they are actually used).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

ENV_PREFIX = "TASKFLOW"

SUPPORTED_LANGUAGES = ("fr", "en")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def normalize_language(raw: str | None) -> str:
    lang = (raw or "").strip().lower()[:2]
    return lang if lang in SUPPORTED_LANGUAGES else "fr"


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    language: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Identity provider (Supabase-compatible auth API) ----
    identity_url: str
    identity_anon_key: Optional[str]
    identity_timeout_seconds: float

    # ---- Routes ----
    dashboard_route: str
    login_route: str

    # ---- LLM / OpenRouter (AI reports) ----
    openrouter_api_key: Optional[str]
    openrouter_base_url: str
    llm_models: List[str]
    extra_headers: Dict[str, str]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "TaskFlow Pro")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        language = normalize_language(_env(_k("LANGUAGE"), "fr"))

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        # Accept the provider's own variable names too, so an existing .env works.
        identity_url = (
            _first_env(_k("IDENTITY_URL"), "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL", default="") or ""
        ).strip()
        identity_anon_key = _first_env(
            _k("IDENTITY_ANON_KEY"), "SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY", default=None
        )
        identity_timeout_seconds = _env_float(_k("IDENTITY_TIMEOUT_SECONDS"), 10.0)

        dashboard_route = _env(_k("DASHBOARD_ROUTE"), "/dashboard")
        login_route = _env(_k("LOGIN_ROUTE"), "/auth/login")

        openrouter_api_key = _first_env(_k("OPENROUTER_API_KEY"), "OPENROUTER_API_KEY", default=None)
        openrouter_base_url = _env(_k("OPENROUTER_BASE_URL"), "https://openrouter.ai/api/v1")
        extra_headers = {
            "HTTP-Referer": _env(_k("HTTP_REFERER"), "https://example.com"),
            "X-Title": app_name,
        }
        llm_models = _env_list(
            _k("LLM_MODELS"),
            [
                "qwen/qwen-2.5-72b-instruct:free",
                "deepseek/deepseek-chat-v3-0324:free",
            ],
        )

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskflow"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            language=language,
            console_enabled=console_enabled,
            identity_url=identity_url,
            identity_anon_key=identity_anon_key,
            identity_timeout_seconds=identity_timeout_seconds,
            dashboard_route=dashboard_route,
            login_route=login_route,
            openrouter_api_key=openrouter_api_key,
            openrouter_base_url=openrouter_base_url,
            llm_models=llm_models,
            extra_headers=extra_headers,
            data_dir=data_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
