# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets; keep them in .env (local, gitignored).
"""

ENV_VARS = {
    # App / logging
    "TASKFLOW_APP_NAME": "App display name (default: TaskFlow Pro).",
    "TASKFLOW_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKFLOW_LANGUAGE": "UI language: fr or en (default: fr).",
    "TASKFLOW_CONSOLE_ENABLED": "Run the interactive console (true/false).",
    # Identity provider
    "TASKFLOW_IDENTITY_URL": "Auth API base URL (also read: SUPABASE_URL).",
    "TASKFLOW_IDENTITY_ANON_KEY": "Public anon key (also read: SUPABASE_ANON_KEY).",
    "TASKFLOW_IDENTITY_TIMEOUT_SECONDS": "HTTP timeout for auth calls (default: 10).",
    # Routes
    "TASKFLOW_DASHBOARD_ROUTE": "Route opened after sign-in (default: /dashboard).",
    "TASKFLOW_LOGIN_ROUTE": "Route shown at start and after logout (default: /auth/login).",
    # AI reports
    "TASKFLOW_OPENROUTER_API_KEY": "OpenRouter API key (optional; offline reports without it).",
    "TASKFLOW_OPENROUTER_BASE_URL": "OpenRouter base URL (default: https://openrouter.ai/api/v1).",
    "TASKFLOW_LLM_MODELS": "Comma/space separated list of models to try in order.",
    "TASKFLOW_HTTP_REFERER": "Optional OpenRouter metadata header.",
    # Paths (gitignored)
    "TASKFLOW_DATA_DIR": "Local data directory for logs (default: .local/taskflow).",
}
