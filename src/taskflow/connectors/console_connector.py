# src/taskflow/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """Transient notifications printed as timestamped one-liners."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _write(self, tag: str, message: str) -> None:
        out = self._stream or sys.stdout
        print(f"[{_ts_local()}] [{tag}] {message}", file=out, flush=True)

    def success(self, message: str) -> None:
        self._write("OK", message)

    def error(self, message: str) -> None:
        self._write("ERROR", message)


def _prompt(state: AppState) -> str:
    user = state.store.current_user
    who = user.email if user else "guest"
    return f"{who} {state.router.pathname} > "


def run_console_loop(state: AppState) -> None:
    logger.info("Console started (route=%s).", state.router.pathname)
    app_name = str(getattr(state.settings, "app_name", "TaskFlow Pro"))
    print(f"[{_ts_local()}] {app_name}. Use /help for commands, /login to sign in, /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # Bare words navigate ("tasks", "projets").
            user_input = f"/go {user_input}"

        try:
            response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response:
            print(response + "\n")

    logger.info("Console finished.")

