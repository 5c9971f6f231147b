# tests/test_logging_setup.py

from __future__ import annotations

import logging

from taskflow.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_hides_store_chatter_but_keeps_app_logs() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("taskflow.cli.main", logging.INFO))
    assert not f.filter(_record("taskflow.core.store", logging.DEBUG))
    assert f.filter(_record("taskflow.core.store", logging.ERROR))


def test_console_filter_thresholds_for_libraries() -> None:
    f = _ConsoleNoiseFilter()

    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("httpcore.connection", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("openai", logging.WARNING))
    assert f.filter(_record("openai", logging.ERROR))
