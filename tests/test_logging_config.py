"""Tests for configure_logging()."""

from __future__ import annotations

import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from newsroom_plots import configure_logging
from newsroom_plots.logging_config import LOG_FORMAT_ENV

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back the way the test found it."""

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("newsroom_plots.charts", logging.INFO, __file__, 1, message, None, None)


def test_json_is_the_default(monkeypatch) -> None:
    """Without configuration, log lines are JSON objects."""

    monkeypatch.delenv(LOG_FORMAT_ENV, raising=False)
    configure_logging()
    (handler,) = logging.getLogger().handlers
    assert isinstance(handler.formatter, jsonlogger.JsonFormatter)
    payload = json.loads(handler.formatter.format(_record("saved chart")))
    assert payload["message"] == "saved chart"
    assert payload["name"] == "newsroom_plots.charts"


def test_environment_selects_plain_text(monkeypatch) -> None:
    """NEWSROOM_PLOTS_LOG_FORMAT=plain switches to human-readable lines."""

    monkeypatch.setenv(LOG_FORMAT_ENV, "PLAIN")
    configure_logging()
    (handler,) = logging.getLogger().handlers
    assert not isinstance(handler.formatter, jsonlogger.JsonFormatter)
    assert "[INFO] newsroom_plots.charts: saved chart" in handler.formatter.format(_record("saved chart"))


def test_argument_beats_environment(monkeypatch) -> None:
    """force_format wins over the environment variable."""

    monkeypatch.setenv(LOG_FORMAT_ENV, "plain")
    configure_logging(force_format="json")
    (handler,) = logging.getLogger().handlers
    assert isinstance(handler.formatter, jsonlogger.JsonFormatter)


def test_repeated_calls_do_not_duplicate_handlers() -> None:
    """Configuring twice leaves a single handler on the root logger."""

    configure_logging(level=logging.DEBUG, force_format="plain")
    configure_logging(level=logging.DEBUG, force_format="plain")
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_both_modes_share_one_record_layout() -> None:
    """JSON and plain output carry the same fields."""

    configure_logging(force_format="plain")
    (plain,) = logging.getLogger().handlers
    configure_logging(force_format="json")
    (json_handler,) = logging.getLogger().handlers
    record = _record("saved chart")
    payload = json.loads(json_handler.formatter.format(record))
    assert {"asctime", "levelname", "name", "message"} <= set(payload)
    line = plain.formatter.format(record)
    assert line.endswith(f"[{payload['levelname']}] {payload['name']}: {payload['message']}")
