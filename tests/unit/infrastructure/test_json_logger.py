# tests/unit/infrastructure/test_json_logger.py
from __future__ import annotations

import contextvars
import json
import logging
import sys

import pytest

from polygon_rest.infrastructure.logging.logger import (
    _JsonFormatter,
    configure_root_logging,
    get_json_logger,
    get_request_id,
    get_trace_id,
    set_request_context,
)


def _render(msg: str, level: int = logging.INFO, exc_info=None, **extra) -> dict:
    """Build a record, attach ``extra`` the way ``logging`` does, and parse the JSON."""
    logger = logging.getLogger("test.polygon.logger")
    record = logger.makeRecord(logger.name, level, "test", 1, msg, (), exc_info, extra=extra)
    return json.loads(_JsonFormatter().format(record))


def test_configure_root_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    root = logging.getLogger()
    saved, saved_level = root.handlers[:], root.level
    root.handlers.clear()
    try:
        configure_root_logging()
        configure_root_logging()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, _JsonFormatter)

        configure_root_logging("WARNING")
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved
        root.setLevel(saved_level)


def test_stable_keys_and_extras_are_merged() -> None:
    payload = _render("polygon.retry", endpoint="options.bars", attempt=2)
    assert payload["message"] == "polygon.retry"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.polygon.logger"
    assert "ts" in payload
    assert payload["endpoint"] == "options.bars"
    assert payload["attempt"] == 2
    assert "pathname" not in payload


def test_non_json_extras_are_stringified() -> None:
    payload = _render("x", when=object)
    assert payload["when"] == str(object)


def test_request_id_from_record_then_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REQUEST_ID", raising=False)
    assert _render("a", request_id="rec-1")["request_id"] == "rec-1"

    monkeypatch.setenv("REQUEST_ID", "env-1")
    assert _render("b")["request_id"] == "env-1"


def test_request_context_is_scoped_to_the_current_context() -> None:
    def inside() -> dict:
        set_request_context(request_id="ctx-1", trace_id="abc123")
        set_request_context(trace_id="def456")
        assert get_request_id() == "ctx-1"
        assert get_trace_id() == "def456"
        return _render("scoped")

    payload = contextvars.copy_context().run(inside)
    assert payload["request_id"] == "ctx-1"
    assert payload["trace_id"] == "def456"
    assert get_request_id() is None


def test_exception_fields() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        payload = _render("failure", logging.ERROR, exc_info=sys.exc_info())
    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"


def test_get_json_logger_propagates() -> None:
    logger = get_json_logger("polygon_rest.test")
    assert logger.name == "polygon_rest.test"
    assert logger.propagate
