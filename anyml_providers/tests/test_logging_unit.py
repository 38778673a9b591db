"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import json
import logging

from anyml_providers.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from anyml_providers.base.log_support import JsonFormatter
from anyml_providers.tests.utils import events


def test_get_logger_nests_under_package_logger():
    assert get_logger("openai").name == "anyml.openai"  # nosec B101
    assert get_logger("anyml.stream").name == "anyml.stream"  # nosec B101
    base = get_logger()
    assert base.name == BASE_LOGGER_NAME and base.propagate is False  # nosec B101


def test_env_overrides_level(monkeypatch, log_capture):
    monkeypatch.setenv("ANYML_LOG_LEVEL", "ERROR")
    try:
        logger = get_logger("test.env")
        logger.info("hidden")
        logger.error("shown")
        assert [r.getMessage() for r in log_capture] == ["shown"]  # nosec B101 - asserts are appropriate in unit tests
    finally:
        monkeypatch.delenv("ANYML_LOG_LEVEL")
        configure_logger(level=logging.INFO)


def test_normalized_log_event_includes_required_keys(log_capture):
    logger = get_logger("test.normalized")
    ctx = LogContext(provider="p", model="m", extra={"stream_kind": "sse"})
    normalized_log_event(
        logger,
        "stream.end",
        ctx,
        phase="finalize",
        attempt=1,
        emitted=3,
        tokens={"total": 3},
        extra_field=123,
        phase_override=None,
    )
    (payload,) = events(log_capture)
    for k in REQUIRED_NORMALIZED_KEYS:
        if k == "error_code":
            assert k not in payload  # nosec B101
        else:
            assert k in payload  # nosec B101
    assert payload["provider"] == "p" and payload["stream_kind"] == "sse"  # nosec B101
    assert payload["extra_field"] == 123  # nosec B101
    assert "phase_override" not in payload  # nosec B101


def test_normalized_log_event_keeps_set_values(log_capture):
    normalized_log_event(get_logger("test.keep"), "x", phase="start", emitted=1, error_code="auth", tokens=5)
    (payload,) = events(log_capture)
    assert payload["error_code"] == "auth"  # nosec B101
    assert payload["tokens"] == {"value": "5"}  # nosec B101
    assert payload["attempt"] is None  # nosec B101


def test_log_event_drops_none(log_capture):
    log_event(get_logger("test.plain"), "thing", LogContext(provider="p"), a=1, b=None, level=logging.WARNING)
    (payload,) = events(log_capture)
    assert payload == {"event": "thing", "provider": "p", "a": 1}  # nosec B101
    assert log_capture[0].levelno == logging.WARNING  # nosec B101


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord("anyml.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    data = json.loads(formatter.format(record))
    assert data["event"] == "e" and data["n"] == 1  # nosec B101
    assert data["level"] == "INFO" and data["logger"] == "anyml.x"  # nosec B101
    assert "msg" not in data  # nosec B101

    plain = logging.LogRecord("anyml.x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    assert json.loads(formatter.format(plain))["msg"] == "hello world"  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "anyml.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(get_logger("test.file"), "to.file", level=logging.DEBUG, n=1)
        for h in logger.handlers:
            h.flush()
        line = path.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event"] == "to.file"  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101
