"""Pytest configuration for the anyml_providers test suite.

Every test runs with a clean configuration: provider credential and endpoint
variables are removed, the ``.env`` lookup points at a missing file, and the
configuration caches are reset before and after the test.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from anyml_providers.base.logging import BASE_LOGGER_NAME
from anyml_providers.config import reset_config_cache
from anyml_providers.mock import MockTransport

_PROVIDER_PREFIXES = ("OPENAI", "OPENROUTER", "ANTHROPIC", "OLLAMA")
_SUFFIXES = ("API_KEY", "BASE_URL", "MODEL")
_ANYML_VARS = (
    "ANYML_CONFIG_FILE",
    "ANYML_LOG_LEVEL",
    "ANYML_TIMEOUT_START_SECONDS",
    "ANYML_TIMEOUT_STREAM_SECONDS",
    "ANYML_TIMEOUT_HTTP_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Remove ambient configuration so tests only see what they set."""
    for prefix in _PROVIDER_PREFIXES:
        for suffix in _SUFFIXES:
            monkeypatch.delenv(f"{prefix}_{suffix}", raising=False)
    for name in _ANYML_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    """Collect records emitted on the package logger (which does not propagate)."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    logger = logging.getLogger(BASE_LOGGER_NAME)
    logger.addHandler(handler)
    try:
        yield records
    finally:
        logger.removeHandler(handler)


@pytest.fixture()
def transport() -> MockTransport:
    return MockTransport()
