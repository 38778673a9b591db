"""Timeout configuration for the bundled HTTP transport.

The decoding core never enforces a timeout; deadlines are a transport
concern. ``HttpxTransport`` reads its values from :func:`get_timeout_config`.

Environment overrides (all optional, positive floats):
    ANYML_TIMEOUT_START_SECONDS   connect timeout
    ANYML_TIMEOUT_STREAM_SECONDS  idle read timeout between body chunks
    ANYML_TIMEOUT_HTTP_SECONDS    write and pool timeouts
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

START_ENV = "ANYML_TIMEOUT_START_SECONDS"
STREAM_ENV = "ANYML_TIMEOUT_STREAM_SECONDS"
HTTP_ENV = "ANYML_TIMEOUT_HTTP_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Timeout for establishing the connection.
        stream_timeout_seconds: Idle timeout while waiting for the next body
            chunk of a streaming response.
        http_timeout_seconds: Baseline timeout for writes and pool acquisition.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            connect=self.start_timeout_seconds,
            read=self.stream_timeout_seconds,
            write=self.http_timeout_seconds,
            pool=self.http_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when any of the override variables changed since
    the last call, so tests can adjust them at runtime.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    guard = "/".join(os.getenv(name, "") for name in (START_ENV, STREAM_ENV, HTTP_ENV))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float(START_ENV, defaults.start_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(STREAM_ENV, defaults.stream_timeout_seconds),
        http_timeout_seconds=_parse_env_float(HTTP_ENV, defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
