"""Structured logging for the provider layer.

Every package logger is a child of the shared ``anyml`` logger, which owns
one stderr handler (JSON lines by default) and does not propagate to the root
logger. Events are single JSON objects built by :func:`log_event`;
:func:`normalized_log_event` adds the keys shared by all chat events
(``structured``, ``phase``, ``attempt``, ``error_code``, ``emitted``,
``tokens``) so every provider can be filtered the same way.

API keys and request bodies are never handed to these helpers.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "anyml"
LOG_LEVEL_ENV = "ANYML_LOG_LEVEL"

REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)

# Marker attributes on handlers/loggers managed by this module.
_READY = "_anyml_ready"
_CONSOLE = "_anyml_console"
_ROTATING = "_anyml_rotating"

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_level(value: int | str | None, default: int = logging.INFO) -> int:
    """Turn ``"debug"`` / ``"WARN"`` / ``10`` into a level; unknown -> ``default``."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    name = value.strip().upper()
    if name == "WARN":
        name = "WARNING"
    return getattr(logging, name) if name in _LEVEL_NAMES else default


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Set up the ``anyml`` logger on first use.

    Afterwards only ``ANYML_LOG_LEVEL`` changes its level here, so a level
    chosen with :func:`configure_logger` survives later ``get_logger`` calls.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv(LOG_LEVEL_ENV)
    if getattr(logger, _READY, False):
        if env_level:
            logger.setLevel(_parse_level(env_level, default=logger.level))
        return logger

    effective = _parse_level(env_level, default=level)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(effective)
    console.setFormatter(_formatter(json_mode))
    setattr(console, _CONSOLE, True)

    for stale in [h for h in logger.handlers if getattr(h, _CONSOLE, False)]:
        logger.removeHandler(stale)
    logger.addHandler(console)
    logger.setLevel(effective)
    logger.propagate = False
    setattr(logger, _READY, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the ``anyml`` logger.

    ``"openai"`` and ``"anyml.openai"`` both give ``anyml.openai``. Children
    carry no level or handler of their own.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    qualified = name if name.startswith(BASE_LOGGER_NAME + ".") else f"{BASE_LOGGER_NAME}.{name}"
    child = logging.getLogger(qualified)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level:
        New level for the logger and all of its handlers; ``None`` keeps it.
    file_path:
        Attach a rotating file handler (10 MB x 5) writing there, replacing
        the one managed earlier. ``None`` removes the managed file handler.
    json_mode:
        JSON lines (default) or plain text for the file handler.

    Returns
    -------
    logging.Logger
        The ``anyml`` logger. Handlers added by callers are left alone.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level))
        for handler in logger.handlers:
            handler.setLevel(logger.level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in [h for h in logger.handlers if getattr(h, _ROTATING, False)]:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            handler.setFormatter(_formatter(json_mode))
            handler.setLevel(logger.level)
            return logger
        logger.removeHandler(handler)
        with contextlib.suppress(OSError):
            handler.close()

    if target is not None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        rotating = RotatingFileHandler(target, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(rotating, _ROTATING, True)
        rotating.setLevel(logger.level)
        rotating.setFormatter(_formatter(json_mode))
        logger.addHandler(rotating)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``{"event": event, **ctx, **fields}`` as one JSON message.

    ``None`` fields are dropped unless ``keep_none`` is set.
    """
    payload: Dict[str, Any] = {"event": event, **(ctx.to_dict() if ctx else {})}
    payload.update((k, v) for k, v in fields.items() if keep_none or v is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def _coerce_tokens(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, Mapping):
        return dict(tokens) if tokens is not None else None
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: int | bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Log ``event`` with the normalized keys always present.

    ``error_code`` is left out entirely when there is no error. Extra fields
    set to ``None`` are dropped and never replace a normalized key that has a
    value.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
]
