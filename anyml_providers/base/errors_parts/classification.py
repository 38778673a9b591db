"""Map exceptions and HTTP statuses onto :class:`ErrorCode` values.

Transports built on other clients raise their own exception types; the
classifier looks for an HTTP status on them first, then recognizes the
standard connection errors, and finally falls back to matching well-known
phrases in the message.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Iterator, Optional, Tuple

from .error_code import ErrorCode
from .provider_error import ProviderError

_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,  # Anthropic "overloaded"
}

# Checked in order; every needle of a group must occur in the message.
_MESSAGE_HINTS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RATE_LIMIT, ("rate", "limit")),
    (ErrorCode.TIMEOUT, ("timeout",)),
    (ErrorCode.TIMEOUT, ("timed out",)),
    (ErrorCode.AUTH, ("unauthorized",)),
    (ErrorCode.AUTH, ("forbidden",)),
    (ErrorCode.UNAVAILABLE, ("connection refused",)),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.TRANSIENT, ("connection reset",)),
    (ErrorCode.TRANSIENT, ("broken pipe",)),
    (ErrorCode.TRANSIENT, ("incomplete",)),
    (ErrorCode.NOT_FOUND, ("not found",)),
    (ErrorCode.SERVER_ERROR, ("server error",)),
)


def _status_candidates(exc: BaseException) -> Iterator[object]:
    yield getattr(exc, "status_code", None)
    yield getattr(exc, "status", None)
    yield getattr(getattr(exc, "response", None), "status_code", None)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by ``exc`` (``status_code``, ``status``
    or ``response.status_code``), or ``None``."""
    for value in _status_candidates(exc):
        if isinstance(value, int) and not isinstance(value, bool) and 100 <= value < 600:
            return value
    return None


def code_for_status(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode`.

    Unlisted 5xx statuses become ``SERVER_ERROR``; anything else unlisted is
    ``API``.
    """
    code = _HTTP_STATUS_MAP.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if 500 <= status < 600 else ErrorCode.API


def _code_from_message(message: str) -> Optional[ErrorCode]:
    text = message.lower()
    for code, needles in _MESSAGE_HINTS:
        if all(needle in text for needle in needles):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify ``exc``.

    Order: an existing :class:`ProviderError` keeps its code, timeouts are
    ``TIMEOUT``, a carried HTTP status is mapped, refused connections are
    ``UNAVAILABLE`` and reset/aborted ones ``TRANSIENT``, then message hints
    apply. ``UNKNOWN`` otherwise.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        return code_for_status(status)
    if isinstance(exc, ConnectionRefusedError):
        return ErrorCode.UNAVAILABLE
    if isinstance(exc, (ConnectionResetError, ConnectionAbortedError, BrokenPipeError)):
        return ErrorCode.TRANSIENT
    return _code_from_message(str(exc)) or ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "code_for_status",
]
