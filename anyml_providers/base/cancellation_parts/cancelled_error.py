"""Cancellation error type.

``CancelledError`` is the terminal item of a stream whose
:class:`CancellationToken` was cancelled. It is a :class:`ProviderError` so
that ``ChatStream.results()`` and error handlers treat it like any other
terminal error.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors_parts.error_code import ErrorCode
from ..errors_parts.provider_error import ProviderError


@dataclass
class CancelledError(ProviderError):
    """Raised when an operation is cancelled cooperatively."""

    code: ErrorCode = ErrorCode.CANCELLED
    message: str = "operation cancelled"
    provider: str = "unknown"


__all__ = ["CancelledError"]
