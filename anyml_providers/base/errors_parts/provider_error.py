"""
Structured provider error exception types.

``ProviderError`` wraps every failure surfaced by the chat layer with a
normalized `ErrorCode`. The four kinds a caller distinguishes are subclasses:

- :class:`TransportError` - network/connection failure.
- :class:`DecodeError` - malformed frame or JSON, or an event missing
  required fields.
- :class:`ApiError` - non-success HTTP status or an embedded structured
  error sent by the provider.
- :class:`ConfigurationError` - invalid request construction, detected
  before any network call.

Transport and decode errors are terminal for their stream; none of them is
retried by this package.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


@dataclass
class TransportError(ProviderError):
    """Network or connection failure raised by (or around) the transport."""


@dataclass
class DecodeError(ProviderError):
    """A frame or line could not be decoded into a chunk."""

    code: ErrorCode = ErrorCode.DECODE
    message: str = "malformed stream frame"
    provider: str = "unknown"
    frame: Optional[str] = None


@dataclass
class ApiError(ProviderError):
    """The provider rejected the request or reported a structured error.

    Attributes:
        status_code: HTTP status of the response (``None`` for errors embedded
            in an otherwise successful stream).
        error_type: Provider error type string when the body carried one
            (e.g. ``"invalid_request_error"``).
        body: Raw response body text, truncated for logging.
    """

    code: ErrorCode = ErrorCode.API
    message: str = "provider returned an error"
    provider: str = "unknown"
    status_code: Optional[int] = None
    error_type: Optional[str] = None
    body: Optional[str] = None


@dataclass
class ConfigurationError(ProviderError):
    """The request could not be built from the given options."""

    code: ErrorCode = ErrorCode.CONFIGURATION
    message: str = "invalid configuration"
    provider: str = "unknown"


__all__ = [
    "ProviderError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "ConfigurationError",
]
