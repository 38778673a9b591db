"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``anyml_providers.base.errors_parts`` to maintain a stable import path.
It also hosts :func:`api_error_from_body`, which turns a provider error body
into an :class:`ApiError`.
"""
from __future__ import annotations

import json
from contextlib import suppress
from typing import Any, Optional

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    ApiError,
    ConfigurationError,
    DecodeError,
    ProviderError,
    TransportError,
)
from .errors_parts.classification import classify_exception, code_for_status

# Error bodies are truncated before being attached to exceptions and logs.
_MAX_BODY_CHARS = 2000


def _describe_error_payload(payload: Any) -> tuple[Optional[str], Optional[str]]:
    """Return ``(message, type)`` from the known provider error shapes.

    Shapes:
        - OpenAI: ``{"error": {"message": ..., "type": ...}}``
        - Anthropic: ``{"type": "error", "error": {"type": ..., "message": ...}}``
        - Ollama: ``{"error": "..."}``
    """
    if not isinstance(payload, dict):
        return None, None
    err = payload.get("error")
    if isinstance(err, str):
        return err, None
    if isinstance(err, dict):
        message = err.get("message")
        err_type = err.get("type") or err.get("code")
        return (
            message if isinstance(message, str) else None,
            str(err_type) if err_type is not None else None,
        )
    return None, None


def api_error_from_body(
    body: bytes | str,
    *,
    provider: str,
    model: Optional[str] = None,
    status_code: Optional[int] = None,
) -> ApiError:
    """Build an :class:`ApiError` from a (possibly structured) error body.

    Parameters:
        body: Raw response body; decoded leniently when given as bytes.
        provider: Provider key for the error.
        model: Optional model name from the request.
        status_code: HTTP status, or ``None`` when the error was embedded in a
            successful stream.

    Returns:
        ApiError whose ``code`` derives from the status (``API`` when absent)
        and whose ``message`` prefers the provider's own error message.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    message: Optional[str] = None
    err_type: Optional[str] = None
    with suppress(ValueError, RecursionError):
        message, err_type = _describe_error_payload(json.loads(text))
    if not message:
        message = text.strip() or "<empty body>"
        if status_code is not None:
            message = f"HTTP {status_code}: {message}"
    return ApiError(
        code=code_for_status(status_code) if status_code is not None else ErrorCode.API,
        message=message[:_MAX_BODY_CHARS],
        provider=provider,
        model=model,
        status_code=status_code,
        error_type=err_type,
        body=text[:_MAX_BODY_CHARS],
    )


__all__ = [
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "ConfigurationError",
    "classify_exception",
    "code_for_status",
    "api_error_from_body",
]
