"""Helpers shared by the provider request encoders.

Encoders are pure: they validate :class:`ChatOptions`, build the JSON body
and headers, and return a :class:`PreparedRequest`. Every validation failure
is a :class:`ConfigurationError`, raised before any network call.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from .constants import EMPTY_MESSAGES_ERROR, EMPTY_MODEL_ERROR, INVALID_MESSAGE_ERROR, MISSING_API_KEY_ERROR
from .errors import ConfigurationError
from .models import ChatOptions, Message


def validate_options(options: ChatOptions, provider: str) -> None:
    """Raise ConfigurationError for options that cannot be encoded."""
    if not isinstance(options.model, str) or not options.model.strip():
        raise ConfigurationError(message=EMPTY_MODEL_ERROR, provider=provider)
    if not options.messages:
        raise ConfigurationError(message=EMPTY_MESSAGES_ERROR, provider=provider, model=options.model)
    bad = next((m for m in options.messages if not isinstance(m, Message)), None)
    if bad is not None:
        raise ConfigurationError(
            message=f"{INVALID_MESSAGE_ERROR}, got {type(bad).__name__}",
            provider=provider,
            model=options.model,
        )


def require_api_key(api_key: Optional[str], provider: str, model: Optional[str] = None) -> str:
    if not api_key or not api_key.strip():
        raise ConfigurationError(message=MISSING_API_KEY_ERROR, provider=provider, model=model)
    return api_key.strip()


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and an absolute path without doubling slashes."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def encode_json(payload: Mapping[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def merge_extra(body: Dict[str, Any], extra: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge provider-specific fields last, so they override computed ones."""
    if extra:
        body.update(extra)
    return body


__all__ = [
    "validate_options",
    "require_api_key",
    "join_url",
    "encode_json",
    "merge_extra",
]
