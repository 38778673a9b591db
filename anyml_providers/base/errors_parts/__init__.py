"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `anyml_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    ApiError,
    ConfigurationError,
    DecodeError,
    ProviderError,
    TransportError,
)
from .classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "ConfigurationError",
    "classify_exception",
    "code_for_status",
]
