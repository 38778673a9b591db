"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports the Protocols defined under ``anyml_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import (
    ChatProvider,
    HttpTransport,
    ModelListingProvider,
    TransportResponse,
)

__all__ = [
    "ChatProvider",
    "HttpTransport",
    "TransportResponse",
    "ModelListingProvider",
]
