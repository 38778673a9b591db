"""Single-class Protocol modules; import from ``base.interfaces``."""

from .chat_provider import ChatProvider
from .http_transport import HttpTransport, TransportResponse
from .model_listing_provider import ModelListingProvider

__all__ = [
    "ChatProvider",
    "HttpTransport",
    "TransportResponse",
    "ModelListingProvider",
]
