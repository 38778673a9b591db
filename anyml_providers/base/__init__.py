"""
Providers Base Package

Exports the provider-agnostic contracts, DTOs, streaming core and factory:

- Interfaces: ``ChatProvider``, ``HttpTransport`` and friends
- Models (DTOs): immutable request/response objects
- Streaming: decoder sessions and ``ChatStream``
- Factory: lazy creation of providers by canonical name
"""

from .errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    ProviderError,
    TransportError,
)
from .models import (
    AggregatedChat,
    ChatChunk,
    ChatOptions,
    FinishReason,
    Message,
    Model,
    PreparedRequest,
    Role,
    Thinking,
)
from .interfaces import ChatProvider, HttpTransport, ModelListingProvider, TransportResponse
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import ChatStream, StreamMetrics
from .provider_base import BaseChatProvider
from .factory import ProviderFactory, UnknownProviderError

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "ConfigurationError",
    # Models
    "Role",
    "Message",
    "Thinking",
    "ChatOptions",
    "ChatChunk",
    "FinishReason",
    "AggregatedChat",
    "Model",
    "PreparedRequest",
    # Interfaces
    "ChatProvider",
    "HttpTransport",
    "TransportResponse",
    "ModelListingProvider",
    # Timeouts & Cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "ChatStream",
    "StreamMetrics",
    # Providers
    "BaseChatProvider",
    "ProviderFactory",
    "UnknownProviderError",
]
