"""anyml_providers package

Streaming chat over several LLM HTTP backends behind one interface.

Purpose:
    A caller builds :class:`ChatOptions`, hands them to any provider's
    ``chat`` and pulls normalized :class:`ChatChunk` objects from the returned
    :class:`ChatStream`, whatever wire protocol the backend speaks
    (OpenAI-style SSE, Anthropic-style named SSE events, Ollama NDJSON).

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`
    - Providers: ``OpenAIProvider``, ``OpenRouterProvider``,
      ``AnthropicProvider``, ``OllamaProvider``
    - Transports: ``HttpxTransport``, ``MockTransport``, ``MockResponse``
    - DTOs, errors, interfaces and cancellation primitives from ``base``

Example::

    async with HttpxTransport() as transport:
        provider = create("ollama", transport)
        stream = await provider.chat(ChatOptions.create("llama3.2", ["Hi"]))
        async for chunk in stream:
            print(chunk.content, end="")
"""

from typing import Any, Optional

from .base import (
    AggregatedChat,
    ApiError,
    BaseChatProvider,
    CancellationToken,
    CancelledError,
    ChatChunk,
    ChatOptions,
    ChatProvider,
    ChatStream,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    FinishReason,
    HttpTransport,
    Message,
    Model,
    ModelListingProvider,
    PreparedRequest,
    ProviderError,
    ProviderFactory,
    Role,
    Thinking,
    TransportError,
    TransportResponse,
    UnknownProviderError,
)
from .base.dto import AdapterParams
from .base.http import HttpxTransport
from .base.logging import configure_logger
from .mock import MockResponse, MockTransport
from .openai import OpenAIProvider, OpenRouterProvider
from .anthropic import AnthropicProvider
from .ollama import OllamaProvider

__version__ = "0.1.0"


def create(
    provider: str,
    transport: Optional[HttpTransport] = None,
    *,
    params: Optional[AdapterParams] = None,
    **kwargs: Any,
) -> BaseChatProvider:
    """Create a provider by canonical name.

    Parameters:
        provider: ``"openai"``, ``"openrouter"``, ``"anthropic"`` or ``"ollama"``.
        transport: Transport to send requests through; a new
            :class:`HttpxTransport` when omitted.
        params: Optional :class:`AdapterParams`.
        **kwargs: Constructor keywords (``api_key``, ``base_url``, ``headers``).

    Raises:
        ConfigurationError: unknown provider or invalid constructor arguments.
    """
    try:
        adapter, arguments = ProviderFactory.resolve(provider, params=params, **kwargs)
    except UnknownProviderError as exc:
        raise ConfigurationError(message=str(exc), provider=(provider or "unknown"), raw=exc) from exc
    # default transport is opened only for a valid name and arguments
    return adapter(transport if transport is not None else HttpxTransport(), **arguments)


__all__ = [
    "__version__",
    "create",
    "configure_logger",
    # Providers
    "BaseChatProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "AnthropicProvider",
    "OllamaProvider",
    "ProviderFactory",
    "UnknownProviderError",
    "AdapterParams",
    # Transports
    "HttpTransport",
    "TransportResponse",
    "HttpxTransport",
    "MockTransport",
    "MockResponse",
    # Interfaces
    "ChatProvider",
    "ModelListingProvider",
    # Models
    "Role",
    "Message",
    "Thinking",
    "ChatOptions",
    "ChatChunk",
    "FinishReason",
    "AggregatedChat",
    "ChatStream",
    "Model",
    "PreparedRequest",
    # Errors
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "ConfigurationError",
    # Cancellation
    "CancellationToken",
    "CancelledError",
]
