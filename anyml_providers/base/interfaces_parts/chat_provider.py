"""ChatProvider Protocol (single-class module).

Defines the polymorphic chat interface implemented by every provider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from ..models import ChatOptions, PreparedRequest

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..cancellation import CancellationToken
    from ..streaming.chat_stream import ChatStream


@runtime_checkable
class ChatProvider(Protocol):
    """Minimal interface for streaming chat providers.

    ``chat`` raises before returning when the request cannot be built or the
    initiating HTTP exchange fails; afterwards every failure is the terminal
    item of the returned stream.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"`` or ``"ollama"``."""
        ...

    def build_request(self, options: ChatOptions) -> PreparedRequest:
        """Encode ``options`` into the provider wire request (pure)."""
        ...

    async def chat(
        self,
        options: ChatOptions,
        *,
        cancel_token: Optional["CancellationToken"] = None,
    ) -> "ChatStream":
        """Send the request and return a lazy stream of chunks."""
        ...
