"""
ChatOptions DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to their wire bodies. The options
carry model selection, the ordered messages, generation parameters, an
optional thinking configuration and an ``extra`` escape hatch for
provider-specific body fields. Instances are frozen: build a new one (or use
``dataclasses.replace``) instead of mutating a submitted request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple

from .message import Message
from .thinking import Thinking

DEFAULT_MAX_TOKENS = 4096


@dataclass(frozen=True)
class ChatOptions:
    """Normalized, immutable chat request.

    Attributes:
        model: Target model identifier. Must be non-empty when sent.
        messages: Ordered messages; lists are frozen into a tuple.
        max_tokens: Completion token cap, clamped to at least 1.
        temperature: Sampling temperature when supported.
        top_p: Nucleus sampling parameter when supported.
        stop: Stop sequences; a single string is one sequence.
        thinking: Optional reasoning configuration.
        extra: Provider-specific body fields merged last into the request.
    """

    model: str
    messages: Tuple[Message, ...] = ()
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stop: Tuple[str, ...] = ()
    thinking: Optional[Thinking] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages))
        stop = (self.stop,) if isinstance(self.stop, str) else tuple(self.stop)
        object.__setattr__(self, "stop", stop)
        object.__setattr__(self, "max_tokens", max(int(self.max_tokens), 1))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def create(cls, model: str, messages: Sequence[Message | str], **params: Any) -> "ChatOptions":
        """Build options, treating bare strings as user messages."""
        msgs = tuple(m if isinstance(m, Message) else Message.user(m) for m in messages)
        return cls(model=model, messages=msgs, **params)


__all__ = [
    "ChatOptions",
    "DEFAULT_MAX_TOKENS",
]
