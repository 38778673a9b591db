"""
Normalized output DTOs produced by the streaming decoders.

`ChatChunk` is one unit of incremental response content. `AggregatedChat`
accumulates a sequence of chunks into the full reply. `FinishReason`
normalizes the provider-specific stop reasons.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class FinishReason(str, Enum):
    """Why the model stopped producing output."""

    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    OTHER = "other"

    @classmethod
    def from_provider(cls, value: Optional[str]) -> Optional["FinishReason"]:
        """Map a provider stop reason onto the normalized enum.

        ``None`` stays ``None``; unknown non-empty values map to ``OTHER``.
        """
        if value is None or value == "":
            return None
        return _PROVIDER_REASONS.get(str(value).lower(), cls.OTHER)


_PROVIDER_REASONS = {
    # OpenAI-style
    "stop": FinishReason.STOP,
    "length": FinishReason.LENGTH,
    "content_filter": FinishReason.CONTENT_FILTER,
    "tool_calls": FinishReason.TOOL_CALLS,
    "function_call": FinishReason.TOOL_CALLS,
    # Anthropic-style
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "pause_turn": FinishReason.STOP,
    "max_tokens": FinishReason.LENGTH,
    "tool_use": FinishReason.TOOL_CALLS,
    "refusal": FinishReason.CONTENT_FILTER,
    # Ollama-style done_reason values besides stop/length
    "load": FinishReason.OTHER,
    "unload": FinishReason.OTHER,
}


@dataclass(frozen=True)
class ChatChunk:
    """One incremental piece of a streamed reply.

    Attributes:
        content: Text delta; may be empty (e.g. a role-only or final frame).
        finish_reason: Set on the frame that reports why generation stopped.
        thinking: Reasoning text delta for models emitting it separately.
    """

    content: str = ""
    finish_reason: Optional[FinishReason] = None
    thinking: Optional[str] = None

    @property
    def is_final(self) -> bool:
        return self.finish_reason is not None


@dataclass
class AggregatedChat:
    """Concatenation of a chunk sequence."""

    content: str = ""
    thinking: Optional[str] = None
    finish_reason: Optional[FinishReason] = None

    def push(self, chunk: ChatChunk) -> None:
        self.content += chunk.content
        if chunk.thinking:
            self.thinking = (self.thinking or "") + chunk.thinking
        if chunk.finish_reason is not None:
            self.finish_reason = chunk.finish_reason

    @classmethod
    def from_chunks(cls, chunks: Iterable[ChatChunk]) -> "AggregatedChat":
        result = cls()
        for chunk in chunks:
            result.push(chunk)
        return result


__all__ = [
    "FinishReason",
    "ChatChunk",
    "AggregatedChat",
]
