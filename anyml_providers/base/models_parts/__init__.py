"""Models parts package: one DTO family per module.

Prefer importing from `anyml_providers.base.models` for the stable surface.
"""

from .message import Message, Role
from .thinking import Thinking
from .chat_options import ChatOptions, DEFAULT_MAX_TOKENS
from .chat_chunk import AggregatedChat, ChatChunk, FinishReason
from .model_info import Model
from .prepared_request import PreparedRequest

__all__ = [
    "Message",
    "Role",
    "Thinking",
    "ChatOptions",
    "DEFAULT_MAX_TOKENS",
    "ChatChunk",
    "FinishReason",
    "AggregatedChat",
    "Model",
    "PreparedRequest",
]
