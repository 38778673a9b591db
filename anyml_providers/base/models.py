"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the implementations under
``anyml_providers.base.models_parts`` to keep imports stable.
"""

from .models_parts.message import Message, Role
from .models_parts.thinking import Thinking
from .models_parts.chat_options import ChatOptions, DEFAULT_MAX_TOKENS
from .models_parts.chat_chunk import AggregatedChat, ChatChunk, FinishReason
from .models_parts.model_info import Model, normalize_parameters, normalize_quantization, prettify_model_id
from .models_parts.prepared_request import PreparedRequest

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
    "normalize_parameters",
    "normalize_quantization",
    "prettify_model_id",
    "PreparedRequest",
]
