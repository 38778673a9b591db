"""Shared constants for provider adapters.

Centralizes default endpoints, API versions and common error messages so the
values are not scattered across the provider modules.
"""

from __future__ import annotations

# Default base URLs (no trailing slash)
OPENAI_BASE_URL = "https://api.openai.com"
OPENROUTER_BASE_URL = "https://openrouter.ai/api"
ANTHROPIC_BASE_URL = "https://api.anthropic.com"
OLLAMA_BASE_URL = "http://localhost:11434"

ANTHROPIC_API_VERSION = "2023-06-01"

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

# Common error messages
MISSING_API_KEY_ERROR = "API key is required; set it explicitly or via the environment"
EMPTY_MODEL_ERROR = "model must be a non-empty string"
EMPTY_MESSAGES_ERROR = "messages must contain at least one message"
INVALID_MESSAGE_ERROR = "messages must be Message instances"

# Sentinels
OPENAI_DONE_SENTINEL = "[DONE]"
ANTHROPIC_STOP_EVENT = "message_stop"

__all__ = [
    "OPENAI_BASE_URL",
    "OPENROUTER_BASE_URL",
    "ANTHROPIC_BASE_URL",
    "OLLAMA_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "JSON_CONTENT_TYPE",
    "EVENT_STREAM_CONTENT_TYPE",
    "MISSING_API_KEY_ERROR",
    "EMPTY_MODEL_ERROR",
    "EMPTY_MESSAGES_ERROR",
    "INVALID_MESSAGE_ERROR",
    "OPENAI_DONE_SENTINEL",
    "ANTHROPIC_STOP_EVENT",
]
