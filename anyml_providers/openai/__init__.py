"""OpenAI-style provider (also serves the OpenRouter preset)."""

from .client import OpenAIProvider, OpenRouterProvider

__all__ = ["OpenAIProvider", "OpenRouterProvider"]
