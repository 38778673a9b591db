"""Anthropic-style provider."""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]
