"""Ollama-style provider."""

from .client import OllamaProvider

__all__ = ["OllamaProvider"]
