"""anyml_providers.config.defaults
===============================

Small, stable default values used by the configuration layer. They can be
overridden by the external config file, environment variables, or explicit
constructor arguments.

This module performs no I/O; only plain constants live here.
"""

from __future__ import annotations

from ..base.constants import (
    ANTHROPIC_BASE_URL,
    OLLAMA_BASE_URL,
    OPENAI_BASE_URL,
    OPENROUTER_BASE_URL,
)

# Default models, used when a caller asks the config layer for one.
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"
OLLAMA_DEFAULT_MODEL = "llama3.2"

OPENAI_DEFAULT_BASE_URL = OPENAI_BASE_URL
OPENROUTER_DEFAULT_BASE_URL = OPENROUTER_BASE_URL
ANTHROPIC_DEFAULT_BASE_URL = ANTHROPIC_BASE_URL
OLLAMA_DEFAULT_BASE_URL = OLLAMA_BASE_URL



__all__ = [
    "OPENAI_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_BASE_URL",
]
