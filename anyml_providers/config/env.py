"""anyml_providers.config.env
==========================

Environment variable mapping and helpers for provider credentials.

``ENV_MAP`` is the single source of truth for the canonical API key variable
of each key-authenticated provider. Ollama runs locally without a key and is
intentionally absent.

Helpers never raise on unknown providers or unset variables; callers decide
how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")


def is_placeholder(val: Optional[str]) -> bool:
    """True for template values such as ``<placeholder>``, ``changeme`` or ``test_x``."""
    if val is None:
        return False
    lowered = str(val).strip().lower()
    return lowered.startswith("test_") or any(marker in lowered for marker in _PLACEHOLDER_MARKERS)


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API key variable for a provider, if any."""
    return ENV_MAP.get(provider.lower()) if provider else None


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key from the process environment.

    Returns:
        ``(value, env_var_used)``, or ``(None, None)`` when nothing usable is
        set. Placeholder values are treated as unset.
    """
    name = get_env_var_name(provider)
    if not name:
        return None, None
    val = os.environ.get(name)
    if val and not is_placeholder(val):
        return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "get_env_var_name",
    "resolve_provider_key",
]
