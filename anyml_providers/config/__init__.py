"""Configuration layer for providers.

Sources, merged per provider with later layers winning:

1. built-in defaults (``config/defaults.py``);
2. the section named after the provider in the file pointed to by
   ``ANYML_CONFIG_FILE`` (JSON, or YAML when it is not JSON);
3. ``<PROVIDER>_MODEL``, ``<PROVIDER>_API_KEY`` and ``<PROVIDER>_BASE_URL``
   environment variables;
4. explicit overrides (constructor arguments), ignoring ``None``.

A ``.env`` file (``DOTENV_FILE``, default ``./.env``) is read once before the
environment layer; it only fills variables that are unset or hold
placeholder values.

Example config file::

    openai:
      model: gpt-4o-mini
    ollama:
      base_url: http://gpu-box:11434
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    OLLAMA_DEFAULT_BASE_URL,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key

CONFIG_FILE_ENV = "ANYML_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "base_url": OLLAMA_DEFAULT_BASE_URL},
}

# config key -> environment variable suffix
ENV_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("model", "MODEL"),
    ("api_key", "API_KEY"),  # pragma: allowlist secret - variable suffix
    ("base_url", "BASE_URL"),
)

_file_config: Optional[Dict[str, Any]] = None
_dotenv_loaded = False


def _dotenv_pairs(path: Path) -> Iterator[Tuple[str, str]]:
    """Yield ``KEY=VALUE`` assignments, skipping comments and junk lines."""
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.removeprefix("export ").strip()
        if key:
            yield key, value.strip().strip('"').strip("'")


def _load_dotenv_once() -> None:
    global _dotenv_loaded
    if _dotenv_loaded:
        return
    _dotenv_loaded = True
    path = Path(os.getenv(DOTENV_FILE_ENV, ".env"))
    if not path.is_file():
        return
    for key, value in _dotenv_pairs(path):
        current = os.environ.get(key)
        if current is None or is_placeholder(current):
            os.environ[key] = value


def _parse_config_text(text: str) -> Dict[str, Any]:
    """JSON first, then YAML; anything unparsable or not a mapping is ``{}``."""
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            return {}
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _file_config
    if _file_config is None:
        path = os.getenv(CONFIG_FILE_ENV)
        if path and Path(path).is_file():
            _file_config = _parse_config_text(Path(path).read_text(encoding="utf-8"))
        else:
            _file_config = {}
    return _file_config


def _env_overrides(provider: str) -> Dict[str, Any]:
    prefix = provider.upper()
    values = {key: os.getenv(f"{prefix}_{suffix}") for key, suffix in ENV_FIELDS}
    return {key: value for key, value in values.items() if value and not is_placeholder(value)}


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration for ``provider``.

    Unknown providers get whatever the file and environment layers hold for
    them (usually nothing). ``api_key`` falls back to the canonical key
    variable of the provider (see :data:`config.env.ENV_MAP`).
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()

    file_section = _load_external_config().get(name)
    layers = (
        DEFAULTS.get(name, {}),
        file_section if isinstance(file_section, dict) else {},
        _env_overrides(name),
    )
    cfg: Dict[str, Any] = {}
    for layer in layers:
        cfg.update(layer)

    if not cfg.get("api_key"):
        key, _ = resolve_provider_key(name)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg.update({k: v for k, v in overrides.items() if v is not None})
    return cfg


def get_model(provider: str) -> Optional[str]:
    """Default model of ``provider`` after every layer is applied."""
    return get_provider_config(provider).get("model")


def reset_config_cache() -> None:
    """Forget the parsed config file and the ``.env`` state."""
    global _file_config, _dotenv_loaded
    _file_config = None
    _dotenv_loaded = False


__all__ = [
    "CONFIG_FILE_ENV",
    "DOTENV_FILE_ENV",
    "DEFAULTS",
    "get_provider_config",
    "get_model",
    "reset_config_cache",
]
