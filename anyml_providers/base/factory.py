"""Provider construction by canonical name.

Adapter modules are imported on first use (``importlib``), so importing the
factory does not import every provider. The factory never retries or falls
back to another provider: it returns an instance or raises
:class:`UnknownProviderError`.
"""

from __future__ import annotations

import inspect
from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto.adapter_params import AdapterParams
from .interfaces import HttpTransport


class UnknownProviderError(Exception):
    """The provider name is not registered, its adapter could not be loaded,
    or the adapter rejected the constructor arguments."""


# canonical name -> (module, class)
_REGISTRY: Dict[str, Tuple[str, str]] = {
    "openai": ("anyml_providers.openai.client", "OpenAIProvider"),
    "openrouter": ("anyml_providers.openai.client", "OpenRouterProvider"),
    "anthropic": ("anyml_providers.anthropic.client", "AnthropicProvider"),
    "ollama": ("anyml_providers.ollama.client", "OllamaProvider"),
}


def _load_adapter(name: str) -> Type[Any]:
    key = (name or "").lower().strip()
    try:
        module_path, class_name = _REGISTRY[key]
    except KeyError:
        raise UnknownProviderError(
            f"Unknown provider '{name}' (supported: {', '.join(_REGISTRY)})"
        ) from None
    try:
        module = import_module(module_path)
    except ImportError as exc:  # pragma: no cover - broken install
        raise UnknownProviderError(f"Cannot import '{module_path}' for provider '{name}': {exc}") from exc
    adapter = getattr(module, class_name, None)
    if adapter is None:  # pragma: no cover - registry typo
        raise UnknownProviderError(f"'{module_path}' has no adapter class '{class_name}'")
    return adapter


class ProviderFactory:
    """Create providers from a canonical name such as ``"ollama"``."""

    @classmethod
    def create(
        cls,
        provider: str,
        transport: HttpTransport,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> Any:
        """Instantiate the adapter registered under ``provider``.

        Parameters
        ----------
        provider:
            Canonical name, case and surrounding whitespace ignored.
        transport:
            :class:`HttpTransport` every request of the provider goes through.
        params:
            Optional :class:`AdapterParams`; keyword arguments win over it.
        **kwargs:
            Constructor keywords (``api_key``, ``base_url``, ``headers``).

        Raises
        ------
        UnknownProviderError
            Unregistered name, unloadable adapter, or rejected arguments.
        """
        adapter, arguments = cls.resolve(provider, params=params, **kwargs)
        return adapter(transport, **arguments)

    @classmethod
    def resolve(
        cls,
        provider: str,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> Tuple[Type[Any], Dict[str, Any]]:
        """Return the adapter class and the constructor keywords it accepts.

        Nothing is instantiated, so callers can open resources (a default
        transport) only once the name and arguments are known to be valid.
        """
        adapter = _load_adapter(provider)
        arguments = cls._coerce_params(params, kwargs)
        try:
            inspect.signature(adapter).bind(None, **arguments)
        except TypeError as exc:
            raise UnknownProviderError(f"Invalid arguments for provider '{provider}': {exc}") from exc
        return adapter, arguments

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Registered names, in registration order."""
        return tuple(_REGISTRY)

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Flatten ``params`` into constructor keywords.

        ``None`` fields are dropped, ``extra`` entries become keywords,
        headers are merged key by key and explicit ``kwargs`` win everywhere.
        """
        if params is None:
            return dict(kwargs)
        fields = params.model_dump(exclude_none=True)
        headers = {**(fields.pop("headers", None) or {}), **(kwargs.get("headers") or {})}
        arguments: Dict[str, Any] = {**fields.pop("extra", {}), **fields}
        arguments.update((k, v) for k, v in kwargs.items() if k != "headers")
        if headers:
            arguments["headers"] = headers
        return arguments


def create_provider(provider: str, transport: HttpTransport, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, transport, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
