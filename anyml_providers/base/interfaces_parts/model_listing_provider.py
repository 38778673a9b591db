"""ModelListingProvider Protocol (single-class module)."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..models import Model


@runtime_checkable
class ModelListingProvider(Protocol):
    """Providers that can enumerate the models available to the caller."""

    async def list_models(self) -> List[Model]:
        ...
