"""Typed parameter object for provider construction.

Purpose
-------
Capture the constructor arguments shared by every provider so factory call
sites can pass one validated object instead of loose keyword arguments.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.

Notes
-----
- ``extra`` is a free-form bag forwarded to providers whose constructors
  accept additional keywords; the bundled providers take none, so a
  non-empty ``extra`` makes their construction fail with a clear error.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider initialization parameters.

    Attributes
    ----------
    api_key:
        API key for key-authenticated providers. Resolved from the
        environment when omitted.
    base_url:
        Override for the API base URL (proxies, gateways, remote Ollama).
    headers:
        Static HTTP headers added to every request.
    extra:
        Provider-specific constructor keywords.
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["AdapterParams"]
