"""
PreparedRequest DTO: the output of a provider request encoder.

Holds everything the transport needs to issue the HTTP exchange. Produced by
pure encoder functions, so it can be inspected in tests without any network.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class PreparedRequest:
    """An encoded HTTP request.

    Attributes:
        method: HTTP method (``"POST"`` for chat, ``"GET"`` for listings).
        url: Absolute request URL.
        headers: Header mapping, authentication included.
        body: Encoded JSON body (empty for ``GET``).
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def json(self) -> Dict[str, Any]:
        """Decode the body back to a dictionary (mainly for inspection)."""
        return json.loads(self.body) if self.body else {}


__all__ = ["PreparedRequest"]
