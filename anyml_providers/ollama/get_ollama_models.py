"""Ollama models listing.

``GET {base}/api/tags`` lists the installed models with their parameter size
and quantization. Thinking support is not part of that listing, so every
model is followed by ``POST {base}/api/show`` and marked with the
``"enabled"`` thinking mode when its capabilities include ``"thinking"``.
A failing ``/api/show`` call only leaves the thinking modes unknown.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..base.constants import JSON_CONTENT_TYPE
from ..base.encoding import encode_json, join_url
from ..base.models import Model, PreparedRequest
from ..base.streaming import missing_field

TAGS_PATH = "/api/tags"
SHOW_PATH = "/api/show"
THINKING_MODES: Tuple[str, ...] = ("enabled",)


def build_tags_request(*, base_url: str) -> PreparedRequest:
    return PreparedRequest(method="GET", url=join_url(base_url, TAGS_PATH))


def build_show_request(model: str, *, base_url: str) -> PreparedRequest:
    return PreparedRequest(
        method="POST",
        url=join_url(base_url, SHOW_PATH),
        headers={"Content-Type": JSON_CONTENT_TYPE},
        body=encode_json({"model": model}),
    )


def _detail(details: Any, key: str) -> Optional[str]:
    value = details.get(key) if isinstance(details, dict) else None
    return value if isinstance(value, str) and value else None


def parse_tags(payload: Any) -> List[Model]:
    """Parse ``{"models": [{"name": ..., "details": {...}}, ...]}``."""
    entries = payload.get("models") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise missing_field("models", payload)
    models: List[Model] = []
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise missing_field("models[].name", payload)
        details = entry.get("details")
        models.append(
            Model(
                id=entry["name"],
                parameters=_detail(details, "parameter_size"),
                quantization=_detail(details, "quantization_level"),
            )
        )
    return models


def thinking_modes_from_show(payload: Any) -> Optional[Tuple[str, ...]]:
    capabilities = payload.get("capabilities") if isinstance(payload, dict) else None
    if isinstance(capabilities, list) and "thinking" in capabilities:
        return THINKING_MODES
    return None


__all__ = [
    "TAGS_PATH",
    "SHOW_PATH",
    "THINKING_MODES",
    "build_tags_request",
    "build_show_request",
    "parse_tags",
    "thinking_modes_from_show",
]
