"""OpenAI models listing: ``GET {base}/v1/models`` -> ids from ``data[].id``.

Also used by the OpenRouter preset, which serves the same shape.
"""

from __future__ import annotations

from typing import Any, List

from ..base.encoding import join_url, require_api_key
from ..base.models import Model, PreparedRequest
from ..base.streaming import missing_field

MODELS_PATH = "/v1/models"


def build_models_request(*, api_key: str | None, base_url: str, provider: str = "openai") -> PreparedRequest:
    key = require_api_key(api_key, provider)
    return PreparedRequest(
        method="GET",
        url=join_url(base_url, MODELS_PATH),
        headers={"Authorization": f"Bearer {key}"},
    )


def parse_models(payload: Any) -> List[Model]:
    """Parse ``{"data": [{"id": ...}, ...]}``; entries without an id are skipped."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        raise missing_field("data", payload)
    return [
        Model(id=entry["id"])
        for entry in data
        if isinstance(entry, dict) and isinstance(entry.get("id"), str) and entry["id"]
    ]


__all__ = ["MODELS_PATH", "build_models_request", "parse_models"]
