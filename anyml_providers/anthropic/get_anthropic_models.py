"""Anthropic models listing: ``GET {base}/v1/models`` -> ids from ``data[].id``."""

from __future__ import annotations

from ..base.constants import ANTHROPIC_API_VERSION
from ..base.encoding import join_url, require_api_key
from ..base.models import PreparedRequest
from ..openai.get_openai_models import MODELS_PATH, parse_models


def build_models_request(*, api_key: str | None, base_url: str, provider: str = "anthropic") -> PreparedRequest:
    key = require_api_key(api_key, provider)
    return PreparedRequest(
        method="GET",
        url=join_url(base_url, MODELS_PATH),
        headers={"x-api-key": key, "anthropic-version": ANTHROPIC_API_VERSION},
    )


__all__ = ["build_models_request", "parse_models"]
