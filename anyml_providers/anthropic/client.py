"""Anthropic provider adapter.

Streams the Messages API through the shared :class:`BaseChatProvider`
template. ``api_key`` / ``base_url`` default to ``ANTHROPIC_API_KEY`` /
``ANTHROPIC_BASE_URL`` (then ``https://api.anthropic.com``).
"""

from __future__ import annotations

from typing import List

from ..base.models import ChatOptions, Model, PreparedRequest
from ..base.provider_base import BaseChatProvider
from ..base.streaming import SseDecoder
from .get_anthropic_models import build_models_request, parse_models
from .helpers import encode_chat_request, interpret_event


class AnthropicProvider(BaseChatProvider):
    name = "anthropic"

    def encode(self, options: ChatOptions) -> PreparedRequest:
        return encode_chat_request(options, api_key=self.api_key, base_url=self.base_url, provider=self.name)

    def new_decoder(self) -> SseDecoder:
        return SseDecoder(interpret_event)

    async def list_models(self) -> List[Model]:
        return await self._list_models_with(
            lambda: build_models_request(api_key=self.api_key, base_url=self.base_url, provider=self.name),
            parse_models,
        )


__all__ = ["AnthropicProvider"]
