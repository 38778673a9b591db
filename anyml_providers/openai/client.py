"""OpenAI provider adapter.

Purpose:
    Streams chat completions from the OpenAI HTTP API (or any gateway speaking
    the same protocol) through the shared :class:`BaseChatProvider` template.

Configuration:
    ``api_key`` / ``base_url`` default to ``OPENAI_API_KEY`` /
    ``OPENAI_BASE_URL`` (then ``https://api.openai.com``) via
    :func:`get_provider_config`. :meth:`OpenAIProvider.open_router` and
    :class:`OpenRouterProvider` use the ``openrouter`` section instead.
"""

from __future__ import annotations

from typing import List, Mapping, Optional

from ..base.interfaces import HttpTransport
from ..base.models import ChatOptions, Model, PreparedRequest
from ..base.provider_base import BaseChatProvider
from ..base.streaming import SseDecoder
from .get_openai_models import build_models_request, parse_models
from .helpers import encode_chat_request, interpret_frame


class OpenAIProvider(BaseChatProvider):
    """Chat provider for the OpenAI chat completions streaming API."""

    name = "openai"

    @classmethod
    def open_router(
        cls,
        transport: HttpTransport,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "OpenRouterProvider":
        """Preset for OpenRouter (``https://openrouter.ai/api``)."""
        return OpenRouterProvider(transport, api_key=api_key, base_url=base_url, headers=headers)

    def encode(self, options: ChatOptions) -> PreparedRequest:
        return encode_chat_request(options, api_key=self.api_key, base_url=self.base_url, provider=self.name)

    def new_decoder(self) -> SseDecoder:
        return SseDecoder(interpret_frame)

    async def list_models(self) -> List[Model]:
        return await self._list_models_with(
            lambda: build_models_request(api_key=self.api_key, base_url=self.base_url, provider=self.name),
            parse_models,
        )


class OpenRouterProvider(OpenAIProvider):
    """OpenAI-compatible provider configured from the ``openrouter`` section."""

    name = "openrouter"


__all__ = ["OpenAIProvider", "OpenRouterProvider"]
