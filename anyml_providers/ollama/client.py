"""Ollama provider adapter.

Purpose:
    Streams chat from a local Ollama daemon (default
    ``http://localhost:11434``, or ``OLLAMA_BASE_URL``) through the shared
    :class:`BaseChatProvider` template. No API key is required.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from ..base.errors import ProviderError
from ..base.logging import LogContext
from ..base.models import ChatOptions, Model, PreparedRequest
from ..base.provider_base import BaseChatProvider
from ..base.streaming import NdjsonDecoder
from .get_ollama_models import build_show_request, build_tags_request, parse_tags, thinking_modes_from_show
from .helpers import OllamaLineInterpreter, encode_chat_request


class OllamaProvider(BaseChatProvider):
    name = "ollama"

    def encode(self, options: ChatOptions) -> PreparedRequest:
        return encode_chat_request(options, base_url=self.base_url, provider=self.name)

    def new_decoder(self) -> NdjsonDecoder:
        return NdjsonDecoder(OllamaLineInterpreter())

    async def list_models(self) -> List[Model]:
        """List installed models, then probe each one for thinking support."""
        models = await self._list_models_with(lambda: build_tags_request(base_url=self.base_url), parse_tags)
        enriched = []
        for model in models:
            modes = await self._thinking_modes(model.id)
            enriched.append(replace(model, thinking_modes=modes) if modes else model)
        return enriched

    async def _thinking_modes(self, model_id: str):
        request = build_show_request(model_id, base_url=self.base_url)
        ctx = LogContext(provider=self.name, model=model_id, url=request.url)
        try:
            payload = await self._fetch_json(request, ctx)
        except ProviderError as exc:
            self._log_models(
                "models.show_failed",
                ctx,
                level=logging.DEBUG,
                error_code=exc.code.value,
                error=exc.message,
            )
            return None
        return thinking_modes_from_show(payload)


__all__ = ["OllamaProvider"]
