"""OpenAI-style chat helpers: request encoder and SSE frame interpreter.

Wire format:
    ``POST {base}/v1/chat/completions`` with ``stream: true``; the response is
    a stream of ``data: <json>`` events ended by ``data: [DONE]``. The same
    shape is spoken by OpenRouter and most OpenAI-compatible gateways.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.constants import EVENT_STREAM_CONTENT_TYPE, JSON_CONTENT_TYPE, OPENAI_DONE_SENTINEL
from ..base.encoding import encode_json, join_url, merge_extra, require_api_key, validate_options
from ..base.errors import DecodeError, api_error_from_body
from ..base.models import ChatChunk, ChatOptions, FinishReason, PreparedRequest
from ..base.streaming import FINISHED, NOTHING, Dispatch, SseEvent, missing_field, parse_json_frame

CHAT_PATH = "/v1/chat/completions"


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": JSON_CONTENT_TYPE,
        "Accept": EVENT_STREAM_CONTENT_TYPE,
    }


def build_chat_payload(options: ChatOptions) -> Dict[str, Any]:
    """Map :class:`ChatOptions` onto the chat completions body."""
    body: Dict[str, Any] = {
        "model": options.model,
        "messages": [m.to_dict() for m in options.messages],
        "stream": True,
        "max_tokens": options.max_tokens,
    }
    if options.temperature is not None:
        body["temperature"] = options.temperature
    if options.top_p is not None:
        body["top_p"] = options.top_p
    if options.stop:
        body["stop"] = list(options.stop)
    if options.thinking is not None and options.thinking.effort:
        body["reasoning_effort"] = options.thinking.effort
    return merge_extra(body, options.extra)


def encode_chat_request(
    options: ChatOptions,
    *,
    api_key: str | None,
    base_url: str,
    provider: str = "openai",
) -> PreparedRequest:
    """Pure encoder; raises ``ConfigurationError`` before any I/O."""
    validate_options(options, provider)
    key = require_api_key(api_key, provider, options.model)
    return PreparedRequest(
        method="POST",
        url=join_url(base_url, CHAT_PATH),
        headers=build_headers(key),
        body=encode_json(build_chat_payload(options)),
    )


def _optional_text(delta: Dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = delta.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def interpret_frame(event: SseEvent) -> Dispatch:
    """Turn one SSE event into a chunk.

    - ``[DONE]`` ends the stream.
    - An ``error`` object raises ``ApiError``.
    - An empty ``choices`` list (usage-only frame) emits nothing.
    - Otherwise ``choices[0].delta`` must be an object; its ``content``
      (``null`` -> ``""``) is the text.
    """
    if event.data.strip() == OPENAI_DONE_SENTINEL:
        return FINISHED
    payload = parse_json_frame(event.data)
    if not isinstance(payload, dict):
        raise missing_field("choices", payload)
    if payload.get("error") is not None:
        raise api_error_from_body(event.data, provider="unknown")
    choices = payload.get("choices")
    if not isinstance(choices, list):
        raise missing_field("choices", payload)
    if not choices:
        return NOTHING
    choice = choices[0]
    delta = choice.get("delta") if isinstance(choice, dict) else None
    if not isinstance(delta, dict):
        raise missing_field("choices[0].delta", payload)
    content = delta.get("content")
    if content is None:
        content = ""
    elif not isinstance(content, str):
        raise DecodeError(message="delta.content is not a string", frame=event.data[:500])
    return Dispatch(
        ChatChunk(
            content=content,
            finish_reason=FinishReason.from_provider(choice.get("finish_reason")),
            thinking=_optional_text(delta, "reasoning_content", "reasoning"),
        )
    )


__all__ = [
    "CHAT_PATH",
    "build_headers",
    "build_chat_payload",
    "encode_chat_request",
    "interpret_frame",
]
