"""Anthropic-style chat helpers: request encoder and SSE event interpreter.

Wire format:
    ``POST {base}/v1/messages`` with ``stream: true``; the response is a
    stream of ``event: <name>`` / ``data: <json>`` pairs ending with the
    ``message_stop`` event.

Event handling:
    - ``content_block_delta``: ``text_delta`` -> content, ``thinking_delta``
      -> thinking; other delta types carry nothing for the caller.
    - ``message_delta``: a ``stop_reason`` becomes an empty final chunk.
    - ``message_start`` / ``content_block_start`` / ``content_block_stop`` /
      ``ping``: nothing.
    - ``error``: raises ``ApiError``.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.constants import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_STOP_EVENT,
    EVENT_STREAM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
)
from ..base.encoding import encode_json, join_url, merge_extra, require_api_key, validate_options
from ..base.errors import api_error_from_body
from ..base.models import ChatChunk, ChatOptions, FinishReason, PreparedRequest, Role
from ..base.streaming import FINISHED, NOTHING, Dispatch, SseEvent, missing_field, parse_json_frame

MESSAGES_PATH = "/v1/messages"

_SILENT_EVENTS = frozenset({"message_start", "content_block_start", "content_block_stop", "ping"})


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "x-api-key": api_key,
        "anthropic-version": ANTHROPIC_API_VERSION,
        "Content-Type": JSON_CONTENT_TYPE,
        "Accept": EVENT_STREAM_CONTENT_TYPE,
    }


def build_chat_payload(options: ChatOptions) -> Dict[str, Any]:
    """Map :class:`ChatOptions` onto the messages body.

    System messages are lifted into the top-level ``system`` string.
    """
    system_parts: List[str] = []
    messages: List[Dict[str, str]] = []
    for message in options.messages:
        if message.role is Role.SYSTEM:
            system_parts.append(message.content)
        else:
            messages.append(message.to_dict())
    body: Dict[str, Any] = {
        "model": options.model,
        "max_tokens": options.max_tokens,
        "stream": True,
        "messages": messages,
    }
    if system_parts:
        body["system"] = "\n\n".join(system_parts)
    if options.temperature is not None:
        body["temperature"] = options.temperature
    if options.top_p is not None:
        body["top_p"] = options.top_p
    if options.stop:
        body["stop_sequences"] = list(options.stop)
    if options.thinking is not None and options.thinking.budget_tokens is not None:
        body["thinking"] = {"type": "enabled", "budget_tokens": options.thinking.budget_tokens}
    return merge_extra(body, options.extra)


def encode_chat_request(
    options: ChatOptions,
    *,
    api_key: str | None,
    base_url: str,
    provider: str = "anthropic",
) -> PreparedRequest:
    validate_options(options, provider)
    key = require_api_key(api_key, provider, options.model)
    return PreparedRequest(
        method="POST",
        url=join_url(base_url, MESSAGES_PATH),
        headers=build_headers(key),
        body=encode_json(build_chat_payload(options)),
    )


def interpret_event(event: SseEvent) -> Dispatch:
    """Turn one named SSE event into a chunk (or nothing).

    The event name comes from the ``event:`` line, falling back to the
    payload ``type``.
    """
    name = event.event
    if name == ANTHROPIC_STOP_EVENT:
        return FINISHED
    payload = parse_json_frame(event.data)
    if not isinstance(payload, dict):
        raise missing_field("type", payload)
    if not name:
        name = payload.get("type")
        if not isinstance(name, str):
            raise missing_field("type", payload)
        if name == ANTHROPIC_STOP_EVENT:
            return FINISHED

    if name == "content_block_delta":
        delta = payload.get("delta")
        if not isinstance(delta, dict):
            raise missing_field("delta", payload)
        kind = delta.get("type")
        if kind == "text_delta":
            text = delta.get("text")
            if not isinstance(text, str):
                raise missing_field("delta.text", payload)
            return Dispatch(ChatChunk(content=text))
        if kind == "thinking_delta":
            thinking = delta.get("thinking")
            if not isinstance(thinking, str):
                raise missing_field("delta.thinking", payload)
            return Dispatch(ChatChunk(thinking=thinking))
        return NOTHING
    if name == "message_delta":
        delta = payload.get("delta")
        if not isinstance(delta, dict):
            raise missing_field("delta", payload)
        reason = FinishReason.from_provider(delta.get("stop_reason"))
        return Dispatch(ChatChunk(finish_reason=reason)) if reason is not None else NOTHING
    if name == "error":
        raise api_error_from_body(event.data, provider="unknown")
    # message_start, content_block_start/stop, ping and unknown future events
    return NOTHING


__all__ = [
    "MESSAGES_PATH",
    "build_headers",
    "build_chat_payload",
    "encode_chat_request",
    "interpret_event",
]
