"""Ollama chat helpers: request encoder and NDJSON line interpreter.

Wire format:
    ``POST {base}/api/chat`` with ``stream: true``; the response is one JSON
    object per line, the last one carrying ``"done": true``. Lines from the
    ``/api/generate`` endpoint (``response`` instead of ``message``) are
    understood as well.

Thinking:
    Models run with ``think: true`` report reasoning in a separate
    ``thinking`` field. Older servers and some models embed it inline as
    ``<think>...</think>`` in the content instead; the interpreter splits those
    tags out, carrying the open/closed state from one line to the next.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

from ..base.constants import JSON_CONTENT_TYPE
from ..base.encoding import encode_json, join_url, merge_extra, validate_options
from ..base.errors import api_error_from_body
from ..base.models import ChatChunk, ChatOptions, FinishReason, PreparedRequest
from ..base.streaming import Dispatch, missing_field

CHAT_PATH = "/api/chat"

THINK_OPEN = "<think>"
THINK_CLOSE = "</think>"


def build_chat_payload(options: ChatOptions) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "model": options.model,
        "messages": [m.to_dict() for m in options.messages],
        "stream": True,
    }
    if options.thinking is not None:
        body["think"] = True
    generation: Dict[str, Any] = {"num_predict": options.max_tokens}
    if options.temperature is not None:
        generation["temperature"] = options.temperature
    if options.top_p is not None:
        generation["top_p"] = options.top_p
    if options.stop:
        generation["stop"] = list(options.stop)
    body["options"] = generation
    return merge_extra(body, options.extra)


def encode_chat_request(options: ChatOptions, *, base_url: str, provider: str = "ollama") -> PreparedRequest:
    """Pure encoder; Ollama needs no authentication."""
    validate_options(options, provider)
    return PreparedRequest(
        method="POST",
        url=join_url(base_url, CHAT_PATH),
        headers={"Content-Type": JSON_CONTENT_TYPE},
        body=encode_json(build_chat_payload(options)),
    )


def split_thinking(raw: str, in_thinking: bool) -> Tuple[str, Optional[str], bool]:
    """Separate ``<think>`` tagged text from regular content.

    Returns:
        ``(content, thinking, in_thinking)``; ``thinking`` is ``None`` when the
        text held no reasoning, and ``in_thinking`` is the state for the next
        line.
    """
    content = []
    thinking = []
    remaining = raw
    while remaining:
        if in_thinking:
            end = remaining.find(THINK_CLOSE)
            if end == -1:
                thinking.append(remaining)
                break
            thinking.append(remaining[:end])
            in_thinking = False
            remaining = remaining[end + len(THINK_CLOSE):]
        else:
            start = remaining.find(THINK_OPEN)
            if start == -1:
                content.append(remaining)
                break
            content.append(remaining[:start])
            in_thinking = True
            remaining = remaining[start + len(THINK_OPEN):]
    think_text = "".join(thinking)
    return "".join(content), think_text or None, in_thinking


class OllamaLineInterpreter:
    """Per-stream interpreter; one instance per decoder session."""

    def __init__(self) -> None:
        self.in_thinking = False

    def __call__(self, line: Any) -> Dispatch:
        if not isinstance(line, dict):
            raise missing_field("done", line)
        error = line.get("error")
        if isinstance(error, str) and error:
            raise api_error_from_body(json.dumps(line, ensure_ascii=False), provider="unknown")
        done = line.get("done")
        if not isinstance(done, bool):
            raise missing_field("done", line)

        message = line.get("message")
        if isinstance(message, dict):
            content, thinking = message.get("content"), message.get("thinking")
        else:
            content, thinking = line.get("response"), line.get("thinking")
        content = content if isinstance(content, str) else ""
        thinking = thinking if isinstance(thinking, str) and thinking else None
        if thinking is None:
            content, thinking, self.in_thinking = split_thinking(content, self.in_thinking)

        finish = FinishReason.from_provider(line.get("done_reason") or "stop") if done else None
        return Dispatch(ChatChunk(content=content, finish_reason=finish, thinking=thinking), done=done)


__all__ = [
    "CHAT_PATH",
    "build_chat_payload",
    "encode_chat_request",
    "split_thinking",
    "OllamaLineInterpreter",
]
