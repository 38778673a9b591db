"""Helpers for decoder and stream lifecycle tests.

Builds wire fixtures for the three formats and drives decoder sessions or
``ChatStream`` objects to completion, returning ``(chunks, error)``.
"""
from __future__ import annotations

import json
from typing import Any, AsyncIterator, Iterable, List, Optional, Sequence, Tuple

from anyml_providers.base.errors import ProviderError
from anyml_providers.base.models import ChatChunk
from anyml_providers.base.streaming import ChatStream, DecoderSession

Outcome = Tuple[List[ChatChunk], Optional[ProviderError]]

OPENAI_SCENARIO = (
    b'data: {"choices":[{"delta":{"content":"Hi"}}]}\n\n'
    b'data: {"choices":[{"delta":{"content":"!"}}]}\n\n'
    b"data: [DONE]\n\n"
)

NDJSON_SCENARIO = b'{"response":"Hi","done":false}\n{"response":"!","done":true}\n'


def openai_frame(content: Optional[str] = None, *, finish: Optional[str] = None, **delta: Any) -> str:
    if content is not None:
        delta["content"] = content
    choice: dict = {"index": 0, "delta": delta}
    if finish is not None:
        choice["finish_reason"] = finish
    return "data: " + json.dumps({"choices": [choice]}) + "\n\n"


def openai_stream(*texts: str, finish: str = "stop") -> bytes:
    frames = [openai_frame(role="assistant", content="")]
    frames += [openai_frame(t) for t in texts]
    frames.append(openai_frame(finish=finish))
    frames.append("data: [DONE]\n\n")
    return "".join(frames).encode("utf-8")


def anthropic_event(name: str, payload: dict) -> str:
    return f"event: {name}\ndata: {json.dumps(payload)}\n\n"


def anthropic_stream(*texts: str, stop_reason: str = "end_turn", thinking: Sequence[str] = ()) -> bytes:
    events = [
        anthropic_event("message_start", {"type": "message_start", "message": {"id": "msg_1", "role": "assistant"}}),
        anthropic_event("content_block_start", {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}),
        anthropic_event("ping", {"type": "ping"}),
    ]
    for t in thinking:
        events.append(anthropic_event("content_block_delta", {"type": "content_block_delta", "index": 0, "delta": {"type": "thinking_delta", "thinking": t}}))
    for t in texts:
        events.append(anthropic_event("content_block_delta", {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": t}}))
    events += [
        anthropic_event("content_block_stop", {"type": "content_block_stop", "index": 0}),
        anthropic_event("message_delta", {"type": "message_delta", "delta": {"stop_reason": stop_reason}, "usage": {"output_tokens": 3}}),
        anthropic_event("message_stop", {"type": "message_stop"}),
    ]
    return "".join(events).encode("utf-8")


def ndjson_stream(*texts: str, done_reason: str = "stop") -> bytes:
    lines = [json.dumps({"model": "m", "message": {"role": "assistant", "content": t}, "done": False}) for t in texts]
    lines.append(json.dumps({"model": "m", "message": {"role": "assistant", "content": ""}, "done": True, "done_reason": done_reason, "eval_count": 3}))
    return ("\n".join(lines) + "\n").encode("utf-8")


def split_at(data: bytes, *offsets: int) -> List[bytes]:
    """Split ``data`` at the given byte offsets."""
    pieces: List[bytes] = []
    start = 0
    for off in sorted(offsets):
        pieces.append(data[start:off])
        start = off
    pieces.append(data[start:])
    return pieces


def byte_by_byte(data: bytes) -> List[bytes]:
    return [data[i:i + 1] for i in range(len(data))]


async def _source(pieces: Iterable[bytes]) -> AsyncIterator[bytes]:
    for piece in pieces:
        yield piece


async def decode(session: DecoderSession, pieces: Iterable[bytes]) -> Outcome:
    """Run a decoder session over ``pieces``."""
    chunks: List[ChatChunk] = []
    try:
        async for chunk in session.run(_source(pieces)):
            chunks.append(chunk)
    except ProviderError as exc:
        return chunks, exc
    return chunks, None


async def drain(stream: ChatStream) -> Outcome:
    """Consume a stream through ``results()``."""
    chunks: List[ChatChunk] = []
    error: Optional[ProviderError] = None
    async for item in stream.results():
        if isinstance(item, ProviderError):
            error = item
        else:
            chunks.append(item)
    return chunks, error


def contents(chunks: Iterable[ChatChunk]) -> List[str]:
    return [c.content for c in chunks]
