"""Streaming primitives: line splitting, SSE/NDJSON decoder sessions, and the
``ChatStream`` returned by providers."""

from .line_buffer import LineBuffer
from .session import (
    FINISHED,
    NOTHING,
    DecoderSession,
    DecoderState,
    Dispatch,
    missing_field,
    parse_json_frame,
)
from .sse import SseDecoder, SseEvent, SseInterpreter
from .ndjson import NdjsonDecoder, NdjsonInterpreter
from .streaming_metrics import StreamMetrics
from .chat_stream import ChatResult, ChatStream

__all__ = [
    "LineBuffer",
    "DecoderSession",
    "DecoderState",
    "Dispatch",
    "NOTHING",
    "FINISHED",
    "parse_json_frame",
    "missing_field",
    "SseDecoder",
    "SseEvent",
    "SseInterpreter",
    "NdjsonDecoder",
    "NdjsonInterpreter",
    "StreamMetrics",
    "ChatStream",
    "ChatResult",
]
