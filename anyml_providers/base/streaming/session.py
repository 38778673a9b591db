"""Shared decoder session primitives.

Each in-flight stream owns one :class:`DecoderSession`. The session's
``state`` walks ``READING_LINE`` -> (``ACCUMULATING_DATA``) -> ``DISPATCHING``
and ends in ``DONE`` or ``ERRORED``; once terminal, nothing else is emitted.

Subclasses supply the framing (``feed`` / ``finish``) and hand each frame to a
provider interpreter, which turns it into a :class:`Dispatch`.
"""
from __future__ import annotations

import json
from enum import Enum
from typing import Any, AsyncIterator, Generic, Iterator, NamedTuple, Optional, TypeVar

from ..errors import DecodeError
from ..models import ChatChunk
from .line_buffer import LineBuffer

# Frames echoed into DecodeError are truncated to this length.
_MAX_FRAME_CHARS = 500

FrameT = TypeVar("FrameT")


class DecoderState(str, Enum):
    READING_LINE = "reading_line"
    ACCUMULATING_DATA = "accumulating_data"
    DISPATCHING = "dispatching"
    DONE = "done"
    ERRORED = "errored"

    @property
    def terminal(self) -> bool:
        return self in (DecoderState.DONE, DecoderState.ERRORED)


class Dispatch(NamedTuple):
    """Outcome of interpreting one frame.

    Attributes:
        chunk: Chunk to emit, or ``None`` when the frame carries nothing.
        done: True when the frame ends the stream (after emitting ``chunk``).
    """

    chunk: Optional[ChatChunk] = None
    done: bool = False


NOTHING = Dispatch()
FINISHED = Dispatch(done=True)


def parse_json_frame(text: str) -> Any:
    """Parse a frame payload, raising :class:`DecodeError` on invalid JSON."""
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(message=f"invalid JSON in frame: {exc}", frame=text[:_MAX_FRAME_CHARS], raw=exc) from exc


def missing_field(field: str, frame: Any) -> DecodeError:
    """Build the error for a frame lacking a required field."""
    return DecodeError(
        message=f"frame missing required field '{field}'",
        frame=json.dumps(frame, ensure_ascii=False, default=str)[:_MAX_FRAME_CHARS],
    )


class DecoderSession(Generic[FrameT]):
    """Pull-based decoding of one response body.

    ``run`` consumes the byte source lazily and yields chunks; it suspends only
    while awaiting the next read. Errors are raised once and end the
    generator. ``truncated`` is set when the body ended without a completion
    signal.
    """

    def __init__(self) -> None:
        self.state = DecoderState.READING_LINE
        self.truncated = False
        self._lines = LineBuffer()

    # Framing -------------------------------------------------------------
    def feed(self, data: bytes) -> Iterator[FrameT]:
        raise NotImplementedError

    def finish(self) -> Iterator[FrameT]:
        raise NotImplementedError

    def dispatch(self, frame: FrameT) -> Dispatch:
        raise NotImplementedError

    def _decoded(self, raw: bytes) -> str:
        try:
            return LineBuffer.decode(raw)
        except UnicodeDecodeError as exc:
            raise DecodeError(
                message=f"stream is not valid UTF-8: {exc.reason}",
                frame=raw[:_MAX_FRAME_CHARS].decode("utf-8", errors="replace"),
                raw=exc,
            ) from exc

    # Driving -------------------------------------------------------------
    async def run(self, source: AsyncIterator[bytes]) -> AsyncIterator[ChatChunk]:
        try:
            async for data in source:
                for frame in self.feed(data):
                    outcome = self._dispatch(frame)
                    if outcome.chunk is not None:
                        yield outcome.chunk
                    if outcome.done:
                        self.state = DecoderState.DONE
                        return
            for frame in self.finish():
                outcome = self._dispatch(frame)
                if outcome.chunk is not None:
                    yield outcome.chunk
                if outcome.done:
                    self.state = DecoderState.DONE
                    return
            self.truncated = True
            self.state = DecoderState.DONE
        except Exception:
            self.state = DecoderState.ERRORED
            raise

    def _dispatch(self, frame: FrameT) -> Dispatch:
        self.state = DecoderState.DISPATCHING
        outcome = self.dispatch(frame)
        self.state = DecoderState.READING_LINE
        return outcome


__all__ = [
    "DecoderState",
    "DecoderSession",
    "Dispatch",
    "NOTHING",
    "FINISHED",
    "parse_json_frame",
    "missing_field",
]
