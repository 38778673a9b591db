"""Server-sent-event framing (OpenAI-style and Anthropic-style streams).

Lines are accumulated into events following the SSE rules the providers rely
on:

- ``data:`` lines append to the event's data (one leading space stripped,
  several data lines joined with ``\\n``);
- ``event:`` names the event;
- ``:`` comment lines and ``id:`` / ``retry:`` fields are ignored;
- a blank line dispatches the accumulated event (nothing when empty).

Interpretation of the event payload is delegated to a provider callable.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from .session import DecoderSession, DecoderState, Dispatch


@dataclass(frozen=True)
class SseEvent:
    """One dispatched server-sent event."""

    data: str
    event: Optional[str] = None


SseInterpreter = Callable[[SseEvent], Dispatch]


class SseDecoder(DecoderSession[SseEvent]):
    """Decoder session for ``text/event-stream`` bodies."""

    def __init__(self, interpret: SseInterpreter) -> None:
        super().__init__()
        self._interpret = interpret
        self._event: Optional[str] = None
        self._data: List[str] = []

    def feed(self, data: bytes) -> Iterator[SseEvent]:
        for raw in self._lines.feed(data):
            event = self._process_line(self._decoded(raw))
            if event is not None:
                yield event

    def finish(self) -> Iterator[SseEvent]:
        """Flush at end of input: a trailing unterminated line still counts,
        and a pending event is dispatched even without its blank line."""
        rest = self._lines.finish()
        if rest is not None:
            event = self._process_line(self._decoded(rest))
            if event is not None:
                yield event
        event = self._flush()
        if event is not None:
            yield event

    def dispatch(self, frame: SseEvent) -> Dispatch:
        return self._interpret(frame)

    def _process_line(self, line: str) -> Optional[SseEvent]:
        if not line:
            return self._flush()
        if line.startswith(":"):
            return None
        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if field == "data":
            self._data.append(value)
            self.state = DecoderState.ACCUMULATING_DATA
        elif field == "event":
            self._event = value
            self.state = DecoderState.ACCUMULATING_DATA
        return None

    def _flush(self) -> Optional[SseEvent]:
        event = SseEvent(data="\n".join(self._data), event=self._event) if self._data else None
        self._data = []
        self._event = None
        self.state = DecoderState.READING_LINE
        return event


__all__ = ["SseEvent", "SseDecoder", "SseInterpreter"]
