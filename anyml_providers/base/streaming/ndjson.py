"""Newline-delimited JSON framing (Ollama-style streams).

Every non-blank line is one JSON document. A final line lacking its newline
at end of input is still parsed. Interpretation of the parsed object is
delegated to a provider callable, which may keep per-stream state.
"""
from __future__ import annotations

from typing import Any, Callable, Iterator

from .session import DecoderSession, Dispatch, parse_json_frame

NdjsonInterpreter = Callable[[Any], Dispatch]


class NdjsonDecoder(DecoderSession[Any]):
    """Decoder session for ``application/x-ndjson`` bodies."""

    def __init__(self, interpret: NdjsonInterpreter) -> None:
        super().__init__()
        self._interpret = interpret

    def feed(self, data: bytes) -> Iterator[Any]:
        for raw in self._lines.feed(data):
            line = self._decoded(raw).strip()
            if line:
                yield parse_json_frame(line)

    def finish(self) -> Iterator[Any]:
        rest = self._lines.finish()
        if rest is not None:
            line = self._decoded(rest).strip()
            if line:
                yield parse_json_frame(line)

    def dispatch(self, frame: Any) -> Dispatch:
        return self._interpret(frame)


__all__ = ["NdjsonDecoder", "NdjsonInterpreter"]
