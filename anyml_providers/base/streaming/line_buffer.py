"""Boundary-invariant byte-to-line splitting.

The network delivers the body in arbitrary pieces: a line terminator, a
``\\r\\n`` pair, or a multi-byte UTF-8 character may straddle two reads.
:class:`LineBuffer` keeps bytes until a ``\\n`` arrives and only then hands out
the complete line, so the lines produced depend on the byte content alone and
never on how it was fragmented. Decoding is left to the caller
(:meth:`LineBuffer.decode`) so that a bad line fails exactly where it sits in
the stream.
"""
from __future__ import annotations

from typing import List, Optional


class LineBuffer:
    """Accumulates bytes and returns complete raw lines.

    Lines are returned without their terminator; a trailing ``\\r`` is stripped
    so ``\\n`` and ``\\r\\n`` are both accepted.
    """

    def __init__(self) -> None:
        self._buf = bytearray()
        # Bytes before this offset are known to contain no newline.
        self._scanned = 0

    def feed(self, data: bytes) -> List[bytes]:
        """Append ``data`` and return every line completed by it."""
        if not data:
            return []
        self._buf += data
        lines: List[bytes] = []
        start = 0
        while True:
            idx = self._buf.find(b"\n", max(start, self._scanned))
            if idx == -1:
                break
            lines.append(self._strip_cr(self._buf[start:idx]))
            start = idx + 1
        if start:
            del self._buf[:start]
        self._scanned = len(self._buf)
        return lines

    def finish(self) -> Optional[bytes]:
        """Return the unterminated remainder at end of input, if any."""
        if not self._buf:
            return None
        rest = self._strip_cr(self._buf)
        self._buf.clear()
        self._scanned = 0
        return rest

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet returned as a line."""
        return len(self._buf)

    @staticmethod
    def decode(raw: bytes) -> str:
        """Strict UTF-8 decode; raises :class:`UnicodeDecodeError`."""
        return raw.decode("utf-8")

    @staticmethod
    def _strip_cr(raw: bytearray) -> bytes:
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        return bytes(raw)


__all__ = ["LineBuffer"]
