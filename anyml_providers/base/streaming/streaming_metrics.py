"""Streaming metrics data structures.

Collected per stream and logged with the ``stream.end`` event.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Collected streaming metrics for a single chat stream.

    Attributes:
        emitted: Number of chunks handed to the caller.
        time_to_first_token_ms: Delay between ``chat`` and the first chunk.
        total_duration_ms: Delay between ``chat`` and the end of the stream.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter, repr=False)

    def record_chunk(self) -> None:
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()
        self.emitted += 1

    def finish(self) -> None:
        if self.total_duration_ms is None:
            self.total_duration_ms = self._elapsed_ms()

    def timings(self) -> Dict[str, Any]:
        return {
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
        }

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started_at) * 1000.0, 3)


__all__ = ["StreamMetrics"]
