"""Immutable snapshot of a token's cancellation status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class State:
    cancelled: bool = False
    reason: Optional[str] = None


__all__ = ["State"]
