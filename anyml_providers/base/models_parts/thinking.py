"""
Thinking (reasoning) configuration for models that support it.

Each provider reads the part it understands:

- Anthropic uses ``budget_tokens``.
- OpenAI uses ``effort`` (``"low"``, ``"medium"``, ``"high"``).
- Ollama only needs to know that thinking is enabled.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Thinking:
    """Request reasoning output from the model.

    Attributes:
        budget_tokens: Token budget for thinking (Anthropic-style).
        effort: Named effort level (OpenAI-style).
    """

    budget_tokens: Optional[int] = None
    effort: Optional[str] = None

    @classmethod
    def budget(cls, budget_tokens: int) -> "Thinking":
        return cls(budget_tokens=budget_tokens)

    @classmethod
    def with_effort(cls, effort: str) -> "Thinking":
        return cls(effort=effort)

    @classmethod
    def enabled(cls) -> "Thinking":
        return cls()


__all__ = ["Thinking"]
