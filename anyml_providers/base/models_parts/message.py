"""
Message DTO used across providers.

Defines the immutable `Message` dataclass and the `Role` enumeration
representing the sender role. Providers map this shape onto their own
request bodies.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Role(str, Enum):
    """Message roles shared by every provider."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A chat message used by provider-agnostic request options.

    Attributes:
        role: The role of the message author.
        content: Plain text content of the message.

    Methods:
        user / system / assistant: Shorthand constructors.
        to_dict: Wire shape ``{"role": ..., "content": ...}`` shared by the
            OpenAI-style and Ollama-style bodies.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.role, Role):
            # Accept plain strings such as "user" for convenience.
            object.__setattr__(self, "role", Role(self.role))

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(Role.USER, content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(Role.SYSTEM, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> Dict[str, str]:
        """Return the JSON-serializable wire representation of the message."""
        return {"role": self.role.value, "content": self.content}


__all__ = [
    "Message",
    "Role",
]
