"""
Message DTO used across providers.

Defines the immutable `Message` dataclass and the `Role` literal representing
the sender role. Roles are only meaningful inside the provider-agnostic model;
each vendor adapter remaps them to its own wire vocabulary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple


# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool"]

ROLES: Tuple[str, ...] = ("system", "user", "assistant", "tool")


@dataclass(frozen=True)
class Message:
    """A single chat message in conversation order.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"``,
            ``"assistant"``, or ``"tool"``).
        content: Plain text content of the message.

    Raises:
        ValueError: If ``role`` is outside the closed role set.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unknown message role '{self.role}'")

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary representation."""
        return {"role": self.role, "content": self.content}


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
