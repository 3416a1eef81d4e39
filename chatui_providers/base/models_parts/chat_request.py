"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to their vendor wire format. The
request contains model selection, the ordered conversation, sampling
parameters, and an escape-hatch ``extra`` for request-scoped vendor flags.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import Message


@dataclass
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target model identifier.
        messages: Ordered list of chat `Message` instances. Order is
            conversation order and is preserved by every adapter.
        max_output_tokens: Optional completion token budget (adapter maps the
            param name). Must be non-negative when set.
        temperature: Sampling temperature when supported by the provider.
        stream: Whether the caller intends to stream. Informational; the
            choice of ``send`` or ``stream`` decides the wire mode.
        extra: Request-scoped vendor flags (for example ``thinking`` or
            ``search_grounding`` for Gemini).

    Methods:
        to_dict: Return a JSON-serializable dictionary of the request.
    """

    model: str
    messages: List[Message]
    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None
    stream: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_output_tokens is not None and self.max_output_tokens < 0:
            raise ValueError("max_output_tokens must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "max_output_tokens": self.max_output_tokens,
            "temperature": self.temperature,
            "stream": self.stream,
            "extra": dict(self.extra),
        }


__all__ = [
    "ChatRequest",
]
