"""
ChatResponse DTO representing a normalized non-streaming completion.

Streaming calls never materialize a ``ChatResponse``; callers accumulate the
forwarded fragments themselves.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .usage import Usage


@dataclass
class ChatResponse:
    """Provider-agnostic response from a chat invocation.

    Attributes:
        content: Flattened completion text (for Gemini this may include a
            leading ``<thinking>`` block and a trailing Sources block).
        model: Model identifier reported by the vendor (or the requested one).
        finish_reason: Vendor finish/stop reason when reported.
        usage: Token usage; zero-valued when the vendor omits it.
    """

    content: str
    model: str
    finish_reason: Optional[str] = None
    usage: Usage = field(default_factory=Usage)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "content": self.content,
            "model": self.model,
            "finish_reason": self.finish_reason,
            "usage": self.usage.to_dict(),
        }


__all__ = [
    "ChatResponse",
]
