"""
ModelInfo DTO for static model catalogue entries.

Entries are display/enumeration data only; request construction never reads
them.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ModelInfo:
    """A single model catalogue entry.

    Attributes:
        id: Stable model identifier sent on the wire.
        name: Human-friendly display name.
        provider: Provider key owning this model.
        context_length: Maximum context window size in tokens.
        description: Short free-form description.
    """

    id: str
    name: str
    provider: str
    context_length: int
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = [
    "ModelInfo",
]
