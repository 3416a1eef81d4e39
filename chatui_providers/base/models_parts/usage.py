"""Token usage DTO."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class Usage:
    """Token accounting reported by a vendor; zeros when not reported."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(
        cls,
        prompt: Optional[int],
        completion: Optional[int],
        total: Optional[int] = None,
    ) -> "Usage":
        """Build a `Usage` from possibly-missing counts.

        Missing or negative values become zero. When ``total`` is absent it is
        derived as ``prompt + completion``.
        """
        p = _non_negative(prompt)
        c = _non_negative(completion)
        t = _non_negative(total) if total is not None else p + c
        return cls(prompt_tokens=p, completion_tokens=c, total_tokens=t)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _non_negative(value: Any) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return 0
    return n if n > 0 else 0


def usage_from_mapping(data: Mapping[str, Any] | None, *, prompt_key: str, completion_key: str, total_key: str | None) -> Usage:
    """Read a vendor usage object using the vendor's key names."""
    if not isinstance(data, Mapping):
        return Usage()
    return Usage.from_counts(
        data.get(prompt_key),
        data.get(completion_key),
        data.get(total_key) if total_key else None,
    )


__all__ = ["Usage", "usage_from_mapping"]
