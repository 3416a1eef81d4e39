"""
Structured provider error exception type.

Every adapter failure surfaces as a `ProviderError` carrying a normalized
`ErrorCode`, so callers branch on ``err.code`` instead of vendor specifics.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message. For ``VENDOR_ERROR`` this is the
            vendor's own diagnostic text, preserved verbatim.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        status_code: HTTP status when the failure came from a response.
        raw: Optional original exception or vendor payload for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    raw: Any = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
