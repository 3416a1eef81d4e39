"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by every vendor adapter. Values are
lowercase snake_case and are a stable public contract for logging and for
callers deciding on remediation (configure a key vs. wait and retry).
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    MISSING_CREDENTIAL = "missing_credential"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"
    STREAM_CLOSED = "stream_closed"
    CANCELLED = "cancelled"
    VENDOR_ERROR = "vendor_error"


__all__ = ["ErrorCode"]
