"""
Error classification helpers mapping HTTP outcomes to `ProviderError`.

Implements the status handling shared by every adapter (429 first, then the
vendor error envelope, then a ``status <code>`` fallback) and the mapping of
transport exceptions depending on whether the connection had already been
established.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError

HTTP_TOO_MANY_REQUESTS = 429

# Extracts a human-readable message from a decoded error body, or None.
EnvelopeReader = Callable[[Any], Optional[str]]


def read_error_envelope(data: Any) -> Optional[str]:
    """Return ``data["error"]["message"]`` when present and non-empty.

    All three supported vendors wrap failures as
    ``{"error": {"message": "..."}}``; other shapes yield ``None``.
    """
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        msg = err.get("message")
        if isinstance(msg, str) and msg:
            return msg
    return None


def is_success(status: int) -> bool:
    """Return True for 2xx statuses."""
    return 200 <= status < 300


def error_from_status(
    status: int,
    body: bytes | str | None,
    *,
    provider: str,
    model: Optional[str],
    reader: EnvelopeReader = read_error_envelope,
) -> ProviderError:
    """Build the `ProviderError` for a non-2xx HTTP response.

    Precedence:
        1. ``429`` -> ``RATE_LIMITED`` without looking at the body.
        2. Vendor envelope message -> ``VENDOR_ERROR`` carrying it verbatim.
        3. ``VENDOR_ERROR`` with ``"status <code>"``.
    """
    if status == HTTP_TOO_MANY_REQUESTS:
        return ProviderError(
            code=ErrorCode.RATE_LIMITED,
            message="rate limited by provider",
            provider=provider,
            model=model,
            status_code=status,
        )
    message: Optional[str] = None
    if body:
        try:
            message = reader(json.loads(body))
        except ValueError:
            message = None
    return ProviderError(
        code=ErrorCode.VENDOR_ERROR,
        message=message or f"status {status}",
        provider=provider,
        model=model,
        status_code=status,
    )


def classify_transport_error(
    exc: Exception,
    *,
    provider: str,
    model: Optional[str],
    connected: bool,
) -> ProviderError:
    """Map a transport exception to the taxonomy.

    Before the response headers arrived the failure is a request failure and
    reported as ``VENDOR_ERROR``; once connected, any read failure means the
    stream closed unexpectedly.
    """
    if connected:
        return ProviderError(
            code=ErrorCode.STREAM_CLOSED,
            message=f"stream closed unexpectedly: {exc}",
            provider=provider,
            model=model,
            raw=exc,
        )
    return ProviderError(
        code=ErrorCode.VENDOR_ERROR,
        message=f"request failed: {exc}",
        provider=provider,
        model=model,
        raw=exc,
    )


def missing_credential(provider: str, model: Optional[str]) -> ProviderError:
    """Error raised before any I/O when no API key is configured."""
    return ProviderError(
        code=ErrorCode.MISSING_CREDENTIAL,
        message="no API key configured for provider",
        provider=provider,
        model=model,
    )


def cancelled(provider: str, model: Optional[str], reason: Optional[str] = None) -> ProviderError:
    """Error raised when the caller's cancellation signal was observed."""
    return ProviderError(
        code=ErrorCode.CANCELLED,
        message=reason or "operation cancelled",
        provider=provider,
        model=model,
    )


def invalid_response(provider: str, model: Optional[str], detail: str) -> ProviderError:
    """Error raised for a 2xx response that is structurally unusable."""
    return ProviderError(
        code=ErrorCode.INVALID_RESPONSE,
        message=f"invalid response from provider: {detail}",
        provider=provider,
        model=model,
    )


TRANSPORT_ERRORS = (httpx.TransportError, httpx.StreamError)


__all__ = [
    "HTTP_TOO_MANY_REQUESTS",
    "EnvelopeReader",
    "TRANSPORT_ERRORS",
    "read_error_envelope",
    "is_success",
    "error_from_status",
    "classify_transport_error",
    "missing_credential",
    "cancelled",
    "invalid_response",
]
