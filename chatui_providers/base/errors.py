"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chatui_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    HTTP_TOO_MANY_REQUESTS,
    TRANSPORT_ERRORS,
    EnvelopeReader,
    cancelled,
    classify_transport_error,
    error_from_status,
    invalid_response,
    is_success,
    missing_credential,
    read_error_envelope,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "HTTP_TOO_MANY_REQUESTS",
    "TRANSPORT_ERRORS",
    "EnvelopeReader",
    "cancelled",
    "classify_transport_error",
    "error_from_status",
    "invalid_response",
    "is_success",
    "missing_credential",
    "read_error_envelope",
]
