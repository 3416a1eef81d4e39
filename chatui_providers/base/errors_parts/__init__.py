"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatui_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import error_from_status, classify_transport_error

__all__ = ["ErrorCode", "ProviderError", "error_from_status", "classify_transport_error"]
