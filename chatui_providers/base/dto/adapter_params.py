"""Typed parameter object for provider adapter initialization.

Captures the constructor arguments every adapter accepts so the factory and
host wiring can pass one validated object instead of long keyword lists.
Vendor-only switches (the Gemini thinking/search toggles) travel in ``extra``.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider adapter initialization parameters.

    Attributes
    ----------
    provider:
        Canonical provider name. Dropped before the adapter constructor runs.
    api_key:
        Credential passed to the adapter. May be empty; calls then fail with
        ``MISSING_CREDENTIAL`` instead of construction failing.
    base_url:
        Optional override for the vendor API root (proxies, test servers).
    model:
        Optional default model for the adapter.
    extra:
        Provider-specific constructor keywords, e.g. ``thinking_enabled``.
    """

    provider: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["AdapterParams"]
