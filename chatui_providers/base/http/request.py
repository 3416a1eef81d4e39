"""Single-attempt JSON request helper for non-streaming calls.

Runs the steps every adapter's ``send`` shares: cancellation check, POST,
transport error mapping, status handling, and envelope decoding. Vendor
translation happens before (payload) and after (decoded body) this helper.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from ..cancellation import Cancellable, raise_if_cancelled
from ..errors import (
    TRANSPORT_ERRORS,
    EnvelopeReader,
    classify_transport_error,
    error_from_status,
    invalid_response,
    is_success,
    read_error_envelope,
)


def post_json(
    client: httpx.Client,
    url: str,
    payload: Mapping[str, Any],
    *,
    provider: str,
    model: Optional[str],
    headers: Optional[Mapping[str, str]] = None,
    params: Optional[Mapping[str, str]] = None,
    cancel: Cancellable = None,
    reader: EnvelopeReader = read_error_envelope,
) -> Dict[str, Any]:
    """POST ``payload`` and return the decoded 2xx JSON object.

    Raises:
        ProviderError: ``CANCELLED`` when the token is set before the request
            or once it returns; ``RATE_LIMITED``/``VENDOR_ERROR`` for non-2xx;
            ``INVALID_RESPONSE`` when a 2xx body is not a JSON object;
            ``VENDOR_ERROR`` when the request itself fails.
    """
    raise_if_cancelled(cancel, provider=provider, model=model)
    try:
        resp = client.post(url, json=dict(payload), headers=dict(headers or {}), params=dict(params or {}))
    except TRANSPORT_ERRORS as exc:
        raise classify_transport_error(exc, provider=provider, model=model, connected=False) from exc
    raise_if_cancelled(cancel, provider=provider, model=model)

    if not is_success(resp.status_code):
        raise error_from_status(resp.status_code, resp.content, provider=provider, model=model, reader=reader)
    try:
        data = resp.json()
    except ValueError as exc:
        raise invalid_response(provider, model, "body is not valid JSON") from exc
    if not isinstance(data, dict):
        raise invalid_response(provider, model, "body is not a JSON object")
    return data


__all__ = ["post_json"]
