"""Error taxonomy and HTTP outcome classification."""
from __future__ import annotations

import json

import httpx

from chatui_providers.base.errors import (
    ErrorCode,
    ProviderError,
    classify_transport_error,
    error_from_status,
    invalid_response,
    missing_credential,
    read_error_envelope,
)


def _body(obj) -> bytes:
    return json.dumps(obj).encode()


def test_rate_limit_ignores_body():
    err = error_from_status(429, _body({"error": {"message": "slow down"}}), provider="openai", model="m")
    assert err.code is ErrorCode.RATE_LIMITED
    assert err.status_code == 429
    assert "slow down" not in err.message


def test_vendor_message_is_carried_verbatim():
    err = error_from_status(400, _body({"error": {"message": "bad model"}}), provider="anthropic", model="m")
    assert err.code is ErrorCode.VENDOR_ERROR
    assert err.message == "bad model"
    assert err.status_code == 400


def test_undecodable_body_falls_back_to_status():
    err = error_from_status(502, b"<html>gateway</html>", provider="gemini", model="m")
    assert err.message == "status 502"


def test_empty_envelope_message_falls_back_to_status():
    err = error_from_status(500, _body({"error": {"message": ""}}), provider="openai", model=None)
    assert err.message == "status 500"


def test_read_error_envelope_shapes():
    assert read_error_envelope({"error": {"message": "x"}}) == "x"
    assert read_error_envelope({"error": "flat"}) is None
    assert read_error_envelope(["not", "a", "dict"]) is None


def test_transport_error_before_connect_is_vendor_error():
    exc = httpx.ConnectError("refused")
    err = classify_transport_error(exc, provider="openai", model="m", connected=False)
    assert err.code is ErrorCode.VENDOR_ERROR
    assert err.message.startswith("request failed:")
    assert err.raw is exc


def test_transport_error_after_connect_is_stream_closed():
    err = classify_transport_error(httpx.ReadError("reset"), provider="openai", model="m", connected=True)
    assert err.code is ErrorCode.STREAM_CLOSED


def test_provider_error_str_and_helpers():
    err = missing_credential("gemini", None)
    assert isinstance(err, ProviderError)
    assert str(err) == "gemini:- missing_credential: no API key configured for provider"
    bad = invalid_response("openai", "gpt-4o", "no choices")
    assert bad.code is ErrorCode.INVALID_RESPONSE
    assert "no choices" in str(bad)
