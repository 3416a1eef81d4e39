"""Anthropic adapter: system lifting, role mapping, event-stream parsing."""
from __future__ import annotations

import httpx
import pytest

from chatui_providers.anthropic import AnthropicProvider
from chatui_providers.anthropic.helpers import AnthropicStreamParser, build_payload, parse_response
from chatui_providers.base.errors import ErrorCode, ProviderError
from chatui_providers.base.models import ChatRequest, Message
from chatui_providers.base.streaming import parse_all

BASE = "https://anthropic.test/v1"
MODEL = "claude-3-5-haiku-20241022"


def _request(**kw) -> ChatRequest:
    messages = [
        Message("system", "rule one"),
        Message("user", "q1"),
        Message("system", "rule two"),
        Message("assistant", "a1"),
        Message("tool", "tool output"),
    ]
    return ChatRequest(model=MODEL, messages=messages, **kw)


def test_payload_lifts_and_joins_system_messages():
    payload = build_payload(_request(), stream=False)
    assert payload["system"] == "rule one\n\nrule two"
    assert payload["messages"] == [
        {"role": "user", "content": "q1"},
        {"role": "assistant", "content": "a1"},
        {"role": "user", "content": "tool output"},
    ]
    assert "stream" not in payload
    assert "temperature" not in payload


def test_payload_max_tokens_defaults_when_unset_or_zero():
    assert build_payload(_request(), stream=False)["max_tokens"] == 4096
    assert build_payload(_request(max_output_tokens=0), stream=False)["max_tokens"] == 4096
    assert build_payload(_request(max_output_tokens=256), stream=True)["max_tokens"] == 256


def test_payload_without_system_omits_field():
    req = ChatRequest(model=MODEL, messages=[Message("user", "hi")], temperature=0.5)
    payload = build_payload(req, stream=True)
    assert "system" not in payload
    assert payload["temperature"] == 0.5
    assert payload["stream"] is True


def test_parse_response_concatenates_text_blocks_and_sums_usage():
    resp = parse_response(
        {
            "model": MODEL,
            "content": [
                {"type": "text", "text": "Hello "},
                {"type": "tool_use", "id": "t1"},
                {"type": "text", "text": "world"},
            ],
            "stop_reason": "end_turn",
            "usage": {"input_tokens": 12, "output_tokens": 3},
        },
        model=MODEL,
    )
    assert resp.content == "Hello world"
    assert resp.finish_reason == "end_turn"
    assert (resp.usage.prompt_tokens, resp.usage.completion_tokens, resp.usage.total_tokens) == (12, 3, 15)


def test_parse_response_without_blocks_is_invalid():
    with pytest.raises(ProviderError) as info:
        parse_response({"content": []}, model=MODEL)
    assert info.value.code is ErrorCode.INVALID_RESPONSE


def test_send_uses_api_key_and_version_headers(mock_http):
    http = mock_http(
        lambda r: httpx.Response(200, json={"content": [{"type": "text", "text": "ok"}], "stop_reason": "end_turn"})
    )
    provider = AnthropicProvider(api_key="ak", base_url=BASE, client=http.client)
    resp = provider.send(_request())

    sent = http.requests[0]
    assert str(sent.url) == f"{BASE}/messages"
    assert sent.headers["x-api-key"] == "ak"
    assert sent.headers["anthropic-version"] == "2023-06-01"
    assert "authorization" not in sent.headers
    assert resp.content == "ok"
    assert resp.model == MODEL


def test_send_maps_vendor_envelope(mock_http):
    http = mock_http(
        lambda r: httpx.Response(400, json={"type": "error", "error": {"type": "invalid_request_error", "message": "bad"}})
    )
    provider = AnthropicProvider(api_key="ak", base_url=BASE, client=http.client)
    with pytest.raises(ProviderError) as info:
        provider.send(_request())
    assert info.value.code is ErrorCode.VENDOR_ERROR
    assert info.value.message == "bad"


def test_stream_forwards_text_deltas_only(mock_http, sse_response):
    body = sse_response(
        "event: message_start",
        'data: {"type":"message_start","message":{"id":"m1"}}',
        "",
        "event: content_block_start",
        'data: {"type":"content_block_start","index":0,"content_block":{"type":"text","text":""}}',
        "",
        "event: content_block_delta",
        'data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":"Hel"}}',
        "",
        "event: content_block_delta",
        'data: {"type":"content_block_delta","index":0,"delta":{"type":"input_json_delta","partial_json":"{}"}}',
        "",
        "event: ping",
        'data: {"type":"ping"}',
        "",
        "event: content_block_delta",
        'data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":"lo"}}',
        "",
        "event: message_stop",
        'data: {"type":"message_stop"}',
    )
    http = mock_http(lambda r: body)
    provider = AnthropicProvider(api_key="ak", base_url=BASE, client=http.client)
    deltas: list[str] = []
    provider.stream(_request(), deltas.append)
    assert deltas == ["Hel", "lo"]
    assert http.last_json["stream"] is True
    assert http.requests[0].headers["accept"] == "text/event-stream"


def test_message_stop_in_data_type_terminates():
    parser = AnthropicStreamParser()
    lines = [
        'data: {"type":"content_block_delta","delta":{"type":"text_delta","text":"a"}}',
        'data: {"type":"message_stop"}',
        'data: {"type":"content_block_delta","delta":{"type":"text_delta","text":"late"}}',
    ]
    assert parse_all(parser, lines) == ["a"]
    assert parser.done is True


def test_in_stream_error_event_fails_with_vendor_error(mock_http, sse_response):
    body = sse_response(
        "event: content_block_delta",
        'data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":"partial"}}',
        "event: error",
        'data: {"type":"error","error":{"type":"overloaded_error","message":"Overloaded"}}',
    )
    provider = AnthropicProvider(api_key="ak", base_url=BASE, client=mock_http(lambda r: body).client)
    deltas: list[str] = []
    with pytest.raises(ProviderError) as info:
        provider.stream(_request(), deltas.append)
    assert info.value.code is ErrorCode.VENDOR_ERROR
    assert info.value.message == "Overloaded"
    assert deltas == ["partial"]


def test_stream_rate_limited_at_headers(mock_http):
    provider = AnthropicProvider(
        api_key="ak", base_url=BASE, client=mock_http(lambda r: httpx.Response(429)).client
    )
    with pytest.raises(ProviderError) as info:
        provider.stream(_request(), lambda _d: None)
    assert info.value.code is ErrorCode.RATE_LIMITED


def test_list_models_returns_catalogue():
    assert AnthropicProvider().list_models()[0] == "claude-sonnet-4-20250514"
