"""Gemini adapter: thinking channel, search grounding and SSE parsing."""
from __future__ import annotations

import httpx
import pytest

from chatui_providers.base.errors import ErrorCode, ProviderError
from chatui_providers.base.models import ChatRequest, Message
from chatui_providers.base.streaming import parse_all
from chatui_providers.gemini import GeminiProvider
from chatui_providers.gemini.helpers import (
    GeminiOptions,
    GeminiStreamParser,
    build_payload,
    is_thinking_model,
    parse_response,
)

BASE = "https://gemini.test/v1beta"
SOURCES = "\n\n---\n**Sources:**\n"


def _request(model: str = "gemini-2.5-flash-preview-05-20", **kw) -> ChatRequest:
    messages = [
        Message("system", "first"),
        Message("user", "q"),
        Message("assistant", "a"),
        Message("system", "second"),
        Message("tool", "t"),
    ]
    return ChatRequest(model=model, messages=messages, **kw)


def test_payload_maps_roles_and_last_system_wins():
    payload = build_payload(_request(), GeminiOptions())
    assert [c["role"] for c in payload["contents"]] == ["user", "model", "user"]
    assert payload["contents"][0]["parts"] == [{"text": "q"}]
    assert payload["systemInstruction"] == {"parts": [{"text": "second"}]}
    assert "generationConfig" not in payload
    assert "tools" not in payload


def test_generation_config_carries_sampling_options():
    payload = build_payload(_request(temperature=0.3, max_output_tokens=50), GeminiOptions())
    assert payload["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 50}


def test_thinking_budget_for_gemini2_and_level_for_gemini3():
    older = build_payload(_request(), GeminiOptions(thinking=True))
    assert older["generationConfig"]["thinkingConfig"] == {"thinkingBudget": 8192, "includeThoughts": True}

    newer = build_payload(_request("gemini-3-pro-preview"), GeminiOptions(thinking=True, thinking_level="high"))
    assert newer["generationConfig"]["thinkingConfig"] == {"thinkingLevel": "high", "includeThoughts": True}


def test_thinking_ignored_for_models_without_reasoning():
    assert not is_thinking_model("gemini-1.5-pro")
    payload = build_payload(_request("gemini-1.5-pro"), GeminiOptions(thinking=True))
    assert "generationConfig" not in payload


def test_search_flag_attaches_google_search_tool():
    payload = build_payload(_request(), GeminiOptions(search=True))
    assert payload["tools"] == [{"googleSearch": {}}]


def test_request_extra_overrides_adapter_defaults():
    req = _request("gemini-3-flash-preview")
    req.extra.update({"thinking": True, "search_grounding": False, "thinking_level": "low"})
    opts = GeminiOptions.resolve(req, thinking=False, search=True)
    assert opts == GeminiOptions(thinking=True, search=False, thinking_level="low")

    req.extra["thinking_level"] = "extreme"
    assert GeminiOptions.resolve(req, thinking=False, search=False).thinking_level == "medium"


def test_parse_response_groups_thoughts_before_answer():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "step one"},
                        {"text": "Answer "},
                        {"thought": {"text": "step two"}},
                        {"text": "done."},
                    ]
                },
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 6, "totalTokenCount": 20},
    }
    resp = parse_response(data, model="gemini-2.5-pro")
    assert resp.content == "<thinking>\nstep one\nstep two\n</thinking>\n\nAnswer done."
    assert resp.finish_reason == "STOP"
    assert resp.model == "gemini-2.5-pro"
    assert resp.usage.total_tokens == 20


def test_parse_response_appends_web_sources():
    data = {
        "candidates": [
            {
                "content": {"parts": [{"text": "Paris."}]},
                "groundingMetadata": {
                    "groundingChunks": [
                        {"web": {"uri": "https://a.example", "title": "A"}},
                        {"retrievedContext": {"uri": "ignored"}},
                        {"web": {"uri": "https://b.example", "title": "B"}},
                    ]
                },
            }
        ]
    }
    resp = parse_response(data, model="gemini-2.0-flash")
    assert resp.content == "Paris." + SOURCES + "- [A](https://a.example)\n- [B](https://b.example)\n"


def test_parse_response_without_candidates_is_invalid():
    with pytest.raises(ProviderError) as info:
        parse_response({"candidates": []}, model="m")
    assert info.value.code is ErrorCode.INVALID_RESPONSE


def test_send_passes_key_as_query_param(mock_http):
    http = mock_http(lambda r: httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "hi"}]}}]}))
    provider = GeminiProvider(api_key="gk", base_url=BASE, client=http.client, search_enabled=True)
    resp = provider.send(_request())

    sent = http.requests[0]
    assert sent.url.path == "/v1beta/models/gemini-2.5-flash-preview-05-20:generateContent"
    assert sent.url.params["key"] == "gk"
    assert http.last_json["tools"] == [{"googleSearch": {}}]
    assert resp.content == "hi"


def test_stream_thinking_span_and_sources(mock_http, sse_response):
    body = sse_response(
        'data: {"candidates":[{"content":{"parts":[{"thought":true,"text":"plan"}]}}]}',
        "",
        'data: {"candidates":[{"content":{"parts":[{"thought":true,"text":" more"}]}}]}',
        "",
        'data: {"candidates":[{"content":{"parts":[{"text":"Answer"}]},'
        '"groundingMetadata":{"groundingChunks":[{"web":{"uri":"https://s.example","title":"S"}}]}}]}',
        "",
        "data: {oops",
        'data: {"candidates":[{"content":{"parts":[{"text":"!"}]}}]}',
    )
    http = mock_http(lambda r: body)
    provider = GeminiProvider(api_key="gk", base_url=BASE, client=http.client, thinking_enabled=True)
    deltas: list[str] = []
    provider.stream(_request(), deltas.append)

    assert deltas == [
        "<thinking>\n",
        "plan",
        " more",
        "\n</thinking>\n\n",
        "Answer",
        "!",
        SOURCES + "- [S](https://s.example)\n",
    ]
    sent = http.requests[0]
    assert sent.url.path.endswith(":streamGenerateContent")
    assert sent.url.params["alt"] == "sse"
    assert "thinkingConfig" in http.last_json["generationConfig"]


def test_stream_flush_closes_open_thinking_span():
    parser = GeminiStreamParser()
    lines = ['data: {"candidates":[{"content":{"parts":[{"thought":{"text":"only thoughts"}}]}}]}']
    assert parse_all(parser, lines) == ["<thinking>\n", "only thoughts", "\n</thinking>\n\n"]
    assert parser.in_thinking is False


def test_adapter_toggles_reach_the_wire(mock_http, sse_response):
    http = mock_http(lambda r: sse_response('data: {"candidates":[{"content":{"parts":[{"text":"x"}]}}]}'))
    provider = GeminiProvider(api_key="gk", base_url=BASE, client=http.client)
    provider.set_thinking_enabled(True)
    provider.set_search_enabled(True)
    provider.stream(_request("gemini-3-pro-preview"), lambda _d: None)
    body = http.last_json
    assert body["generationConfig"]["thinkingConfig"]["thinkingLevel"] == "medium"
    assert body["tools"] == [{"googleSearch": {}}]


def test_missing_key_before_io(mock_http):
    http = mock_http(lambda r: httpx.Response(200))
    provider = GeminiProvider(base_url=BASE, client=http.client)
    with pytest.raises(ProviderError) as info:
        provider.stream(_request(), lambda _d: None)
    assert info.value.code is ErrorCode.MISSING_CREDENTIAL
    assert http.requests == []
