"""OpenAI-style wire translation.

Pure functions and a per-call frame parser; no I/O happens here.

- :func:`build_payload` maps a ``ChatRequest`` to the chat-completions body.
  Messages are copied 1:1 in order, system messages stay inline.
- :func:`parse_response` maps a decoded 2xx body to ``ChatResponse``.
- :class:`OpenAIStreamParser` handles ``data:`` frames terminated by
  ``data: [DONE]``.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.errors import invalid_response
from ..base.models import ChatRequest, ChatResponse, usage_from_mapping
from ..base.streaming import FrameParser, split_field
from ..config.defaults import OPENAI_DONE_SENTINEL

PROVIDER = "openai"


def build_payload(request: ChatRequest, *, stream: bool) -> Dict[str, Any]:
    """Return the chat-completions request body for ``request``."""
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": [{"role": m.role, "content": m.content} for m in request.messages],
        "stream": stream,
    }
    if request.max_output_tokens:
        payload["max_tokens"] = request.max_output_tokens
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    return payload


def parse_response(data: Dict[str, Any], *, model: str) -> ChatResponse:
    """Translate a decoded chat-completions body.

    Raises ``INVALID_RESPONSE`` when the body carries no choices.
    """
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise invalid_response(PROVIDER, model, "no choices in response")
    first = choices[0]
    message = first.get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return ChatResponse(
        content=content if isinstance(content, str) else "",
        model=data.get("model") or model,
        finish_reason=first.get("finish_reason"),
        usage=usage_from_mapping(
            data.get("usage"),
            prompt_key="prompt_tokens",
            completion_key="completion_tokens",
            total_key="total_tokens",
        ),
    )


class OpenAIStreamParser(FrameParser):
    """Forward ``choices[0].delta.content`` from each ``data:`` frame."""

    def feed(self, line: str) -> List[str]:
        field = split_field(line)
        if field is None:
            return []
        name, value = field
        if name != "data":
            return []
        if value.strip() == OPENAI_DONE_SENTINEL:
            self.done = True
            return []
        chunk = self.decode(value)
        if not isinstance(chunk, dict):
            return []
        choices = chunk.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return []
        delta = choices[0].get("delta")
        if not isinstance(delta, dict):
            return []
        content = delta.get("content")
        return [content] if isinstance(content, str) and content else []


__all__ = ["PROVIDER", "build_payload", "parse_response", "OpenAIStreamParser"]
