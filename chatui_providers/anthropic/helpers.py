"""Anthropic messages API wire translation.

Request side
------------
- System messages are lifted out of the conversation and joined, in their
  original order, with a blank line into the top-level ``system`` field.
- ``tool`` messages are sent as ``user``; other roles pass through.
- ``max_tokens`` is mandatory on the wire; unset or zero budgets fall back to
  :data:`~chatui_providers.config.defaults.ANTHROPIC_DEFAULT_MAX_TOKENS`.

Streaming side
--------------
Frames arrive as ``event: <type>`` / ``data: <json>`` pairs. Only
``content_block_delta`` events carrying a ``text_delta`` forward text; a
``message_stop`` (announced either on the event line or in the data ``type``)
ends the stream; an ``error`` event fails the call.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.errors import ErrorCode, ProviderError, invalid_response
from ..base.models import ChatRequest, ChatResponse, usage_from_mapping
from ..base.streaming import FrameParser, split_field
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS

PROVIDER = "anthropic"

MESSAGE_STOP = "message_stop"
CONTENT_BLOCK_DELTA = "content_block_delta"
TEXT_DELTA = "text_delta"
ERROR_EVENT = "error"


def build_payload(request: ChatRequest, *, stream: bool) -> Dict[str, Any]:
    """Return the ``/messages`` request body for ``request``."""
    system_parts: List[str] = []
    messages: List[Dict[str, str]] = []
    for m in request.messages:
        if m.role == "system":
            system_parts.append(m.content)
            continue
        role = "user" if m.role == "tool" else m.role
        messages.append({"role": role, "content": m.content})

    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": messages,
        "max_tokens": request.max_output_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
    }
    if system_parts:
        payload["system"] = "\n\n".join(system_parts)
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    if stream:
        payload["stream"] = True
    return payload


def parse_response(data: Dict[str, Any], *, model: str) -> ChatResponse:
    """Translate a decoded ``/messages`` body.

    Text blocks are concatenated in order; non-text blocks are ignored.
    Raises ``INVALID_RESPONSE`` when the body has no content blocks.
    """
    blocks = data.get("content")
    if not isinstance(blocks, list) or not blocks:
        raise invalid_response(PROVIDER, model, "no content blocks in response")
    text = "".join(
        b.get("text") or ""
        for b in blocks
        if isinstance(b, dict) and b.get("type") == "text"
    )
    return ChatResponse(
        content=text,
        model=data.get("model") or model,
        finish_reason=data.get("stop_reason"),
        usage=usage_from_mapping(
            data.get("usage"),
            prompt_key="input_tokens",
            completion_key="output_tokens",
            total_key=None,
        ),
    )


class AnthropicStreamParser(FrameParser):
    """Per-call parser for the Anthropic event stream."""

    def __init__(self, model: Optional[str] = None) -> None:
        super().__init__()
        self._model = model

    def feed(self, line: str) -> List[str]:
        field = split_field(line)
        if field is None:
            return []
        name, value = field
        if name == "event":
            if value.strip() == MESSAGE_STOP:
                self.done = True
            return []
        if name != "data":
            return []
        event = self.decode(value)
        if not isinstance(event, dict):
            return []
        kind = event.get("type")
        if kind == MESSAGE_STOP:
            self.done = True
            return []
        if kind == ERROR_EVENT:
            raise self._stream_error(event)
        if kind != CONTENT_BLOCK_DELTA:
            return []
        delta = event.get("delta")
        if not isinstance(delta, dict) or delta.get("type") != TEXT_DELTA:
            return []
        text = delta.get("text")
        return [text] if isinstance(text, str) and text else []

    def _stream_error(self, event: Dict[str, Any]) -> ProviderError:
        err = event.get("error")
        message = err.get("message") if isinstance(err, dict) else None
        return ProviderError(
            code=ErrorCode.VENDOR_ERROR,
            message=message or "stream error event",
            provider=PROVIDER,
            model=self._model,
            raw=event,
        )


__all__ = [
    "PROVIDER",
    "build_payload",
    "parse_response",
    "AnthropicStreamParser",
]
