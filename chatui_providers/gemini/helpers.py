"""Gemini ``generateContent`` wire translation.

Request side
------------
- ``assistant`` becomes ``model``; every other non-system role is ``user``.
- System messages become ``systemInstruction``; the last one wins.
- ``generationConfig`` carries ``temperature``, ``maxOutputTokens`` and
  ``thinkingConfig`` and is omitted entirely when none apply.
- Thinking applies only to thinking-capable models. Gemini 3 models take a
  ``thinkingLevel``; older ones a ``thinkingBudget``.
- Search grounding attaches the ``googleSearch`` tool.

Response side
-------------
Thought parts are rendered inside a ``<thinking>`` span ahead of the answer
text, and web grounding chunks are rendered as a trailing Markdown
"Sources" list. Two thought shapes are accepted: ``{"thought": true,
"text": ...}`` and the older ``{"thought": {"text": ...}}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..base.errors import invalid_response
from ..base.models import ChatRequest, ChatResponse, usage_from_mapping
from ..base.streaming import FrameParser, split_field
from ..config.defaults import (
    GEMINI_3_MARKER,
    GEMINI_DEFAULT_THINKING_LEVEL,
    GEMINI_THINKING_BUDGET,
    GEMINI_THINKING_LEVELS,
    GEMINI_THINKING_MODEL_PATTERNS,
)

PROVIDER = "gemini"

THINKING_OPEN = "<thinking>\n"
THINKING_CLOSE = "</thinking>\n\n"
STREAM_THINKING_CLOSE = "\n</thinking>\n\n"
SOURCES_HEADER = "\n\n---\n**Sources:**\n"

Citation = Tuple[str, str]


@dataclass(frozen=True)
class GeminiOptions:
    """Resolved per-call vendor flags."""

    thinking: bool = False
    search: bool = False
    thinking_level: str = GEMINI_DEFAULT_THINKING_LEVEL

    @classmethod
    def resolve(
        cls,
        request: ChatRequest,
        *,
        thinking: bool,
        search: bool,
    ) -> "GeminiOptions":
        """Apply ``request.extra`` overrides on top of the adapter defaults."""
        extra = request.extra or {}
        level = extra.get("thinking_level", GEMINI_DEFAULT_THINKING_LEVEL)
        if level not in GEMINI_THINKING_LEVELS:
            level = GEMINI_DEFAULT_THINKING_LEVEL
        return cls(
            thinking=bool(extra.get("thinking", thinking)),
            search=bool(extra.get("search_grounding", search)),
            thinking_level=level,
        )


def is_thinking_model(model: str) -> bool:
    return any(pattern in model for pattern in GEMINI_THINKING_MODEL_PATTERNS)


def is_gemini3_model(model: str) -> bool:
    return GEMINI_3_MARKER in model


def thinking_config(model: str, options: GeminiOptions) -> Optional[Dict[str, Any]]:
    """Return the ``thinkingConfig`` for ``model``, or None when not applicable."""
    if not options.thinking or not is_thinking_model(model):
        return None
    if is_gemini3_model(model):
        return {"thinkingLevel": options.thinking_level, "includeThoughts": True}
    return {"thinkingBudget": GEMINI_THINKING_BUDGET, "includeThoughts": True}


def build_payload(request: ChatRequest, options: GeminiOptions) -> Dict[str, Any]:
    """Return the ``generateContent`` request body for ``request``."""
    contents: List[Dict[str, Any]] = []
    system: Optional[str] = None
    for m in request.messages:
        if m.role == "system":
            system = m.content
            continue
        role = "model" if m.role == "assistant" else "user"
        contents.append({"role": role, "parts": [{"text": m.content}]})

    payload: Dict[str, Any] = {"contents": contents}
    if system is not None:
        payload["systemInstruction"] = {"parts": [{"text": system}]}

    generation: Dict[str, Any] = {}
    if request.temperature is not None:
        generation["temperature"] = request.temperature
    if request.max_output_tokens:
        generation["maxOutputTokens"] = request.max_output_tokens
    thinking = thinking_config(request.model, options)
    if thinking is not None:
        generation["thinkingConfig"] = thinking
    if generation:
        payload["generationConfig"] = generation

    if options.search:
        payload["tools"] = [{"googleSearch": {}}]
    return payload


# ---- response helpers ------------------------------------------------------

def _thought_text(part: Dict[str, Any]) -> Optional[str]:
    """Return the text of a thought part, or None when ``part`` is not one."""
    thought = part.get("thought")
    if isinstance(thought, dict):
        text = thought.get("text")
        return text if isinstance(text, str) else ""
    if thought is True:
        text = part.get("text")
        return text if isinstance(text, str) else ""
    return None


def split_parts(parts: Iterable[Any]) -> Tuple[List[str], List[str]]:
    """Partition content parts into ``(thoughts, answer_texts)`` in order."""
    thoughts: List[str] = []
    answers: List[str] = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        thought = _thought_text(part)
        if thought is not None:
            if thought:
                thoughts.append(thought)
            continue
        text = part.get("text")
        if isinstance(text, str) and text:
            answers.append(text)
    return thoughts, answers


def citations(candidate: Dict[str, Any]) -> List[Citation]:
    """Return ``(title, uri)`` pairs for web grounding chunks, in order."""
    meta = candidate.get("groundingMetadata")
    if not isinstance(meta, dict):
        return []
    out: List[Citation] = []
    for chunk in meta.get("groundingChunks") or []:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if isinstance(web, dict):
            out.append((web.get("title") or "", web.get("uri") or ""))
    return out


def format_sources(cites: List[Citation]) -> str:
    if not cites:
        return ""
    return SOURCES_HEADER + "".join(f"- [{title}]({uri})\n" for title, uri in cites)


def _first_candidate(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        return candidates[0]
    return None


def _parts(candidate: Dict[str, Any]) -> List[Any]:
    content = candidate.get("content")
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    return parts if isinstance(parts, list) else []


def parse_response(data: Dict[str, Any], *, model: str) -> ChatResponse:
    """Flatten a decoded ``generateContent`` body into a ``ChatResponse``.

    The result model is the requested model. Raises ``INVALID_RESPONSE`` when
    the body has no candidates.
    """
    candidate = _first_candidate(data)
    if candidate is None:
        raise invalid_response(PROVIDER, model, "no candidates in response")

    thoughts, answers = split_parts(_parts(candidate))
    pieces: List[str] = []
    if thoughts:
        pieces.append(THINKING_OPEN)
        pieces.extend(f"{t}\n" for t in thoughts)
        pieces.append(THINKING_CLOSE)
    pieces.extend(answers)
    pieces.append(format_sources(citations(candidate)))

    return ChatResponse(
        content="".join(pieces),
        model=model,
        finish_reason=candidate.get("finishReason"),
        usage=usage_from_mapping(
            data.get("usageMetadata"),
            prompt_key="promptTokenCount",
            completion_key="candidatesTokenCount",
            total_key="totalTokenCount",
        ),
    )


class GeminiStreamParser(FrameParser):
    """Per-call parser for ``streamGenerateContent?alt=sse``.

    Each ``data:`` frame is a complete response object. The parser tracks
    whether a thinking span is open and buffers citations until
    :meth:`finish`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.in_thinking = False
        self._citations: List[Citation] = []

    def feed(self, line: str) -> List[str]:
        field = split_field(line)
        if field is None or field[0] != "data":
            return []
        chunk = self.decode(field[1])
        if not isinstance(chunk, dict):
            return []
        candidate = _first_candidate(chunk)
        if candidate is None:
            return []
        self._citations.extend(citations(candidate))

        out: List[str] = []
        for part in _parts(candidate):
            if not isinstance(part, dict):
                continue
            thought = _thought_text(part)
            if thought is not None:
                if not thought:
                    continue
                if not self.in_thinking:
                    out.append(THINKING_OPEN)
                    self.in_thinking = True
                out.append(thought)
                continue
            text = part.get("text")
            if not isinstance(text, str) or not text:
                continue
            if self.in_thinking:
                out.append(STREAM_THINKING_CLOSE)
                self.in_thinking = False
            out.append(text)
        return out

    def finish(self) -> List[str]:
        out: List[str] = []
        if self.in_thinking:
            out.append(STREAM_THINKING_CLOSE)
            self.in_thinking = False
        sources = format_sources(self._citations)
        if sources:
            out.append(sources)
        return out


__all__ = [
    "PROVIDER",
    "GeminiOptions",
    "GeminiStreamParser",
    "build_payload",
    "citations",
    "format_sources",
    "is_gemini3_model",
    "is_thinking_model",
    "parse_response",
    "split_parts",
    "thinking_config",
]
