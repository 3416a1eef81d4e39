"""Server-Sent-Event line helpers shared by the vendor frame parsers.

Vendors frame their event streams differently, but all of them are
line-oriented ``field: value`` text. A frame parser consumes one decoded line
at a time and returns the text fragments that line produces; the streaming
session owns I/O, cancellation and forwarding.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional, Tuple

DATA_PREFIX = "data:"
EVENT_PREFIX = "event:"
COMMENT_PREFIX = ":"


def split_field(line: str) -> Optional[Tuple[str, str]]:
    """Split an SSE line into ``(field, value)``.

    Returns ``None`` for blank lines and comment lines. A single space after
    the colon is stripped, as the event-stream format prescribes.
    """
    if not line or line.startswith(COMMENT_PREFIX):
        return None
    name, sep, value = line.partition(":")
    if not sep:
        return name, ""
    if value.startswith(" "):
        value = value[1:]
    return name, value


class FrameParser:
    """Generic per-call parser state: terminal flag and malformed-frame count.

    Subclasses implement :meth:`feed` and may override :meth:`finish` to
    flush buffered output once the body is exhausted. Instances are created
    per call and never shared.
    """

    def __init__(self) -> None:
        self.done = False
        self.malformed = 0

    def feed(self, line: str) -> List[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def finish(self) -> List[str]:
        return []

    def decode(self, payload: str) -> Optional[Any]:
        """Decode a JSON payload; count and skip it when malformed."""
        try:
            return json.loads(payload)
        except ValueError:
            self.malformed += 1
            return None


def parse_all(parser: FrameParser, lines: Iterable[str]) -> List[str]:
    """Drive ``parser`` over ``lines`` without I/O (used by tests and tools)."""
    out: List[str] = []
    for line in lines:
        out.extend(parser.feed(line))
        if parser.done:
            break
    out.extend(parser.finish())
    return [f for f in out if f]


__all__ = [
    "DATA_PREFIX",
    "EVENT_PREFIX",
    "COMMENT_PREFIX",
    "split_field",
    "FrameParser",
    "parse_all",
]
