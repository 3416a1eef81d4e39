"""Streaming package for the provider layer.

Exposes the stream state machine, the vendor-neutral session loop and the
SSE helpers used by vendor frame parsers.
"""

from .state import StreamState, TERMINAL_STATES
from .sse import FrameParser, parse_all, split_field
from .session import StreamSession, DeltaCallback, collect_stream

__all__ = [
    "StreamState",
    "TERMINAL_STATES",
    "FrameParser",
    "parse_all",
    "split_field",
    "StreamSession",
    "DeltaCallback",
    "collect_stream",
]
