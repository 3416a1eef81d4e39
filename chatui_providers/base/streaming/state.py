"""Streaming lifecycle states."""
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class StreamState(str, Enum):
    """States of one streaming call.

    ``IDLE -> CONNECTED -> RECEIVING -> COMPLETED | FAILED | CANCELED``.
    ``FAILED`` and ``CANCELED`` are also reachable straight from ``IDLE``
    (missing key, cancellation before the request, non-2xx headers).
    """

    IDLE = "idle"
    CONNECTED = "connected"
    RECEIVING = "receiving"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"

    @property
    def terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES: FrozenSet[StreamState] = frozenset(
    {StreamState.COMPLETED, StreamState.FAILED, StreamState.CANCELED}
)

ALLOWED_TRANSITIONS: Dict[StreamState, FrozenSet[StreamState]] = {
    StreamState.IDLE: frozenset({StreamState.CONNECTED, StreamState.FAILED, StreamState.CANCELED}),
    StreamState.CONNECTED: frozenset({StreamState.RECEIVING, StreamState.FAILED, StreamState.CANCELED}),
    StreamState.RECEIVING: TERMINAL_STATES,
    StreamState.COMPLETED: frozenset(),
    StreamState.FAILED: frozenset(),
    StreamState.CANCELED: frozenset(),
}


__all__ = ["StreamState", "TERMINAL_STATES", "ALLOWED_TRANSITIONS"]
