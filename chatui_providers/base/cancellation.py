"""Cooperative cancellation primitives.

Purpose
-------
Give callers one object they can flip from another thread to stop an
in-flight ``send``/``stream`` call. Adapters poll it before issuing the HTTP
request and before every streamed line; there is no preemption.

Notes
-----
- ``CancellationToken`` is thread-safe for ``cancel`` + ``cancelled`` usage.
  Child tokens inherit cancellation when the parent is cancelled.
- A plain ``threading.Event`` is accepted anywhere a token is, so hosts that
  already own an event do not need to wrap it.
"""

from __future__ import annotations

import threading
from typing import List, Optional, Union

from .errors import cancelled as _cancelled_error


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics."""

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None
        self._lock = threading.Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation and cascade to children."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._cancelled
            reason = self._reason
        if should_cancel:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._cancelled}, "
            f"reason={self._reason!r}, children={len(self._children)})"
        )


Cancellable = Union[CancellationToken, threading.Event, None]


def is_cancelled(token: Cancellable) -> bool:
    """Return True when ``token`` signals cancellation (``None`` never does)."""
    if token is None:
        return False
    if isinstance(token, threading.Event):
        return token.is_set()
    return token.cancelled


def raise_if_cancelled(token: Cancellable, *, provider: str, model: str | None) -> None:
    """Raise a ``CANCELLED`` :class:`ProviderError` if ``token`` is set."""
    if is_cancelled(token):
        reason = token.reason if isinstance(token, CancellationToken) else None
        raise _cancelled_error(provider, model, reason)


__all__ = ["CancellationToken", "Cancellable", "is_cancelled", "raise_if_cancelled"]
