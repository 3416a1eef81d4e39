"""Streaming session: drives one streaming call through its lifecycle.

The session owns everything vendor-neutral about a stream: the cancellation
checks, HTTP status handling, the line loop, fragment forwarding and the
state machine. Vendor adapters only supply a request opener and a
:class:`~chatui_providers.base.streaming.sse.FrameParser`.

Guarantees:
    - Cancellation is checked before the request is issued and before each
      line is processed; once observed nothing more is forwarded and the call
      ends in ``CANCELED``.
    - Fragments are forwarded in emission order, never empty, and never after
      :meth:`StreamSession.run` returns or raises.
    - Non-2xx responses are read in full and mapped exactly like the
      non-streaming path.
    - Transport failures after the headers arrived map to ``STREAM_CLOSED``.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, ContextManager, Optional

import httpx

from ..cancellation import Cancellable, raise_if_cancelled
from ..errors import (
    TRANSPORT_ERRORS,
    EnvelopeReader,
    ErrorCode,
    ProviderError,
    classify_transport_error,
    error_from_status,
    is_success,
    read_error_envelope,
)
from ..logging import LogContext, normalized_log_event
from .sse import FrameParser
from .state import ALLOWED_TRANSITIONS, StreamState

if TYPE_CHECKING:
    from ..interfaces import Provider
    from ..models import ChatRequest

DeltaCallback = Callable[[str], None]
StreamOpener = Callable[[], ContextManager[httpx.Response]]


class StreamSession:
    """One streaming call: state, parser, callback and metrics."""

    def __init__(
        self,
        *,
        provider: str,
        model: str,
        parser: FrameParser,
        on_delta: DeltaCallback,
        logger: logging.Logger,
        cancel: Cancellable = None,
        reader: EnvelopeReader = read_error_envelope,
    ) -> None:
        self.provider = provider
        self.model = model
        self.state = StreamState.IDLE
        self.emitted = 0
        self.time_to_first_token_ms: Optional[float] = None
        self._parser = parser
        self._on_delta = on_delta
        self._logger = logger
        self._cancel = cancel
        self._reader = reader
        self._ctx = LogContext(provider=provider, model=model, operation="stream")
        self._t0 = 0.0

    # ---- lifecycle -----------------------------------------------------
    def run(self, open_stream: StreamOpener) -> None:
        """Execute the stream; return on success, raise `ProviderError` otherwise."""
        self._t0 = time.perf_counter()
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start")
        try:
            self._check_cancel()
            try:
                with open_stream() as resp:
                    if not is_success(resp.status_code):
                        body = resp.read()
                        raise error_from_status(
                            resp.status_code,
                            body,
                            provider=self.provider,
                            model=self.model,
                            reader=self._reader,
                        )
                    self._transition(StreamState.CONNECTED)
                    self._receive(resp)
            except TRANSPORT_ERRORS as exc:
                connected = self.state in (StreamState.CONNECTED, StreamState.RECEIVING)
                raise classify_transport_error(
                    exc, provider=self.provider, model=self.model, connected=connected
                ) from exc
        except ProviderError as err:
            final = StreamState.CANCELED if err.code is ErrorCode.CANCELLED else StreamState.FAILED
            self._transition(final, error_code=err.code.value)
            normalized_log_event(
                self._logger,
                "stream.error",
                self._ctx,
                phase="finalize",
                error_code=err.code.value,
                emitted=self.emitted,
                error=err.message,
                status_code=err.status_code,
            )
            raise
        self._transition(StreamState.COMPLETED)
        normalized_log_event(
            self._logger,
            "stream.end",
            self._ctx,
            phase="finalize",
            emitted=self.emitted,
            malformed=self._parser.malformed,
            time_to_first_token_ms=self.time_to_first_token_ms,
            total_duration_ms=(time.perf_counter() - self._t0) * 1000.0,
        )

    def _receive(self, resp: httpx.Response) -> None:
        self._transition(StreamState.RECEIVING)
        for line in resp.iter_lines():
            self._check_cancel()
            skipped = self._parser.malformed
            for fragment in self._parser.feed(line):
                self._emit(fragment)
            if self._parser.malformed != skipped:
                normalized_log_event(
                    self._logger,
                    "stream.decode_error",
                    self._ctx,
                    phase="mid_stream",
                    level=logging.DEBUG,
                    line=line[:200],
                )
            if self._parser.done:
                break
        self._check_cancel()
        for fragment in self._parser.finish():
            self._emit(fragment)

    # ---- helpers -------------------------------------------------------
    def _check_cancel(self) -> None:
        raise_if_cancelled(self._cancel, provider=self.provider, model=self.model)

    def _emit(self, fragment: str) -> None:
        if not fragment:
            return
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = (time.perf_counter() - self._t0) * 1000.0
        self.emitted += 1
        self._on_delta(fragment)

    def _transition(self, new: StreamState, *, error_code: str | None = None) -> None:
        if new not in ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(f"illegal stream transition {self.state.value} -> {new.value}")
        previous, self.state = self.state, new
        normalized_log_event(
            self._logger,
            "stream.state",
            self._ctx,
            phase="transition",
            level=logging.DEBUG,
            error_code=error_code,
            emitted=self.emitted,
            previous=previous.value,
            state=new.value,
        )


def collect_stream(provider: Provider, request: ChatRequest, cancel: Cancellable = None) -> str:
    """Run ``provider.stream`` and return the accumulated text.

    Convenience for hosts that want a streamed call's full text; failures
    propagate unchanged and no partial text is returned.
    """
    fragments: list[str] = []
    provider.stream(request, fragments.append, cancel=cancel)
    return "".join(fragments)


__all__ = ["StreamSession", "DeltaCallback", "StreamOpener", "collect_stream"]
