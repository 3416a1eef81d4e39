"""Non-streaming chat flow shared by the vendor adapters.

Wraps one blocking vendor call with the credential check and the
``chat.start`` / ``chat.end`` / ``chat.error`` log events. The vendor-specific
part (building the body, POSTing it, parsing the reply) is passed in as a
callable so each adapter keeps its own wire translation.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from .errors import ProviderError, missing_credential
from .logging import LogContext, normalized_log_event
from .models import ChatRequest, ChatResponse


def run_chat(
    logger: logging.Logger,
    request: ChatRequest,
    *,
    provider: str,
    has_key: bool,
    perform: Callable[[], ChatResponse],
) -> ChatResponse:
    """Execute ``perform`` for ``request`` with logging and credential gating.

    Raises:
        ProviderError: ``MISSING_CREDENTIAL`` before ``perform`` runs when no
            key is configured, otherwise whatever ``perform`` raises.
    """
    ctx = LogContext(provider=provider, model=request.model, operation="send")
    try:
        if not has_key:
            raise missing_credential(provider, request.model)
        normalized_log_event(
            logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(request.messages),
            max_tokens=request.max_output_tokens,
            temperature=request.temperature,
        )
        t0 = time.perf_counter()
        response = perform()
    except ProviderError as err:
        normalized_log_event(
            logger,
            "chat.error",
            ctx,
            phase="finalize",
            error_code=err.code.value,
            error=err.message,
            status_code=err.status_code,
        )
        raise
    normalized_log_event(
        logger,
        "chat.end",
        ctx,
        phase="finalize",
        latency_ms=(time.perf_counter() - t0) * 1000.0,
        finish_reason=response.finish_reason,
        total_tokens=response.usage.total_tokens,
    )
    return response


__all__ = ["run_chat"]
