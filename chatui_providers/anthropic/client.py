"""Anthropic provider adapter.

Implements ``send`` and ``stream`` against the Anthropic messages API
(``POST {base}/messages``) over raw HTTP. Authentication uses the
``x-api-key`` header together with the pinned ``anthropic-version``.

The adapter has no model-listing endpoint to call; ``list_models`` returns
the static catalogue.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import httpx

from ..base.cancellation import Cancellable, raise_if_cancelled
from ..base.catalog import model_ids
from ..base.chat_flow import run_chat
from ..base.errors import missing_credential
from ..base.http import get_httpx_client, post_json
from ..base.logging import get_logger
from ..base.models import ChatRequest, ChatResponse
from ..base.streaming import StreamSession
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
)
from .helpers import PROVIDER, AnthropicStreamParser, build_payload, parse_response


class AnthropicProvider:
    """Vendor B adapter: Anthropic-style messages API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key or ""
        self._base_url = (base_url or ANTHROPIC_DEFAULT_BASE_URL).rstrip("/")
        self._model = model or ANTHROPIC_DEFAULT_MODEL
        self._client = client
        self._logger = get_logger("providers.anthropic")

    @property
    def provider_name(self) -> str:
        return PROVIDER

    @property
    def base_url(self) -> str:
        return self._base_url

    def default_model(self) -> Optional[str]:
        return self._model

    def supports_streaming(self) -> bool:
        return True

    def set_api_key(self, key: Optional[str]) -> None:
        self._api_key = key or ""

    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def list_models(self, cancel: Cancellable = None) -> List[str]:
        raise_if_cancelled(cancel, provider=PROVIDER, model=None)
        return model_ids(PROVIDER)

    def send(self, request: ChatRequest, cancel: Cancellable = None) -> ChatResponse:
        """Blocking completion; text blocks are concatenated into ``content``."""

        def perform() -> ChatResponse:
            data = post_json(
                self._http("chat"),
                f"{self._base_url}/messages",
                build_payload(request, stream=False),
                provider=PROVIDER,
                model=request.model,
                headers=self._headers(),
                cancel=cancel,
            )
            return parse_response(data, model=request.model)

        return run_chat(
            self._logger,
            request,
            provider=PROVIDER,
            has_key=self.has_api_key(),
            perform=perform,
        )

    def stream(
        self,
        request: ChatRequest,
        on_delta: Callable[[str], None],
        cancel: Cancellable = None,
    ) -> None:
        """Stream text deltas until ``message_stop`` or end of body."""
        if not self._api_key:
            raise missing_credential(PROVIDER, request.model)
        client = self._http("stream")
        payload = build_payload(request, stream=True)
        headers = {**self._headers(), "Accept": "text/event-stream"}
        session = StreamSession(
            provider=PROVIDER,
            model=request.model,
            parser=AnthropicStreamParser(model=request.model),
            on_delta=on_delta,
            logger=self._logger,
            cancel=cancel,
        )
        session.run(lambda: client.stream("POST", f"{self._base_url}/messages", json=payload, headers=headers))

    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self._api_key, "anthropic-version": ANTHROPIC_API_VERSION}

    def _http(self, purpose: str) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(self._base_url, f"{PROVIDER}.{purpose}")


__all__ = ["AnthropicProvider"]
