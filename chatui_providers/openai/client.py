"""OpenAI provider adapter.

Purpose:
    Implements ``send`` and ``stream`` against an OpenAI-style
    ``/chat/completions`` endpoint over raw HTTP.

External dependencies:
    - ``httpx`` only. Requests go through a pooled client unless one is
      injected (tests pass a client backed by ``httpx.MockTransport``).

Timeouts and retries:
    - None. Each call is a single attempt bounded by the caller's
      cancellation token.
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
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL
from .helpers import PROVIDER, OpenAIStreamParser, build_payload, parse_response


class OpenAIProvider:
    """Vendor A adapter: OpenAI-style chat completions."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key or ""
        self._base_url = (base_url or OPENAI_DEFAULT_BASE_URL).rstrip("/")
        self._model = model or OPENAI_DEFAULT_MODEL
        self._client = client
        self._logger = get_logger("providers.openai")

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
        """Return the static catalogue ids (no network call)."""
        raise_if_cancelled(cancel, provider=PROVIDER, model=None)
        return model_ids(PROVIDER)

    def send(self, request: ChatRequest, cancel: Cancellable = None) -> ChatResponse:
        def perform() -> ChatResponse:
            data = post_json(
                self._http("chat"),
                f"{self._base_url}/chat/completions",
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
        if not self._api_key:
            raise missing_credential(PROVIDER, request.model)
        client = self._http("stream")
        payload = build_payload(request, stream=True)
        headers = {**self._headers(), "Accept": "text/event-stream"}
        session = StreamSession(
            provider=PROVIDER,
            model=request.model,
            parser=OpenAIStreamParser(),
            on_delta=on_delta,
            logger=self._logger,
            cancel=cancel,
        )
        session.run(
            lambda: client.stream("POST", f"{self._base_url}/chat/completions", json=payload, headers=headers)
        )

    # ---- internals -----------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _http(self, purpose: str) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(self._base_url, f"{PROVIDER}.{purpose}")


__all__ = ["OpenAIProvider"]
