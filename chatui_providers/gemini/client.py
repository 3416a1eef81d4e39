"""Gemini provider adapter.

Implements ``send`` and ``stream`` against the Gemini ``generateContent``
API over raw HTTP. The API key travels as the ``key`` query parameter.

Vendor switches:
    - ``thinking_enabled``: request the reasoning channel on models that
      support it; thoughts are rendered in a ``<thinking>`` span.
    - ``search_enabled``: attach Google Search grounding; citations are
      rendered as a trailing Sources list.
    Both are adapter defaults and can be overridden per request through
    ``ChatRequest.extra`` (``thinking``, ``search_grounding``,
    ``thinking_level``).
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
from ..config.defaults import GEMINI_DEFAULT_BASE_URL, GEMINI_DEFAULT_MODEL
from .helpers import (
    PROVIDER,
    GeminiOptions,
    GeminiStreamParser,
    build_payload,
    parse_response,
)


class GeminiProvider:
    """Vendor C adapter: Gemini generateContent API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        thinking_enabled: bool = False,
        search_enabled: bool = False,
    ) -> None:
        self._api_key = api_key or ""
        self._base_url = (base_url or GEMINI_DEFAULT_BASE_URL).rstrip("/")
        self._model = model or GEMINI_DEFAULT_MODEL
        self._client = client
        self._thinking = thinking_enabled
        self._search = search_enabled
        self._logger = get_logger("providers.gemini")

    @property
    def provider_name(self) -> str:
        return PROVIDER

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def thinking_enabled(self) -> bool:
        return self._thinking

    @property
    def search_enabled(self) -> bool:
        return self._search

    def set_thinking_enabled(self, enabled: bool) -> None:
        self._thinking = bool(enabled)

    def set_search_enabled(self, enabled: bool) -> None:
        self._search = bool(enabled)

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
        def perform() -> ChatResponse:
            data = post_json(
                self._http("chat"),
                self._endpoint(request.model, "generateContent"),
                build_payload(request, self._options(request)),
                provider=PROVIDER,
                model=request.model,
                params=self._params(),
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
        url = self._endpoint(request.model, "streamGenerateContent")
        payload = build_payload(request, self._options(request))
        params = {"alt": "sse", **self._params()}
        session = StreamSession(
            provider=PROVIDER,
            model=request.model,
            parser=GeminiStreamParser(),
            on_delta=on_delta,
            logger=self._logger,
            cancel=cancel,
        )
        session.run(
            lambda: client.stream(
                "POST", url, json=payload, params=params, headers={"Accept": "text/event-stream"}
            )
        )

    # ---- internals -----------------------------------------------------
    def _options(self, request: ChatRequest) -> GeminiOptions:
        return GeminiOptions.resolve(request, thinking=self._thinking, search=self._search)

    def _endpoint(self, model: str, method: str) -> str:
        return f"{self._base_url}/models/{model}:{method}"

    def _params(self) -> Dict[str, str]:
        return {"key": self._api_key}

    def _http(self, purpose: str) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(self._base_url, f"{PROVIDER}.{purpose}")


__all__ = ["GeminiProvider"]
