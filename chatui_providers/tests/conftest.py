"""Pytest configuration for the provider test suite.

Every vendor call in these tests goes through an ``httpx.Client`` backed by
``httpx.MockTransport``; nothing touches the network. Credentials and config
paths are scrubbed from the environment so the developer's own keys never
leak into assertions.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List

import httpx
import pytest

from chatui_providers.base.http import close_all_clients

_SCRUBBED_ENV = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "CHATUI_CONFIG_FILE",
)

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _SCRUBBED_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
    close_all_clients()


@dataclass
class MockHttp:
    """A mock-transport client plus the requests it has seen."""

    handler: Handler
    requests: List[httpx.Request] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.client = httpx.Client(transport=httpx.MockTransport(self._dispatch))

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture()
def mock_http() -> Iterator[Callable[[Handler], MockHttp]]:
    """Factory building a :class:`MockHttp` around a request handler."""
    made: List[MockHttp] = []

    def _make(handler: Handler) -> MockHttp:
        mh = MockHttp(handler)
        made.append(mh)
        return mh

    yield _make
    for mh in made:
        mh.client.close()


def sse(*lines: str) -> httpx.Response:
    """Build a 200 event-stream response whose body is ``lines`` joined by newlines."""
    body = "\n".join(lines) + "\n"
    return httpx.Response(200, content=body.encode("utf-8"), headers={"content-type": "text/event-stream"})


class BrokenStream(httpx.SyncByteStream):
    """Yields ``chunks`` and then fails like a dropped connection."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = list(chunks)

    def __iter__(self) -> Iterator[bytes]:
        yield from self._chunks
        raise httpx.ReadError("connection reset by peer")


@pytest.fixture()
def sse_response() -> Callable[..., httpx.Response]:
    return sse


@pytest.fixture()
def broken_response() -> Callable[..., httpx.Response]:
    def _make(*lines: str) -> httpx.Response:
        chunks = [(line + "\n").encode("utf-8") for line in lines]
        return httpx.Response(200, stream=BrokenStream(chunks), headers={"content-type": "text/event-stream"})

    return _make
