"""Provider-agnostic interface contracts.

``Provider`` is the capability set every vendor adapter satisfies. Adapters
are independent classes that match the protocol structurally; none of them
inherit vendor state from a shared base.

Failure handling: every operation raises
:class:`~chatui_providers.base.errors.ProviderError` with a normalized code.
``send`` and ``stream`` raise ``MISSING_CREDENTIAL`` before any network I/O
when no API key is configured.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, runtime_checkable

from .cancellation import Cancellable
from .models import ChatRequest, ChatResponse


@runtime_checkable
class Provider(Protocol):
    """Uniform chat contract across vendors."""

    @property
    def provider_name(self) -> str:
        """Stable provider identifier; the registry key (e.g. ``"openai"``)."""
        ...

    def list_models(self, cancel: Cancellable = None) -> List[str]:
        """Return the model ids this provider offers."""
        ...

    def send(self, request: ChatRequest, cancel: Cancellable = None) -> ChatResponse:
        """Execute one blocking chat completion and return the whole response."""
        ...

    def stream(
        self,
        request: ChatRequest,
        on_delta: Callable[[str], None],
        cancel: Cancellable = None,
    ) -> None:
        """Stream a completion, calling ``on_delta`` for each non-empty fragment.

        Returns normally on success. Every fragment is delivered before the
        call returns or raises.
        """
        ...

    def supports_streaming(self) -> bool:
        """Return True if the provider can stream responses."""
        ...


@runtime_checkable
class HasCredential(Protocol):
    """Adapters whose API key may be swapped at runtime.

    Callers must not swap the key concurrently with an in-flight call on the
    same adapter instance.
    """

    def set_api_key(self, key: Optional[str]) -> None:
        ...

    def has_api_key(self) -> bool:
        ...


@runtime_checkable
class HasDefaultModel(Protocol):
    """Adapters that expose a default model id."""

    def default_model(self) -> Optional[str]:
        ...


__all__ = ["Provider", "HasCredential", "HasDefaultModel"]
