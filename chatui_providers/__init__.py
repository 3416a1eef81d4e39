"""chatui_providers package

Uniform chat contract over three vendor HTTP APIs (OpenAI-style chat
completions, Anthropic-style messages, Gemini generateContent), including
token streaming, cooperative cancellation and a closed error taxonomy.

Public API (re-exported):
    - Version: ``__version__``
    - Data model: :class:`Message`, :class:`ChatRequest`,
      :class:`ChatResponse`, :class:`Usage`, :class:`ModelInfo`
    - Contract: :class:`Provider`, :class:`ProviderRegistry`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Helpers: :func:`create`, :func:`build_registry`, :func:`collect_stream`

Typical host wiring::

    registry = build_registry(load_config())
    provider, found = registry.get("openai")
    provider.stream(ChatRequest(model="gpt-4o", messages=[...]), print)
"""

from typing import Optional

from .base.cancellation import CancellationToken
from .base.catalog import MODEL_CATALOG
from .base.dto import AdapterParams
from .base.errors import ErrorCode, ProviderError
from .base.factory import ProviderFactory, UnknownProviderError
from .base.interfaces import Provider
from .base.models import ChatRequest, ChatResponse, Message, ModelInfo, Usage
from .base.registry import ProviderRegistry
from .base.streaming import collect_stream
from .config import AppConfig, get_provider_config, load_config

__version__ = "0.1.0"


def create(provider_name: str, *, params: Optional[AdapterParams] = None, **kwargs) -> Provider:
    """Instantiate a provider adapter via :class:`ProviderFactory`.

    Raises
    ------
    UnknownProviderError
        If the name is not supported or the constructor rejects the arguments.
    """
    return ProviderFactory.create(provider_name, params=params, **kwargs)


def build_registry(config: Optional[AppConfig] = None) -> ProviderRegistry:
    """Construct every supported adapter with its resolved settings and register it.

    Adapters without a key are still registered; their calls fail with
    ``MISSING_CREDENTIAL`` until :meth:`set_api_key` is called.
    """
    config = config or load_config()
    registry = ProviderRegistry()
    for name in ProviderFactory.supported():
        settings = get_provider_config(name, config)
        params = AdapterParams(
            provider=name,
            api_key=settings.pop("api_key", None),
            base_url=settings.pop("base_url", None),
            model=settings.pop("model", None),
            extra=settings,
        )
        registry.register(create(name, params=params))
    return registry


__all__ = [
    "__version__",
    "AdapterParams",
    "AppConfig",
    "CancellationToken",
    "ChatRequest",
    "ChatResponse",
    "ErrorCode",
    "Message",
    "MODEL_CATALOG",
    "ModelInfo",
    "Provider",
    "ProviderError",
    "ProviderFactory",
    "ProviderRegistry",
    "UnknownProviderError",
    "Usage",
    "build_registry",
    "collect_stream",
    "create",
    "load_config",
]
