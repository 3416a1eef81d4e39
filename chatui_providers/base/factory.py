"""Provider Factory utilities.

Purpose
-------
Create adapter instances satisfying the ``Provider`` protocol from a
canonical name. Adapters are imported lazily using ``importlib`` so that
importing the base layer never drags in every vendor module.

Scope
-----
Supported providers: ``openai``, ``anthropic`` and ``gemini``. The factory
performs no retries or fallbacks; it either returns an instance or raises
:class:`UnknownProviderError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto.adapter_params import AdapterParams


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered in the factory mapping.
    - The adapter module cannot be imported or the class is missing.
    - The adapter constructor rejected its arguments.
    """


class ProviderFactory:
    """Create provider adapters based on a canonical name (e.g., ``"openai"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "chatui_providers.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "chatui_providers.anthropic.client", "class": "AnthropicProvider"},
        "gemini": {"module": "chatui_providers.gemini.client", "class": "GeminiProvider"},
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider name (case-insensitive).
        params:
            Optional :class:`AdapterParams`; explicit ``kwargs`` win conflicts.
        **kwargs:
            Adapter constructor keywords.

        Raises
        ------
        UnknownProviderError
            If the provider is unknown, its module fails to import, the class
            is missing, or the constructor rejects the arguments.
        """
        merged_kwargs = cls._coerce_params(params, kwargs)

        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - packaging error
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**merged_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Flatten ``AdapterParams`` into constructor kwargs.

        ``None`` fields are skipped so adapter defaults survive. ``extra`` is
        spread into the top level, and explicit ``kwargs`` always win.
        """
        if params is None:
            return dict(kwargs)
        merged: Dict[str, Any] = dict(params.model_dump(exclude_none=True))
        merged.pop("provider", None)
        extra = merged.pop("extra", {}) or {}
        merged.update(extra)
        merged.update(kwargs)
        return merged


__all__ = ["ProviderFactory", "UnknownProviderError"]
