"""Static model catalogue.

Display and enumeration data for the three supported vendors. The catalogue
is built once at import time and exposed read-only; request construction
never consults it.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from .models import ModelInfo

_OPENAI: Tuple[ModelInfo, ...] = (
    ModelInfo("gpt-4o", "GPT-4o", "openai", 128000, "Most capable GPT-4 model"),
    ModelInfo("gpt-4o-mini", "GPT-4o Mini", "openai", 128000, "Affordable GPT-4 model"),
    ModelInfo("gpt-4-turbo", "GPT-4 Turbo", "openai", 128000, "GPT-4 Turbo with vision"),
    ModelInfo("gpt-3.5-turbo", "GPT-3.5 Turbo", "openai", 16385, "Fast and cost-effective"),
)

_ANTHROPIC: Tuple[ModelInfo, ...] = (
    ModelInfo("claude-sonnet-4-20250514", "Claude Sonnet 4", "anthropic", 200000, "Most capable Claude model"),
    ModelInfo("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", "anthropic", 200000, "Best balance of intelligence and speed"),
    ModelInfo("claude-3-5-haiku-20241022", "Claude 3.5 Haiku", "anthropic", 200000, "Fast and affordable"),
    ModelInfo("claude-3-opus-20240229", "Claude 3 Opus", "anthropic", 200000, "Previous flagship model"),
)

_GEMINI: Tuple[ModelInfo, ...] = (
    ModelInfo("gemini-3-pro-preview", "Gemini 3 Pro", "gemini", 1048576, "Most advanced reasoning model with dynamic thinking"),
    ModelInfo("gemini-3-flash-preview", "Gemini 3 Flash", "gemini", 1048576, "Fast model with dynamic thinking, 64k output"),
    ModelInfo("gemini-2.5-pro-preview-06-05", "Gemini 2.5 Pro", "gemini", 1048576, "Most capable Gemini with thinking"),
    ModelInfo("gemini-2.5-flash-preview-05-20", "Gemini 2.5 Flash", "gemini", 1048576, "Fast Gemini with thinking"),
    ModelInfo("gemini-2.0-flash", "Gemini 2.0 Flash", "gemini", 1048576, "Next-gen fast model"),
    ModelInfo("gemini-2.0-flash-thinking-exp", "Gemini 2.0 Flash Thinking", "gemini", 1048576, "Experimental thinking model"),
    ModelInfo("gemini-1.5-pro", "Gemini 1.5 Pro", "gemini", 2097152, "2M context window"),
    ModelInfo("gemini-1.5-flash", "Gemini 1.5 Flash", "gemini", 1048576, "Fast and efficient"),
)

MODEL_CATALOG: Mapping[str, Tuple[ModelInfo, ...]] = MappingProxyType(
    {
        "openai": _OPENAI,
        "anthropic": _ANTHROPIC,
        "gemini": _GEMINI,
    }
)


def models_for(provider: str) -> Tuple[ModelInfo, ...]:
    """Return the catalogue entries for ``provider`` (empty when unknown)."""
    return MODEL_CATALOG.get(provider, ())


def model_ids(provider: str) -> list[str]:
    """Return catalogue model ids for ``provider`` in catalogue order."""
    return [m.id for m in models_for(provider)]


__all__ = ["MODEL_CATALOG", "models_for", "model_ids"]
