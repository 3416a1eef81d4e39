"""Gemini generateContent adapter with thinking and search grounding."""

from .client import GeminiProvider

__all__ = ["GeminiProvider"]
