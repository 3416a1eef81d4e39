"""OpenAI-style chat completions adapter."""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
