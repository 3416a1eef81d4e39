"""chatui_providers.config.defaults
===============================

Central place for small, stable default values used across the package:
vendor API roots, default models and wire-protocol constants.

This module avoids importing from other provider packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Application defaults ----
DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o"

# Config file location (relative to the user's home directory).
CONFIG_DIR_NAME = ".chatui"
CONFIG_FILE_NAME = "config.json"
# Env var pointing at an alternative config file.
CONFIG_FILE_ENV_VAR = "CHATUI_CONFIG_FILE"


# ---- OpenAI-style chat completions ----
OPENAI_DEFAULT_MODEL = "gpt-4o"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DONE_SENTINEL = "[DONE]"

# ---- Anthropic-style messages API ----
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"
# Anthropic requires max_tokens; used when the request leaves it unset.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

# ---- Gemini generateContent API ----
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash-preview-05-20"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
# Substrings identifying models that accept a thinkingConfig.
GEMINI_THINKING_MODEL_PATTERNS = (
    "gemini-3-pro",
    "gemini-3-flash",
    "gemini-2.5-pro",
    "gemini-2.5-flash",
    "gemini-2.0-flash-thinking",
)
GEMINI_3_MARKER = "gemini-3"
GEMINI_THINKING_BUDGET = 8192
GEMINI_DEFAULT_THINKING_LEVEL = "medium"
GEMINI_THINKING_LEVELS = ("low", "medium", "high")


__all__ = [
    "DEFAULT_PROVIDER",
    "DEFAULT_MODEL",
    "CONFIG_DIR_NAME",
    "CONFIG_FILE_NAME",
    "CONFIG_FILE_ENV_VAR",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DONE_SENTINEL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
    "GEMINI_THINKING_MODEL_PATTERNS",
    "GEMINI_3_MARKER",
    "GEMINI_THINKING_BUDGET",
    "GEMINI_DEFAULT_THINKING_LEVEL",
    "GEMINI_THINKING_LEVELS",
]
