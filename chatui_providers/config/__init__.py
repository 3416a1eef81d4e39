"""Application configuration for the provider layer.

Sources are merged in a predictable order:
    1. Built-in defaults (``config.defaults``)
    2. The JSON config file (``~/.chatui/config.json`` or the path in
       ``CHATUI_CONFIG_FILE``)
    3. Environment variables for API keys (``config.env``), which always win

The file is written with owner-only permissions because it may hold API keys;
environment variables remain the preferred place for credentials.

Public API
----------
* AppConfig (pydantic model)
* load_config(path=None) -> AppConfig
* save_config(config, path=None) -> Path
* get_provider_config(provider, config=None) -> dict
* mask_key(key) -> str
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    CONFIG_DIR_NAME,
    CONFIG_FILE_ENV_VAR,
    CONFIG_FILE_NAME,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from .env import ENV_MAP, resolve_provider_key

PathLike = Union[str, os.PathLike]

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "gemini": {"model": GEMINI_DEFAULT_MODEL, "base_url": GEMINI_DEFAULT_BASE_URL},
}


class ConfigError(Exception):
    """Raised when the config file exists but cannot be read or parsed."""


class AppConfig(BaseModel):
    """Host configuration used to wire the provider registry.

    Attributes
    ----------
    default_provider:
        Provider selected when the host does not name one.
    default_model:
        Model selected when the host does not name one.
    api_keys:
        Provider name -> API key as stored in the file. Prefer env vars.
    gemini_thinking:
        Initial state of the Gemini thinking toggle.
    gemini_search:
        Initial state of the Gemini search-grounding toggle.
    """

    default_provider: str = DEFAULT_PROVIDER
    default_model: str = DEFAULT_MODEL
    api_keys: Dict[str, str] = Field(default_factory=dict)
    gemini_thinking: bool = False
    gemini_search: bool = False

    def get_api_key(self, provider: str) -> str:
        """Return the key for ``provider``: environment first, then the file.

        Unknown providers yield an empty string.
        """
        name = (provider or "").lower()
        if name not in ENV_MAP:
            return ""
        value, _ = resolve_provider_key(name)
        if value:
            return value
        return self.api_keys.get(name, "")

    def has_api_key(self, provider: str) -> bool:
        return bool(self.get_api_key(provider))

    def set_api_key(self, provider: str, key: str) -> None:
        """Store ``key`` for a known provider (in memory; see :func:`save_config`)."""
        name = (provider or "").lower()
        if name not in ENV_MAP:
            raise ValueError(f"unknown provider: {provider}")
        self.api_keys[name] = key


def config_path(path: Optional[PathLike] = None) -> Path:
    """Resolve the config file path (explicit > env var > home default)."""
    if path is not None:
        return Path(path).expanduser()
    override = os.getenv(CONFIG_FILE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _apply_env_overrides(cfg: AppConfig) -> AppConfig:
    for provider in ENV_MAP:
        value, _ = resolve_provider_key(provider)
        if value:
            cfg.api_keys[provider] = value
    return cfg


def load_config(path: Optional[PathLike] = None) -> AppConfig:
    """Load the config file and apply environment key overrides.

    A missing file yields the defaults. An unreadable or malformed file
    raises :class:`ConfigError`.
    """
    p = config_path(path)
    if not p.exists():
        return _apply_env_overrides(AppConfig())
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"failed to read config file {p}: {exc}") from exc
    try:
        cfg = AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"failed to parse config file {p}: {exc}") from exc
    return _apply_env_overrides(cfg)


def save_config(cfg: AppConfig, path: Optional[PathLike] = None) -> Path:
    """Write ``cfg`` as indented JSON with owner-only permissions."""
    p = config_path(path)
    p.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    p.write_text(json.dumps(cfg.model_dump(), indent=2), encoding="utf-8")
    os.chmod(p, 0o600)
    return p


def get_provider_config(provider: str, cfg: Optional[AppConfig] = None) -> Dict[str, Any]:
    """Return the merged adapter settings for ``provider``.

    Keys: ``model``, ``base_url``, ``api_key`` and, for Gemini,
    ``thinking_enabled``/``search_enabled``.
    """
    name = (provider or "").lower()
    cfg = cfg or AppConfig()
    merged: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    merged["api_key"] = cfg.get_api_key(name)
    if name == "gemini":
        merged["thinking_enabled"] = cfg.gemini_thinking
        merged["search_enabled"] = cfg.gemini_search
    return merged


def get_api_key(provider: str, cfg: Optional[AppConfig] = None) -> str:
    """Module-level shorthand for :meth:`AppConfig.get_api_key`."""
    return (cfg or AppConfig()).get_api_key(provider)


def mask_key(key: Optional[str]) -> str:
    """Mask an API key for display, keeping the first and last 4 characters."""
    if not key or len(key) <= 8:
        return "****"
    return f"{key[:4]}...{key[-4:]}"


__all__ = [
    "AppConfig",
    "ConfigError",
    "DEFAULTS",
    "config_path",
    "load_config",
    "save_config",
    "get_provider_config",
    "get_api_key",
    "mask_key",
]
