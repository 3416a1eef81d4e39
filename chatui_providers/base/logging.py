"""Base structured logging utilities for the provider layer.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across adapters.

All adapters obtain loggers through :func:`get_logger`; child loggers
propagate to the shared ``chatui_providers`` logger, which owns the single
console handler. :func:`normalized_log_event` guarantees the canonical keys
``phase``, ``error_code`` and ``emitted`` on every event so downstream
filtering does not depend on which adapter emitted it.

Credentials are never passed to these helpers.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "chatui_providers"
LEVEL_ENV_VAR = "CHATUI_LOG_LEVEL"

_CONSOLE_HANDLER_ATTR = "_chatui_console_handler"
_FILE_HANDLER_ATTR = "_chatui_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Parse a logging level name (case-insensitive); fall back to ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool) -> logging.Logger:
    """Initialize (once) and return the shared base logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if any(getattr(h, _CONSOLE_HANDLER_ATTR, False) for h in logger.handlers):
        return logger
    level = _parse_level(os.getenv(LEVEL_ENV_VAR))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True) -> logging.Logger:
    """Return a logger under the shared provider hierarchy.

    ``name`` is namespaced below ``chatui_providers`` when it is not already.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared provider logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or level name. ``None`` keeps the current level.
    file_path:
        When provided, attach (or retarget) a rotating file handler writing to
        this path. When ``None``, remove any file handler managed here.
    json_mode:
        Use the JSON formatter (default) or a plain text one.
    """
    logger = _ensure_base_logger(json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)

    for h in list(logger.handlers):
        if getattr(h, _CONSOLE_HANDLER_ATTR, False):
            h.setFormatter(_formatter(json_mode))
            continue
        if not getattr(h, _FILE_HANDLER_ATTR, False):
            continue
        same_target = file_path is not None and getattr(h, "baseFilename", None) == os.path.abspath(
            os.path.expanduser(file_path)
        )
        if same_target:
            h.setFormatter(_formatter(json_mode))
            return logger
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()

    if file_path is None:
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setFormatter(_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a single-line JSON payload ``{"event": ..., **ctx, **fields}``.

    Keys whose value is ``None`` are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "error_code", "emitted")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: int | None = None,
    level: int | None = None,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    ``error_code`` is omitted when ``None``; events with an error code default
    to ``WARNING`` level, everything else to ``INFO``.
    """
    fields: dict = {"phase": phase, "emitted": emitted}
    if error_code is not None:
        fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is not None and k not in fields:
            fields[k] = v
    if level is None:
        level = logging.WARNING if error_code is not None else logging.INFO
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LEVEL_ENV_VAR",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
