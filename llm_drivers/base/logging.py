"""Base structured logging utilities for the driver layer.

All drivers log through children of the shared ``drivers`` logger so a single
handler (JSON on stderr by default) serves the whole package. Events are one
JSON object per line; ``normalized_log_event`` guarantees a fixed set of keys
(``structured``, ``phase``, ``attempt``, ``emitted``, ``tokens``) so that
events from different providers can be filtered the same way.

Environment:
    ``DRIVERS_LOG_LEVEL`` sets the initial level of the base logger.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from dataclasses import asdict, is_dataclass
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "drivers"

_BASE_LOGGER_ATTR = "_drivers_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_drivers_console_handler"
_FILE_HANDLER_ATTR = "_drivers_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name into its integer constant.

    Accepts common names case-insensitively and falls back to ``default``.
    """
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


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``drivers`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger

    env_level = _parse_level(os.getenv("DRIVERS_LOG_LEVEL"), default=level)
    logger.setLevel(env_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(env_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [h for h in logger.handlers if not getattr(h, _CONSOLE_HANDLER_ATTR, False)]
    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a logger wired to the shared ``drivers`` handler.

    Names outside the ``drivers.`` hierarchy are returned untouched apart from
    base-logger initialization; callers should prefer ``drivers.<provider>``.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared drivers logger at runtime.

    Parameters
    ----------
    level:
        Desired logging level, numeric or by name. ``None`` keeps the current one.
    file_path:
        When provided, attach (or reuse) a rotating file handler writing to
        this path. When ``None``, any file handler managed here is removed.
    json_mode:
        JSON formatter (default) or a plain human-readable format.

    Returns
    -------
    logging.Logger
        The configured base logger. Handlers not created by this module are
        left untouched.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)

    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for h in logger.handlers:
            h.setLevel(resolved)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is None or getattr(h, "baseFilename", None) != abs_path:
            logger.removeHandler(h)
            with contextlib.suppress(OSError):
                h.close()
    if abs_path is None:
        return logger

    existing = next((h for h in logger.handlers if getattr(h, "baseFilename", None) == abs_path), None)
    if existing is None:
        os.makedirs(os.path.dirname(abs_path), exist_ok=True)
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_make_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def _to_jsonable(value: Any) -> Any:
    """Best-effort conversion of SDK objects and dataclasses for log payloads."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        with contextlib.suppress(Exception):
            return dump()
    return value


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Keys whose value is ``None`` are dropped unless ``keep_none`` is set.
    Values that are not JSON-serializable are rendered with ``str``.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    items = fields.items() if keep_none else ((k, v) for k, v in fields.items() if v is not None)
    payload.update({k: _to_jsonable(v) for k, v in items})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info into a stable JSON-friendly mapping."""
    if tokens is None:
        return None
    if is_dataclass(tokens) and not isinstance(tokens, type):
        return asdict(tokens)
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    level: int = logging.INFO,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = False,
    **extra_fields: Any,
) -> None:
    """Emit a normalized structured log event with the required key set.

    ``error_code`` is omitted when ``None``; every other normalized key is
    always present (``null`` when unknown). ``extra_fields`` never overwrite a
    normalized value.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
