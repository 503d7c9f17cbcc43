"""
Root logger setup for the table browser.

Two output modes share one handler on the root logger:

- ``json`` (default): one JSON object per record, ``extra={...}`` keys become
  top-level fields. Suited to log shipping.
- ``plain``: human-readable lines for local development.

Level and mode are resolved in this order: explicit argument, environment
variable (``TABLE_STATE_LOG_LEVEL`` / ``TABLE_STATE_LOG_FORMAT``), then the
supplied default (``global.json``'s ``log_level`` when run through ``app.py``).
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

LOG_LEVEL_ENV = "TABLE_STATE_LOG_LEVEL"
LOG_FORMAT_ENV = "TABLE_STATE_LOG_FORMAT"
LOG_FORMATS = ("json", "plain")

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Request logging from the dev server drowns store events at INFO.
QUIET_LOGGERS = ("werkzeug",)

LevelLike = Union[int, str]


def resolve_level(level: Optional[LevelLike] = None, default: LevelLike = logging.INFO) -> int:
    """Turn an int or a level name ("debug", "WARNING") into a logging level."""
    value = level if level is not None else os.getenv(LOG_LEVEL_ENV) or default
    if isinstance(value, int):
        return value

    resolved = logging.getLevelName(str(value).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return resolved


def resolve_format(force_format: Optional[str] = None) -> str:
    mode = (force_format or os.getenv(LOG_FORMAT_ENV) or "json").strip().lower()
    if mode not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {mode!r} (expected one of {', '.join(LOG_FORMATS)})")
    return mode


def build_formatter(mode: str) -> logging.Formatter:
    if mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)
    return jsonlogger.JsonFormatter(
        JSON_FIELDS,
        rename_fields={"levelname": "level", "name": "logger"},
    )


def configure_logging(
        level: Optional[LevelLike] = None,
        force_format: Optional[str] = None,
        default_level: LevelLike = logging.INFO,
) -> int:
    """
    Install a single stream handler on the root logger.

    Safe to call repeatedly: existing root handlers are replaced.

    :return: the effective root level
    """
    effective = resolve_level(level, default_level)
    mode = resolve_format(force_format)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(mode))

    root = logging.getLogger()
    root.setLevel(effective)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))

    return effective
