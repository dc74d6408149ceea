"""Structured JSON logger for mdsurface.

Each record is written as one JSON object per line, so editor traces can
be grepped or piped to ``jq`` without extra parsing.

Typical output::

    {"ts": "2026-10-19T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "mdsurface.editor", "message": "surface re-rendered",
     "op": "render", "blocks": 3, "caret": 7}

Usage::

    from mdsurface.observability import get_logger

    log = get_logger("mdsurface.editor")
    log.debug("surface re-rendered", extra={"extra_fields": {"blocks": 3}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys are ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Structured fields passed as
    ``extra={"extra_fields": {...}}`` are merged into the top-level
    object.  ``exception`` and ``stack_info`` are added when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(
            record, "extra_fields", None
        )
        if extra_fields is not None:
            log_entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str)


# One handler per logger name, so repeated ``get_logger`` calls never
# stack duplicate handlers.
_configured_loggers: set[str] = set()


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level!r}")
        return resolved
    return level


def get_logger(
    name: str = "mdsurface",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Defaults to ``"mdsurface"``.
    level:
        Minimum log level, as an ``int`` or a case-insensitive name such
        as ``"INFO"``.  Only applied the first time *name* is configured;
        use :func:`set_level` afterwards.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        A logger with a :class:`StructuredFormatter` handler attached.
        Repeated calls with the same *name* return the same logger and do
        **not** add duplicate handlers.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        logger.setLevel(_resolve_level(level))

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        # Root handlers would print every record a second time.
        logger.propagate = False

        _configured_loggers.add(name)

    return logger


def set_level(logger: logging.Logger, level: int | str) -> None:
    """Change *logger*'s level, accepting the same forms as :func:`get_logger`."""
    logger.setLevel(_resolve_level(level))
