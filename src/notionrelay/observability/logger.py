"""Structured JSON logging for notionrelay.

Every record becomes one JSON object per line::

    {"ts": "2026-01-05T09:14:02.511093+00:00", "level": "WARNING",
     "logger": "notionrelay.rich_text", "message": "Rich text truncated",
     "op": "normalize_run", "segments": 140, "dropped": 40}

Callers attach fields with ``extra={"extra_fields": {...}}``::

    from notionrelay.observability import get_logger

    log = get_logger("notionrelay.transport")
    log.warning("Rate limited", extra={"extra_fields": {"retry_after": 2}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format a :class:`logging.LogRecord` as single-line JSON.

    ``ts``, ``level``, ``logger`` and ``message`` are always present.  The
    record's ``extra_fields`` dict is merged in at the top level, followed
    by ``exception`` / ``stack_info`` when set.  Values that JSON cannot
    encode are written with ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = dict(
            ts=datetime.now(timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        entry.update(getattr(record, "extra_fields", None) or {})

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


# Names of loggers that already carry a StructuredFormatter handler.
_configured_loggers: set[str] = set()


def _as_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelName(level.upper())


def get_logger(
    name: str = "notionrelay",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Return logger *name*, attaching a JSON handler on first use.

    *level* (an ``int`` or a name such as ``"info"``) and *stream*
    (default ``sys.stderr``) only take effect the first time a given name
    is requested; later calls return the same logger untouched, so
    handlers never stack.  The logger does not propagate to the root
    logger.
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.setLevel(_as_level(level))
    logger.propagate = False
    _configured_loggers.add(name)
    return logger
