"""Logging setup for PracTempo.

Log output goes to stderr (or a file) so that stdout stays free for
converted schedules. Two renderings are supported: the classic text
format, and one JSON object per line for machine consumption. Row-level
context (row index, interval label) is attached with ``get_logger``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredJSONFormatter(logging.Formatter):
    """Render each record as a single JSON line.

    Example output::

        {"time": "2026-03-01T09:30:00+00:00", "level": "WARNING",
         "logger": "practempo.core.schedule.builder",
         "message": "Interval 3 (Scales): 'Key' is required",
         "where": "builder:_create_feature:171",
         "context": {"row_index": 3, "label": "Scales"}}

    ``context`` holds the fields added through ``extra`` or a
    ``LoggerAdapter``; ``error`` is present only when exception info is.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, _ = record.exc_info
            entry["error"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "trace": record.exc_text or self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str, ensure_ascii=False)


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """(Re)configure the root logger.

    Safe to call repeatedly; existing root handlers are replaced.

    Args:
        level: Level name, case-insensitive.
        format_string: ``logging`` format for text output; ignored when
            ``structured`` is set.
        filename: Append to this file instead of writing to stderr.
        structured: Emit JSON lines (see ``StructuredJSONFormatter``).

    Raises:
        ValueError: If ``level`` is not a known level name.

    Example:
        >>> configure_logging(level="debug", structured=True)
    """
    handler: logging.Handler = (
        logging.FileHandler(filename, encoding="utf-8")
        if filename
        else logging.StreamHandler(sys.stderr)
    )
    handler.setFormatter(
        StructuredJSONFormatter()
        if structured
        else logging.Formatter(format_string or DEFAULT_FORMAT)
    )
    logging.basicConfig(level=_resolve_level(level), handlers=[handler], force=True)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Return the named logger, wrapped in a LoggerAdapter when context is given.

    >>> log = get_logger(__name__, row_index=3, label="Scales")
    >>> log.warning("Duration is empty")  # record carries row_index and label
    """
    base = logging.getLogger(name)
    return logging.LoggerAdapter(base, context) if context else base
