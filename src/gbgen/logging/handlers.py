"""Log formatters for gbgen.

Generation steps attach their progress to log records through ``extra=``
(the project being read, the page offset, feature counts, the output path).
Both formatters pick those fields up: JSONFormatter nests them under
``context`` and TextFormatter appends them as ``key=value`` pairs.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Record attributes set through extra= by gbgen, in display order
CONTEXT_FIELDS: tuple[str, ...] = (
    "project_id",
    "page",
    "offset",
    "count",
    "features",
    "mode",
    "path",
    "bytes",
)

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the gbgen context fields present on record."""
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class TextFormatter(logging.Formatter):
    """Human-readable lines with context appended as key=value pairs."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        # Keep the traceback (if any) below the first line
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys: timestamp (ISO-8601 UTC), level, message, logger (unless root),
    context (gbgen fields, when any are set) and exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if record.name and record.name != "root":
            log_entry["logger"] = record.name

        context = record_context(record)
        if context:
            log_entry["context"] = context

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)
