"""Logger construction helpers.

All loggers emit JSON lines. Callers log dicts with an "event" key:

    logger.warning({"event": "authority_unavailable", "authority_id": "orcid"})

The formatter adds an ISO 8601 "time" and the "level". Plain string messages
are wrapped as {"message": ...}.
"""

from __future__ import annotations

__all__ = [
    "ISO8601JSONFormatter",
    "setup_jsonl_logger",
    "setup_stream_logger",
]

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO


class ISO8601JSONFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
        }
        if isinstance(record.msg, dict):
            entry.update(record.msg)
        else:
            entry["message"] = record.getMessage()
        if record.exc_info:
            entry["stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_stream_logger(
    name: str,
    *,
    stream: TextIO | None = None,
    log_level: int = logging.INFO,
) -> logging.Logger:
    """Configure a logger that writes JSON lines to a stream (stderr by default).

    Existing handlers are replaced so repeated setup is idempotent.
    """
    logger = logging.getLogger(name)
    _reset_handlers(logger)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ISO8601JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return logger


def setup_jsonl_logger(
    name: str,
    log_path: Path,
    *,
    log_level: int = logging.INFO,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Configure a logger that appends JSON lines to log_path.

    Creates the parent directory if needed.

    Args:
        name: Logger name.
        log_path: Destination .jsonl file.
        log_level: Minimum level to record.
        replace_handlers: Drop existing handlers first (False adds a file
            handler next to e.g. a stderr handler).

    Returns:
        Configured logger.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    if replace_handlers:
        _reset_handlers(logger)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(ISO8601JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return logger
