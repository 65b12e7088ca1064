"""Logging setup helpers."""

from attribute_aggregation.utils.logging.logger_setup import (
    ISO8601JSONFormatter,
    setup_jsonl_logger,
    setup_stream_logger,
)

__all__ = [
    "ISO8601JSONFormatter",
    "setup_jsonl_logger",
    "setup_stream_logger",
]
