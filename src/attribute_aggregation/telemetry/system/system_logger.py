"""System logger for operational events.

Operational events (startup, authority failures, skipped authorities) are
logged as JSON lines to stderr and, when a log directory is configured, to
<log_dir>/system.jsonl.

Usage:
    logger = get_system_logger()
    logger.warning({"event": "authority_unavailable", "authority_id": "eduid"})
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from attribute_aggregation.constants import SYSTEM_LOG_FILENAME, SYSTEM_LOGGER_NAME
from attribute_aggregation.utils.logging.logger_setup import setup_jsonl_logger, setup_stream_logger

if TYPE_CHECKING:
    from attribute_aggregation.config import LoggingConfig


def get_system_logger() -> logging.Logger:
    """Get the process-wide system logger.

    Unconfigured, it behaves like any stdlib logger and propagates to root.
    """
    return logging.getLogger(SYSTEM_LOGGER_NAME)


def configure_system_logger(config: "LoggingConfig") -> logging.Logger:
    """Attach JSON-lines handlers to the system logger.

    Args:
        config: Logging configuration (level, optional log directory).

    Returns:
        The configured system logger.
    """
    level = logging.DEBUG if config.log_level == "DEBUG" else logging.INFO
    logger = setup_stream_logger(SYSTEM_LOGGER_NAME, log_level=level)
    if config.log_dir:
        setup_jsonl_logger(
            SYSTEM_LOGGER_NAME,
            Path(config.log_dir).expanduser() / SYSTEM_LOG_FILENAME,
            log_level=level,
            replace_handlers=False,
        )
    return logger
