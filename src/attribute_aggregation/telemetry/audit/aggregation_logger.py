"""Aggregation audit logger.

Logs one JSON line per aggregation request to
<log_dir>/aggregations.jsonl:
- service provider
- per-authority status (skipped / succeeded / failed with error type)
- names and sources of the released attributes

Attribute values are never logged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from attribute_aggregation.constants import AGGREGATION_AUDIT_LOGGER_NAME
from attribute_aggregation.utils.logging.logger_setup import setup_jsonl_logger

if TYPE_CHECKING:
    from attribute_aggregation.aggregation.outcome import AggregationOutcome


class AggregationLogger:
    """Audit logger for aggregation requests.

    Usage:
        logger = create_aggregation_logger(log_dir / "aggregations.jsonl")
        logger.log_aggregation(outcome)
    """

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize aggregation logger.

        Args:
            logger: Configured JSON-lines logger.
        """
        self._logger = logger

    def log_aggregation(self, outcome: "AggregationOutcome") -> None:
        """Log the outcome of one aggregation request."""
        self._logger.info(
            {
                "event": "attribute_aggregation",
                "service_provider_id": outcome.service_provider_id,
                "fell_back_to_input": outcome.fell_back_to_input,
                "authorities": [result.to_dict() for result in outcome.authorities],
                "attributes": [
                    {"name": attribute.name, "source": attribute.source} for attribute in outcome.attributes
                ],
            }
        )


def create_aggregation_logger(log_path: Path) -> AggregationLogger:
    """Create the aggregation audit logger writing to log_path."""
    return AggregationLogger(setup_jsonl_logger(AGGREGATION_AUDIT_LOGGER_NAME, log_path))
