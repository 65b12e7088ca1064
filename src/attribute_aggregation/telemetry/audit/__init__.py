"""Audit logging for aggregation requests."""

from attribute_aggregation.telemetry.audit.aggregation_logger import (
    AggregationLogger,
    create_aggregation_logger,
)

__all__ = [
    "AggregationLogger",
    "create_aggregation_logger",
]
