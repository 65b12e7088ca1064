"""Aggregation orchestration."""

from attribute_aggregation.aggregation.factory import create_aggregation_service
from attribute_aggregation.aggregation.orchestrator import AttributeAggregationService
from attribute_aggregation.aggregation.outcome import AggregationOutcome, AuthorityResult, AuthorityStatus

__all__ = [
    "AggregationOutcome",
    "AttributeAggregationService",
    "AuthorityResult",
    "AuthorityStatus",
    "create_aggregation_service",
]
