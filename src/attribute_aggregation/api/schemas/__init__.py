"""API schemas (Pydantic models) for request/response validation.

The aggregate route uses the domain models (AggregationRequest,
UserAttribute) directly as its wire format.
"""

from __future__ import annotations

from attribute_aggregation.api.schemas.health import AuthorityInfo, HealthResponse

__all__ = [
    "AuthorityInfo",
    "HealthResponse",
]
