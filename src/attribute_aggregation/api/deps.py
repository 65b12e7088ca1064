"""Shared dependencies for API routes.

FastAPI convention: deps.py contains reusable request dependencies.
All route files should import dependencies from here rather than
defining their own helper functions.

Usage with Annotated (recommended):
    from attribute_aggregation.api.deps import AggregationServiceDep

    @router.post("/attribute/aggregate")
    def aggregate(body: AggregationRequest, service: AggregationServiceDep) -> list[UserAttribute]:
        ...
"""

from __future__ import annotations

__all__ = [
    # Dependency functions
    "get_aggregation_service",
    "get_config",
    # Type aliases for Annotated pattern
    "AggregationServiceDep",
    "ConfigDep",
]

from typing import Annotated, cast

from fastapi import Depends, HTTPException, Request

from attribute_aggregation.aggregation.orchestrator import AttributeAggregationService
from attribute_aggregation.config import AppConfig


def get_config(request: Request) -> AppConfig:
    """Get AppConfig from app.state.

    Raises:
        HTTPException: 503 if configuration not available.
    """
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=503, detail="Configuration not available.")
    return cast(AppConfig, config)


def get_aggregation_service(request: Request) -> AttributeAggregationService:
    """Get the AttributeAggregationService from app.state.

    Raises:
        HTTPException: 503 if the service is not available.
    """
    service = getattr(request.app.state, "aggregation_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Aggregation service not available.")
    return cast(AttributeAggregationService, service)


ConfigDep = Annotated[AppConfig, Depends(get_config)]
AggregationServiceDep = Annotated[AttributeAggregationService, Depends(get_aggregation_service)]
