"""FastAPI server for the attribute aggregation API.

Implements:
- Attribute aggregation (/aa/api/attribute/aggregate)
- Health (/aa/api/health)

The AppConfig and the AttributeAggregationService are created once and
stored on app.state; routes reach them through api/deps.py.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from attribute_aggregation import __version__
from attribute_aggregation.aggregation.factory import create_aggregation_service
from attribute_aggregation.aggregation.orchestrator import AttributeAggregationService
from attribute_aggregation.config import AppConfig
from attribute_aggregation.constants import API_PREFIX

from .routes import aggregate, health


def create_api_app(
    config: AppConfig,
    service: AttributeAggregationService | None = None,
) -> FastAPI:
    """Create the FastAPI application with all routes.

    Args:
        config: Loaded application configuration.
        service: Pre-built aggregation service (default: built from config).

    Returns:
        Configured FastAPI app. Aggregator transports are closed on shutdown.
    """
    aggregation_service = service or create_aggregation_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        aggregation_service.close()

    app = FastAPI(
        title="Attribute Aggregation API",
        description="Enrich user attributes from external attribute authorities",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.aggregation_service = aggregation_service

    app.include_router(aggregate.router, prefix=API_PREFIX, tags=["aggregation"])
    app.include_router(health.router, prefix=API_PREFIX, tags=["health"])

    return app
