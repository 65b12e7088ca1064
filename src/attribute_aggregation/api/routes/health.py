"""Health endpoint.

- GET /aa/api/health - Service status and configured authorities

Routes mounted at: /aa/api
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter

from attribute_aggregation import __version__
from attribute_aggregation.api.deps import ConfigDep
from attribute_aggregation.api.schemas import AuthorityInfo, HealthResponse

router = APIRouter()


@router.get("/health")
async def health(config: ConfigDep) -> HealthResponse:
    """Report service status. Endpoints and credentials are not exposed."""
    return HealthResponse(
        version=__version__,
        authorities=[
            AuthorityInfo(
                id=authority.id,
                type=authority.aggregator_type,
                required_input_attributes=authority.required_input_attributes,
            )
            for authority in config.authorities
        ],
    )
