"""Attribute aggregation endpoint.

- POST /aa/api/attribute/aggregate - Aggregate attributes for a caller

Request body:
    {
      "serviceProviderEntityId": "https://sp.example.org",
      "userAttributes": [{"name": "...", "values": ["..."]}],
      "arpAttributes": {"<name>": [{"source": "eduid", "value": "*"}]}
    }

Response: list of {name, values, source}.

Routes mounted at: /aa/api
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Depends

from attribute_aggregation.api.deps import AggregationServiceDep
from attribute_aggregation.api.security import require_basic_auth
from attribute_aggregation.models import AggregationRequest, UserAttribute

router = APIRouter()


@router.post("/attribute/aggregate", dependencies=[Depends(require_basic_auth)])
def aggregate(body: AggregationRequest, service: AggregationServiceDep) -> list[UserAttribute]:
    """Aggregate attributes from the configured attribute authorities.

    Best effort: unavailable authorities contribute nothing. The response
    never fails because of an authority.

    Runs in FastAPI's threadpool since authority calls are blocking.
    """
    return service.aggregate(body.service_provider_id, body.attributes, body.arp_attributes)
