"""Policy Information Points (PIPs) - External attribute authorities.

This module provides integrations with the external systems that supply user
attributes:

- base.py: AttributeAggregator protocol and shared merge helpers
- client.py: httpx transport with timeout, Basic auth and response cache
- eduid.py: eduID directory
- orcid.py: ORCID lookup with identifier validation
- registry.py: authority type -> aggregator class
"""

from attribute_aggregation.pips.base import AttributeAggregator
from attribute_aggregation.pips.client import AuthorityClient
from attribute_aggregation.pips.eduid import EduIDAttributeAggregator
from attribute_aggregation.pips.orcid import OrcidAttributeAggregator
from attribute_aggregation.pips.registry import AGGREGATOR_TYPES, create_aggregator, create_aggregators

__all__ = [
    "AGGREGATOR_TYPES",
    "AttributeAggregator",
    "AuthorityClient",
    "EduIDAttributeAggregator",
    "OrcidAttributeAggregator",
    "create_aggregator",
    "create_aggregators",
]
