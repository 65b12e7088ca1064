"""Aggregator registry.

Maps an authority type to the class implementing it. The type is the
authority's configured `type`, or its `id` when no type is given, so a
configuration entry {"id": "eduid", ...} selects EduIDAttributeAggregator.

Adding an authority: implement the AttributeAggregator protocol and register
the class in AGGREGATOR_TYPES.
"""

from __future__ import annotations

__all__ = [
    "AGGREGATOR_TYPES",
    "create_aggregator",
    "create_aggregators",
]

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from attribute_aggregation.exceptions import ConfigurationError
from attribute_aggregation.pips.base import AttributeAggregator
from attribute_aggregation.pips.eduid import EduIDAttributeAggregator
from attribute_aggregation.pips.orcid import OrcidAttributeAggregator

if TYPE_CHECKING:
    from attribute_aggregation.config import AttributeAuthorityConfig

AGGREGATOR_TYPES: dict[str, Callable[["AttributeAuthorityConfig"], AttributeAggregator]] = {
    "eduid": EduIDAttributeAggregator,
    "orcid": OrcidAttributeAggregator,
}


def create_aggregator(configuration: "AttributeAuthorityConfig") -> AttributeAggregator:
    """Instantiate the aggregator registered for the authority's type.

    Raises:
        ConfigurationError: If no aggregator is registered for the type.
    """
    factory = AGGREGATOR_TYPES.get(configuration.aggregator_type)
    if factory is None:
        known = ", ".join(sorted(AGGREGATOR_TYPES))
        raise ConfigurationError(
            f"Unknown attribute authority type '{configuration.aggregator_type}' "
            f"for authority '{configuration.id}'. Known types: {known}"
        )
    return factory(configuration)


def create_aggregators(authorities: Iterable["AttributeAuthorityConfig"]) -> list[AttributeAggregator]:
    """Instantiate aggregators in configuration order."""
    return [create_aggregator(configuration) for configuration in authorities]
