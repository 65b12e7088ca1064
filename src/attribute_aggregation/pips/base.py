"""Attribute aggregator capability.

Every attribute authority is reached through an object implementing the
AttributeAggregator protocol. Variants (eduID, ORCID, ...) are plain classes
registered by type in pips/registry.py; the orchestrator only knows this
protocol.

Contract:
- aggregate(): one outbound request, fallback preservation under the ARP,
  every returned attribute stamped with the authority id. Never mutates
  its input. Raises BackendUnavailable or MalformedResponse on failure.
  `claimed` holds the names earlier authorities already contributed in
  this request; those are never preserved again.
- filter_invalid_responses(): pure, authority-specific value validation.
  Must be idempotent.
"""

from __future__ import annotations

__all__ = [
    "AttributeAggregator",
    "merge_with_fallback",
    "require_identifier",
    "stamp_all",
]

from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from attribute_aggregation.exceptions import MissingRequiredInput
from attribute_aggregation.models import ArpAttributes, UserAttribute
from attribute_aggregation.pdp.arp import first_value, preserve_fallback_attributes

if TYPE_CHECKING:
    from attribute_aggregation.config import AttributeAuthorityConfig


@runtime_checkable
class AttributeAggregator(Protocol):
    """Protocol for pluggable attribute authorities."""

    @property
    def authority_id(self) -> str:
        """Authority id stamped as source on emitted attributes."""
        ...

    @property
    def configuration(self) -> "AttributeAuthorityConfig":
        """Read-only authority configuration."""
        ...

    def aggregate(
        self,
        input_attributes: Sequence[UserAttribute],
        arp: ArpAttributes,
        claimed: Collection[str] = (),
    ) -> list[UserAttribute]:
        """Fetch attributes from the authority and apply fallback preservation."""
        ...

    def filter_invalid_responses(self, attributes: Sequence[UserAttribute]) -> list[UserAttribute]:
        """Drop attribute values that fail authority-specific validation."""
        ...

    def close(self) -> None:
        """Release transport resources."""
        ...


def require_identifier(input_attributes: Sequence[UserAttribute], name: str, authority_id: str) -> str:
    """Return the first non-empty value of name or raise MissingRequiredInput."""
    value = first_value(input_attributes, name)
    if value is None:
        raise MissingRequiredInput(authority_id, f"Required input attribute {name} is missing")
    return value


def stamp_all(attributes: Sequence[UserAttribute], authority_id: str) -> list[UserAttribute]:
    """Stamp every attribute with authority_id, overwriting any source the backend set."""
    return [attribute.stamped(authority_id) for attribute in attributes]


def merge_with_fallback(
    input_attributes: Sequence[UserAttribute],
    response: Sequence[UserAttribute],
    arp: ArpAttributes,
    authority_id: str,
    claimed: Collection[str] = (),
) -> list[UserAttribute]:
    """Backend response followed by preserved originals, all stamped."""
    preserved = preserve_fallback_attributes(input_attributes, response, arp, authority_id, claimed)
    return stamp_all([*response, *preserved], authority_id)
