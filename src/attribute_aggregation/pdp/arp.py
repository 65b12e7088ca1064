"""Attribute Release Policy (ARP) evaluation helpers.

Pure functions over ArpAttributes and attribute lists. They decide:
- whether an authority's required inputs are present (eligibility)
- which attribute values an authority must carry through when its backend
  has nothing to say about them (fallback preservation)

Fallback preservation rules:
1. The attribute name is a key in the ARP and absent from the backend response
2. At least one ArpValue for the name has source == authority id
3. Every input attribute with that name is carried through, whatever source
   the caller gave it
4. A name already claimed by an earlier authority in the same request is not
   preserved again, so the first authority in configuration order wins
"""

from __future__ import annotations

__all__ = [
    "fallback_names",
    "first_value",
    "has_required_inputs",
    "is_sanctioned_source",
    "preserve_fallback_attributes",
]

from collections.abc import Collection, Iterable, Sequence

from attribute_aggregation.models import ArpAttributes, UserAttribute


def is_sanctioned_source(arp: ArpAttributes, name: str, authority_id: str) -> bool:
    """True if some ArpValue for name names authority_id as its source."""
    return any(arp_value.source == authority_id for arp_value in arp.get(name, []))


def fallback_names(arp: ArpAttributes, response_names: Iterable[str], authority_id: str) -> list[str]:
    """ARP attribute names the authority did not return but is sanctioned for."""
    returned = set(response_names)
    return [name for name in arp if name not in returned and is_sanctioned_source(arp, name, authority_id)]


def preserve_fallback_attributes(
    input_attributes: Sequence[UserAttribute],
    response: Sequence[UserAttribute],
    arp: ArpAttributes,
    authority_id: str,
    claimed: Collection[str] = (),
) -> list[UserAttribute]:
    """Select the input attributes an authority must carry through.

    Args:
        input_attributes: Running attribute set passed to the authority.
        response: Attributes returned by the authority's backend.
        arp: Attribute release policy of the service provider.
        authority_id: Id of the authority being invoked.
        claimed: Names already contributed by earlier authorities in this
            request. Their attributes are never preserved again.

    Returns:
        Matching input attributes, in input order and unchanged.
    """
    names = set(fallback_names(arp, (attribute.name for attribute in response), authority_id))
    names.difference_update(claimed)
    if not names:
        return []
    return [attribute for attribute in input_attributes if attribute.name in names]


def first_value(attributes: Iterable[UserAttribute], name: str) -> str | None:
    """First non-empty value of the first attribute called name that has one."""
    for attribute in attributes:
        if attribute.name != name:
            continue
        for value in attribute.values:
            if value:
                return value
    return None


def has_required_inputs(attributes: Sequence[UserAttribute], required: Iterable[str]) -> bool:
    """True if every required name is present with at least one non-empty value."""
    return all(first_value(attributes, name) is not None for name in required)
