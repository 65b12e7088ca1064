"""Value objects exchanged between the API layer, the orchestrator and authorities.

Model structure:
    UserAttribute
    ├── name: qualified attribute name (e.g. urn:mace:dir:attribute-def:...)
    ├── values: ordered attribute values
    └── source: authority id, unset until stamped
    ArpValue
    ├── source: authority allowed to supply the attribute
    ├── value: permitted value pattern ("*" for any)
    └── release: whether release is allowed
    ArpAttributes = dict[attribute name, list[ArpValue]]

All models are frozen. Provenance is attached with UserAttribute.stamped(),
which returns a new instance instead of mutating the original.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "AggregationRequest",
    "ArpAttributes",
    "ArpValue",
    "UserAttribute",
]


class UserAttribute(BaseModel):
    """A single named, multi-valued user attribute.

    Attributes:
        name: Qualified attribute name.
        values: Ordered values; None entries are rejected on validation.
        source: Id of the authority that produced the attribute, if stamped.
    """

    name: str
    values: list[str] = Field(default_factory=list)
    source: str | None = None

    model_config = ConfigDict(frozen=True)

    def stamped(self, source: str) -> UserAttribute:
        """Return a copy of this attribute with its provenance set to source."""
        return self.model_copy(update={"source": source})

    @property
    def has_value(self) -> bool:
        """True if at least one value is a non-empty string."""
        return any(value for value in self.values)


class ArpValue(BaseModel):
    """One attribute release policy line for an attribute name.

    Attributes:
        source: Authority id allowed to supply the attribute.
        value: Permitted value ("*" matches any value).
        release: Whether the attribute may be released.
    """

    source: str
    value: str = "*"
    release: bool = True

    model_config = ConfigDict(frozen=True)


ArpAttributes = dict[str, list[ArpValue]]


class AggregationRequest(BaseModel):
    """Inbound aggregation request as sent by the attribute consumer.

    Attributes:
        service_provider_id: Entity id of the service provider asking.
        attributes: Caller's current attribute set.
        arp_attributes: Resolved attribute release policy for the service provider.
    """

    service_provider_id: str = Field(alias="serviceProviderEntityId")
    attributes: list[UserAttribute] = Field(default_factory=list, alias="userAttributes")
    arp_attributes: ArpAttributes = Field(default_factory=dict, alias="arpAttributes")

    model_config = ConfigDict(frozen=True, populate_by_name=True)
