"""ORCID attribute authority.

Looks up the ORCID iD linked to a principal name. The backend answers with
the ORCID attribute, holding either a bare identifier
("0000-0002-4926-2859") or an orcid.org URL. Identifiers are rewritten to
their canonical URL form ("http://orcid.org/0000-0002-4926-2859").

ORCID iD format: four groups of four characters separated by hyphens. All
characters are digits except the last, which is an ISO 7064 MOD 11-2 check
character and may be the literal "X" (check value 10).
"""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from attribute_aggregation.constants import (
    EDU_PERSON_PRINCIPAL_NAME,
    EDU_PERSON_PRINCIPAL_NAME_PARAM,
    ORCID,
    ORCID_CANONICAL_BASE_URL,
)
from attribute_aggregation.exceptions import InvalidAttributeValue
from attribute_aggregation.models import ArpAttributes, UserAttribute
from attribute_aggregation.pips.base import merge_with_fallback, require_identifier
from attribute_aggregation.pips.client import AuthorityClient
from attribute_aggregation.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from attribute_aggregation.config import AttributeAuthorityConfig

_ORCID_PATTERN = re.compile(r"^(?:https?://(?:www\.|sandbox\.)?orcid\.org/)?(\d{4}-\d{4}-\d{4}-\d{3}[\dX])$")


def orcid_check_character(digits: str) -> str:
    """Compute the ISO 7064 MOD 11-2 check character for the first 15 digits."""
    total = 0
    for digit in digits:
        total = (total + int(digit)) * 2
    result = (12 - total % 11) % 11
    return "X" if result == 10 else str(result)


def extract_orcid(value: str) -> str | None:
    """Return the bare ORCID iD in value if it is well formed, else None.

    Only the format is checked, not the check character.
    """
    match = _ORCID_PATTERN.match(value.strip())
    return match.group(1) if match else None


def is_valid_orcid(identifier: str) -> bool:
    """True if identifier is a bare ORCID iD with a correct check character."""
    if extract_orcid(identifier) != identifier:
        return False
    digits = identifier.replace("-", "")
    return orcid_check_character(digits[:-1]) == digits[-1]


class OrcidAttributeAggregator:
    """Attribute aggregator for the ORCID lookup service.

    Options:
        canonical_base_url: Prefix for emitted ORCID values
            (default: http://orcid.org/).
        query_parameter: Name of the query parameter carrying the principal
            name (default: edu_person_principal_name).
    """

    def __init__(
        self,
        configuration: "AttributeAuthorityConfig",
        client: AuthorityClient | None = None,
    ) -> None:
        self._configuration = configuration
        self._client = client or AuthorityClient(configuration)
        self._base_url = str(configuration.options.get("canonical_base_url", ORCID_CANONICAL_BASE_URL))
        self._parameter = str(configuration.options.get("query_parameter", EDU_PERSON_PRINCIPAL_NAME_PARAM))
        self._logger = get_system_logger()

    @property
    def authority_id(self) -> str:
        return self._configuration.id

    @property
    def configuration(self) -> "AttributeAuthorityConfig":
        return self._configuration

    def aggregate(
        self,
        input_attributes: Sequence[UserAttribute],
        arp: ArpAttributes,
        claimed: Collection[str] = (),
    ) -> list[UserAttribute]:
        principal_name = require_identifier(input_attributes, EDU_PERSON_PRINCIPAL_NAME, self.authority_id)
        response = [
            self._canonicalize(attribute) if attribute.name == ORCID else attribute
            for attribute in self._client.fetch_attributes(self._parameter, principal_name)
        ]
        return merge_with_fallback(input_attributes, response, arp, self.authority_id, claimed)

    def filter_invalid_responses(self, attributes: Sequence[UserAttribute]) -> list[UserAttribute]:
        """Drop ORCID values with a bad format or check character.

        An ORCID attribute left without values is dropped entirely. Other
        attributes (e.g. fallback-preserved ones) pass through unchanged.
        """
        result: list[UserAttribute] = []
        for attribute in attributes:
            if attribute.name != ORCID:
                result.append(attribute)
                continue
            values = []
            for value in attribute.values:
                try:
                    self._validate(value)
                except InvalidAttributeValue:
                    self._logger.debug({"event": "invalid_orcid_dropped", "authority_id": self.authority_id})
                    continue
                values.append(value)
            if values:
                result.append(attribute.model_copy(update={"values": values}))
        return result

    def _canonicalize(self, attribute: UserAttribute) -> UserAttribute:
        # Malformed values are kept as-is so filter_invalid_responses can drop them
        values = []
        for value in attribute.values:
            identifier = self._identifier(value)
            values.append(f"{self._base_url}{identifier}" if identifier else value)
        return attribute.model_copy(update={"values": values})

    def _identifier(self, value: str) -> str | None:
        if value.startswith(self._base_url):
            value = value[len(self._base_url):]
        return extract_orcid(value)

    def _validate(self, value: str) -> None:
        identifier = self._identifier(value)
        if identifier is None or not is_valid_orcid(identifier):
            raise InvalidAttributeValue(f"Not a valid ORCID iD: {value!r}")

    def close(self) -> None:
        self._client.close()
