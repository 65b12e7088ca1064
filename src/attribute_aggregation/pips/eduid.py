"""eduID attribute authority.

Looks up a user in the eduID directory by eduPersonPrincipalName and returns
the attributes eduID holds for them. eduID values need no extra validation.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from attribute_aggregation.constants import EDU_PERSON_PRINCIPAL_NAME, EDU_PERSON_PRINCIPAL_NAME_PARAM
from attribute_aggregation.models import ArpAttributes, UserAttribute
from attribute_aggregation.pips.base import merge_with_fallback, require_identifier
from attribute_aggregation.pips.client import AuthorityClient

if TYPE_CHECKING:
    from attribute_aggregation.config import AttributeAuthorityConfig


class EduIDAttributeAggregator:
    """Attribute aggregator for the eduID directory.

    Options:
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
        self._parameter = str(configuration.options.get("query_parameter", EDU_PERSON_PRINCIPAL_NAME_PARAM))

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
        response = self._client.fetch_attributes(self._parameter, principal_name)
        return merge_with_fallback(input_attributes, response, arp, self.authority_id, claimed)

    def filter_invalid_responses(self, attributes: Sequence[UserAttribute]) -> list[UserAttribute]:
        return list(attributes)

    def close(self) -> None:
        self._client.close()
