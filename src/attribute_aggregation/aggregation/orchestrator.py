"""Aggregation orchestrator - run the configured authorities for one request.

Per request:
1. Visit authorities in configuration order
2. Skip an authority whose required inputs are missing from the running set
3. Call aggregate() with the running set (input + earlier contributions)
4. Pass the result through that authority's filter_invalid_responses()
5. Append the filtered result to the contributions and the running set;
   its names become claimed, so later authorities do not preserve them again
6. Return the contributions; if every invoked authority failed, return the
   caller's input unchanged

Design principles:
1. Best-effort enrichment: an unavailable or malformed authority contributes
   nothing and the pipeline continues (unless abort_on_failure is set)
2. Deterministic: same input, ARP and backend state give the same ordered result
3. Stateless across requests: aggregators are shared, the running set is local
"""

from __future__ import annotations

__all__ = ["AttributeAggregationService"]

from collections.abc import Sequence
from typing import TYPE_CHECKING

from attribute_aggregation.aggregation.outcome import AggregationOutcome, AuthorityResult, AuthorityStatus
from attribute_aggregation.exceptions import AggregationAborted, AuthorityError, MissingRequiredInput
from attribute_aggregation.models import ArpAttributes, UserAttribute
from attribute_aggregation.pdp.arp import has_required_inputs
from attribute_aggregation.pips.registry import create_aggregators
from attribute_aggregation.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from attribute_aggregation.config import AppConfig
    from attribute_aggregation.pips.base import AttributeAggregator
    from attribute_aggregation.telemetry.audit.aggregation_logger import AggregationLogger


class AttributeAggregationService:
    """Orchestrates attribute aggregation across attribute authorities.

    Usage:
        service = AttributeAggregationService.from_config(config)
        attributes = service.aggregate(sp_entity_id, user_attributes, arp_attributes)

    Attributes:
        aggregators: Aggregators in invocation order.
        abort_on_failure: Raise AggregationAborted on the first authority failure.
    """

    def __init__(
        self,
        aggregators: Sequence["AttributeAggregator"],
        *,
        abort_on_failure: bool = False,
        aggregation_logger: "AggregationLogger | None" = None,
    ) -> None:
        self.aggregators = tuple(aggregators)
        self.abort_on_failure = abort_on_failure
        self._aggregation_logger = aggregation_logger
        self._logger = get_system_logger()

    @classmethod
    def from_config(
        cls,
        config: "AppConfig",
        aggregation_logger: "AggregationLogger | None" = None,
    ) -> "AttributeAggregationService":
        """Build the service and its aggregators from the loaded configuration.

        Raises:
            ConfigurationError: If an authority has an unknown type.
        """
        return cls(
            create_aggregators(config.authorities),
            abort_on_failure=config.aggregation.abort_on_failure,
            aggregation_logger=aggregation_logger,
        )

    @property
    def authority_ids(self) -> list[str]:
        return [aggregator.authority_id for aggregator in self.aggregators]

    def aggregate(
        self,
        service_provider_id: str,
        user_attributes: Sequence[UserAttribute],
        arp_attributes: ArpAttributes,
    ) -> list[UserAttribute]:
        """Aggregate attributes for a caller.

        Args:
            service_provider_id: Entity id of the requesting service provider.
            user_attributes: Caller's current attribute set.
            arp_attributes: Resolved attribute release policy.

        Returns:
            Attributes contributed by the authorities, each stamped with its source.

        Raises:
            AggregationAborted: Only when abort_on_failure is configured.
        """
        return self.aggregate_with_outcome(service_provider_id, user_attributes, arp_attributes).attributes

    def aggregate_with_outcome(
        self,
        service_provider_id: str,
        user_attributes: Sequence[UserAttribute],
        arp_attributes: ArpAttributes,
    ) -> AggregationOutcome:
        """Aggregate attributes and report what happened to every authority.

        Same as aggregate(), but returns the per-authority results as well.
        """
        running: list[UserAttribute] = list(user_attributes)
        contributions: list[UserAttribute] = []
        claimed: set[str] = set()
        results: list[AuthorityResult] = []

        for aggregator in self.aggregators:
            authority_id = aggregator.authority_id
            required = aggregator.configuration.required_input_attributes

            if not has_required_inputs(running, required):
                results.append(self._skipped(authority_id, required))
                continue

            try:
                fetched = aggregator.aggregate(running, arp_attributes, frozenset(claimed))
            except MissingRequiredInput:
                results.append(self._skipped(authority_id, required))
                continue
            except AuthorityError as e:
                self._logger.warning(
                    {
                        "event": "authority_failed",
                        "service_provider_id": service_provider_id,
                        "authority_id": authority_id,
                        "error_type": type(e).__name__,
                        "error_message": str(e),
                    }
                )
                if self.abort_on_failure:
                    raise AggregationAborted(authority_id, e) from e
                results.append(
                    AuthorityResult(
                        authority_id=authority_id,
                        status=AuthorityStatus.FAILED,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                )
                continue

            filtered = aggregator.filter_invalid_responses(fetched)
            dropped = len(fetched) - len(filtered)
            if dropped:
                self._logger.debug(
                    {"event": "invalid_attributes_dropped", "authority_id": authority_id, "count": dropped}
                )

            contributions.extend(filtered)
            claimed.update(attribute.name for attribute in filtered)
            running.extend(filtered)
            results.append(
                AuthorityResult(
                    authority_id=authority_id,
                    status=AuthorityStatus.SUCCEEDED,
                    attribute_count=len(filtered),
                )
            )

        invoked = [r for r in results if r.status is not AuthorityStatus.SKIPPED]
        fell_back = bool(invoked) and all(r.status is AuthorityStatus.FAILED for r in invoked)

        outcome = AggregationOutcome(
            service_provider_id=service_provider_id,
            attributes=list(user_attributes) if fell_back else contributions,
            authorities=results,
            fell_back_to_input=fell_back,
        )

        if fell_back:
            self._logger.warning(
                {
                    "event": "all_authorities_failed",
                    "service_provider_id": service_provider_id,
                    "authority_ids": [r.authority_id for r in invoked],
                }
            )
        if self._aggregation_logger is not None:
            self._aggregation_logger.log_aggregation(outcome)

        return outcome

    def _skipped(self, authority_id: str, required: Sequence[str]) -> AuthorityResult:
        self._logger.debug(
            {"event": "authority_skipped", "authority_id": authority_id, "required_inputs": list(required)}
        )
        return AuthorityResult(authority_id=authority_id, status=AuthorityStatus.SKIPPED)

    def close(self) -> None:
        """Close all aggregator transports."""
        for aggregator in self.aggregators:
            aggregator.close()
