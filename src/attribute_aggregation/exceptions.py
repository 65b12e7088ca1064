"""Exception hierarchy for attribute-aggregation.

Error kinds and how the orchestrator treats them:

- MissingRequiredInput: authority is skipped, never surfaced to the caller
- BackendUnavailable: timeout, connection failure or error status; the
  authority contributes nothing and the pipeline continues
- MalformedResponse: unparseable body; handled like BackendUnavailable
- InvalidAttributeValue: raised and caught inside filter_invalid_responses,
  the offending value is dropped and never reaches the caller
- AggregationAborted: only raised when abort_on_failure is configured
- ConfigurationError: invalid configuration, raised at startup
"""

from __future__ import annotations

__all__ = [
    "AggregationAborted",
    "AttributeAggregationError",
    "AuthorityError",
    "BackendUnavailable",
    "ConfigurationError",
    "InvalidAttributeValue",
    "MalformedResponse",
    "MissingRequiredInput",
]


class AttributeAggregationError(Exception):
    """Base class for all attribute-aggregation errors."""


class ConfigurationError(AttributeAggregationError):
    """Configuration file is missing, unreadable or invalid."""


class AuthorityError(AttributeAggregationError):
    """An attribute authority could not produce a usable response.

    Attributes:
        authority_id: Identifier of the authority that failed.
    """

    def __init__(self, authority_id: str, message: str) -> None:
        super().__init__(f"[{authority_id}] {message}")
        self.authority_id = authority_id


class MissingRequiredInput(AuthorityError):
    """Required input attribute is absent or has no non-empty value."""


class BackendUnavailable(AuthorityError):
    """Authority timed out, refused the connection or returned an error status."""


class MalformedResponse(AuthorityError):
    """Authority response body is not a JSON array of attributes."""


class InvalidAttributeValue(AttributeAggregationError):
    """Attribute value fails authority-specific validation."""


class AggregationAborted(AttributeAggregationError):
    """Strict mode: an authority failure aborted the whole aggregation.

    Attributes:
        authority_id: Identifier of the authority whose failure aborted the run.
    """

    def __init__(self, authority_id: str, cause: AuthorityError) -> None:
        super().__init__(f"Aggregation aborted by failure of authority '{authority_id}': {cause}")
        self.authority_id = authority_id
