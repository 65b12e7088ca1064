"""Per-request aggregation outcome.

AggregationOutcome records what happened to every configured authority
during one aggregation so failures are observable (audit log, API callers)
without aborting the request.
"""

from __future__ import annotations

__all__ = [
    "AggregationOutcome",
    "AuthorityResult",
    "AuthorityStatus",
]

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from attribute_aggregation.models import UserAttribute


class AuthorityStatus(str, Enum):
    """What happened to one authority in one aggregation."""

    SKIPPED = "skipped"  # required input missing, no call made
    SUCCEEDED = "succeeded"
    FAILED = "failed"  # BackendUnavailable or MalformedResponse


@dataclass(frozen=True)
class AuthorityResult:
    """Result of visiting one authority.

    Attributes:
        authority_id: Authority identifier.
        status: Skipped, succeeded or failed.
        attribute_count: Attributes contributed after filtering.
        error_type: Exception class name when failed.
        error_message: Exception message when failed.
    """

    authority_id: str
    status: AuthorityStatus
    attribute_count: int = 0
    error_type: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "authority_id": self.authority_id,
            "status": self.status.value,
            "attribute_count": self.attribute_count,
        }
        if self.error_type is not None:
            data["error_type"] = self.error_type
            data["error_message"] = self.error_message
        return data


@dataclass(frozen=True)
class AggregationOutcome:
    """Final attributes plus per-authority results for one request.

    Attributes:
        service_provider_id: Service provider the aggregation ran for.
        attributes: Final attribute list returned to the caller.
        authorities: One result per configured authority, in configuration order.
        fell_back_to_input: True if every invoked authority failed and the
            caller's input was returned unchanged.
    """

    service_provider_id: str
    attributes: list[UserAttribute]
    authorities: list[AuthorityResult] = field(default_factory=list)
    fell_back_to_input: bool = False

    @property
    def failed(self) -> list[AuthorityResult]:
        return [r for r in self.authorities if r.status is AuthorityStatus.FAILED]

    @property
    def succeeded(self) -> list[AuthorityResult]:
        return [r for r in self.authorities if r.status is AuthorityStatus.SUCCEEDED]
