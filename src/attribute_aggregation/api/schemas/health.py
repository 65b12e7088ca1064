"""Health endpoint schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class AuthorityInfo(BaseModel):
    """Public view of a configured authority (no endpoint or credentials)."""

    id: str
    type: str
    required_input_attributes: list[str]


class HealthResponse(BaseModel):
    """Service health and configured authorities."""

    status: Literal["UP"] = "UP"
    version: str
    authorities: list[AuthorityInfo]
