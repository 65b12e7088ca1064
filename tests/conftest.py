"""Shared fixtures for attribute-aggregation tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import pytest

from attribute_aggregation.config import AttributeAuthorityConfig
from attribute_aggregation.constants import EDU_PERSON_PRINCIPAL_NAME, SYSTEM_LOGGER_NAME
from attribute_aggregation.models import UserAttribute

FIXTURES_DIR = Path(__file__).parent / "fixtures"

PRINCIPAL_NAME = "urn:collab:person:example.com:admin"


class FakeBackend:
    """httpx.MockTransport handler that records requests.

    Returns `body` with `status_code`, or raises `error` if set. Both can be
    changed between calls.
    """

    def __init__(self, body: str = "[]", status_code: int = 200, error: Exception | None = None) -> None:
        self.body = body
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            content=self.body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture(autouse=True)
def reset_system_logger():
    """Drop handlers attached by CLI commands so they don't outlive the test."""
    yield
    logger = logging.getLogger(SYSTEM_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def read_fixture():
    """Read a fixture file as text."""

    def _read(relative_path: str) -> str:
        return (FIXTURES_DIR / relative_path).read_text(encoding="utf-8")

    return _read


@pytest.fixture
def load_fixture(read_fixture):
    """Read and parse a JSON fixture file."""

    def _load(relative_path: str) -> Any:
        return json.loads(read_fixture(relative_path))

    return _load


@pytest.fixture
def make_backend():
    """Factory for FakeBackend instances."""
    return FakeBackend


@pytest.fixture
def principal_input() -> list[UserAttribute]:
    """Caller input holding only the principal name."""
    return [UserAttribute(name=EDU_PERSON_PRINCIPAL_NAME, values=[PRINCIPAL_NAME])]


@pytest.fixture
def eduid_config() -> AttributeAuthorityConfig:
    """eduID authority with Basic credentials."""
    return AttributeAuthorityConfig(
        id="eduid",
        endpoint="http://localhost:8889/attribute_aggregation",
        user="user",
        password="password",
        required_input_attributes=[EDU_PERSON_PRINCIPAL_NAME],
    )


@pytest.fixture
def orcid_config() -> AttributeAuthorityConfig:
    """ORCID authority without credentials."""
    return AttributeAuthorityConfig(
        id="orcid",
        endpoint="http://localhost:8889/orcid",
        required_input_attributes=[EDU_PERSON_PRINCIPAL_NAME],
    )
