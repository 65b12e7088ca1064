"""Tests for the ORCID attribute aggregator and ORCID iD validation.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from unittest.mock import MagicMock

import pytest

from attribute_aggregation.config import AttributeAuthorityConfig
from attribute_aggregation.constants import EDU_PERSON_PRINCIPAL_NAME, ORCID
from attribute_aggregation.exceptions import InvalidAttributeValue, MalformedResponse
from attribute_aggregation.models import ArpValue, UserAttribute
from attribute_aggregation.pips.client import AuthorityClient
from attribute_aggregation.pips.orcid import (
    OrcidAttributeAggregator,
    extract_orcid,
    is_valid_orcid,
    orcid_check_character,
)

# --- Fixtures ---


@pytest.fixture
def orcid_backend(make_backend):
    return make_backend()


@pytest.fixture
def subject(orcid_config, orcid_backend) -> OrcidAttributeAggregator:
    return OrcidAttributeAggregator(orcid_config, client=AuthorityClient(orcid_config, orcid_backend.transport))


@pytest.fixture
def fetch(subject, orcid_backend, read_fixture, principal_input):
    """Aggregate then filter, like the orchestrator does."""

    def _fetch(fixture: str) -> list[UserAttribute]:
        orcid_backend.body = read_fixture(fixture)
        return subject.filter_invalid_responses(subject.aggregate(principal_input, {}))

    return _fetch


# --- Identifier validation ---


class TestOrcidValidation:
    """Tests for ORCID iD format and check character."""

    @pytest.mark.parametrize(
        "identifier",
        ["0000-0002-4926-2859", "0000-0002-1694-233X", "0000-0001-5109-3700"],
    )
    def test_valid_identifiers(self, identifier):
        assert is_valid_orcid(identifier) is True

    @pytest.mark.parametrize(
        "identifier",
        [
            "0000-0002-4926-2858",  # wrong check digit
            "0000-0002-4926-285",  # too short
            "0000-0002-4926-2859-1",  # too long
            "0000000249262859",  # no hyphens
            "0000-0002-1694-233x",  # lowercase x
            "http://orcid.org/0000-0002-4926-2859",  # URL, not bare
            "",
        ],
    )
    def test_invalid_identifiers(self, identifier):
        assert is_valid_orcid(identifier) is False

    def test_check_character_can_be_x(self):
        assert orcid_check_character("000000021694233") == "X"

    def test_extract_from_url(self):
        assert extract_orcid("https://orcid.org/0000-0002-4926-2859") == "0000-0002-4926-2859"


# --- aggregate + filter ---


class TestOrcidAggregation:
    """Tests for OrcidAttributeAggregator against canned backend responses."""

    def test_happy_flow(self, fetch):
        # Act
        result = fetch("orcid/response_success.json")

        # Assert
        assert len(result) == 1
        attribute = result[0]
        assert attribute.name == ORCID
        assert attribute.values == ["http://orcid.org/0000-0002-4926-2859"]
        assert attribute.source == "orcid"

    def test_trailing_x(self, fetch):
        # Act
        result = fetch("orcid/response_trailing_x.json")

        # Assert
        assert len(result) == 1
        assert result[0].values == ["http://orcid.org/0000-0002-1694-233X"]

    def test_wrong_orcid_is_filtered(self, fetch):
        # Act
        result = fetch("orcid/response_wrong_orcid.json")

        # Assert
        assert result == []

    def test_empty_response(self, fetch):
        # Act
        result = fetch("orcid/response_empty.json")

        # Assert
        assert result == []

    def test_empty_body(self, subject, orcid_backend, principal_input):
        # Arrange
        orcid_backend.body = ""

        # Act
        result = subject.filter_invalid_responses(subject.aggregate(principal_input, {}))

        # Assert
        assert result == []

    def test_non_array_body_raises_malformed(self, subject, orcid_backend, principal_input):
        # Arrange
        orcid_backend.body = '{"orcid": "0000-0002-4926-2859"}'

        # Act & Assert
        with pytest.raises(MalformedResponse):
            subject.aggregate(principal_input, {})

    def test_custom_canonical_base_url(self, make_backend, read_fixture, principal_input):
        # Arrange
        config = AttributeAuthorityConfig(
            id="orcid",
            endpoint="http://localhost:8889/orcid",
            required_input_attributes=[EDU_PERSON_PRINCIPAL_NAME],
            options={"canonical_base_url": "https://sandbox.orcid.org/"},
        )
        backend = make_backend(body=read_fixture("orcid/response_success.json"))
        subject = OrcidAttributeAggregator(config, client=AuthorityClient(config, backend.transport))

        # Act
        result = subject.filter_invalid_responses(subject.aggregate(principal_input, {}))

        # Assert
        assert result[0].values == ["https://sandbox.orcid.org/0000-0002-4926-2859"]


# --- filter_invalid_responses ---


class TestFilterInvalidResponses:
    """Tests for OrcidAttributeAggregator.filter_invalid_responses."""

    def test_keeps_valid_drops_invalid_values(self, subject):
        # Arrange
        attributes = [
            UserAttribute(
                name=ORCID,
                values=["http://orcid.org/0000-0002-4926-2859", "http://orcid.org/0000-0002-4926-2858"],
                source="orcid",
            )
        ]

        # Act
        result = subject.filter_invalid_responses(attributes)

        # Assert
        assert result == [
            UserAttribute(name=ORCID, values=["http://orcid.org/0000-0002-4926-2859"], source="orcid")
        ]

    def test_other_attribute_names_pass_through(self, subject):
        # Arrange
        attributes = [UserAttribute(name=EDU_PERSON_PRINCIPAL_NAME, values=["not-an-orcid"], source="orcid")]

        # Act
        result = subject.filter_invalid_responses(attributes)

        # Assert
        assert result == attributes

    def test_is_idempotent(self, subject):
        # Arrange
        attributes = [
            UserAttribute(name=ORCID, values=["http://orcid.org/0000-0002-1694-233X", "bogus"], source="orcid"),
            UserAttribute(name=ORCID, values=["0000-0002-4926-285"], source="orcid"),
        ]

        # Act
        once = subject.filter_invalid_responses(attributes)
        twice = subject.filter_invalid_responses(once)

        # Assert
        assert once == twice
        assert len(once) == 1

    def test_dropped_value_is_logged(self, subject):
        # Arrange
        attributes = [UserAttribute(name=ORCID, values=["bogus"], source="orcid")]
        subject._logger = MagicMock()

        # Act
        result = subject.filter_invalid_responses(attributes)

        # Assert
        assert result == []
        subject._logger.debug.assert_called_once_with({"event": "invalid_orcid_dropped", "authority_id": "orcid"})

    def test_validate_raises_invalid_attribute_value(self, subject):
        with pytest.raises(InvalidAttributeValue, match="Not a valid ORCID iD"):
            subject._validate("http://orcid.org/0000-0002-4926-2858")


# --- Fallback preservation ---


class TestOrcidFallback:
    """ORCID preserves ARP-sanctioned originals like every authority."""

    def test_preserves_orcid_when_backend_has_none(self, subject, orcid_backend):
        # Arrange
        orcid_backend.body = "[]"
        input_attributes = [
            UserAttribute(name=EDU_PERSON_PRINCIPAL_NAME, values=["urn:collab:person:example.com:admin"]),
            UserAttribute(name=ORCID, values=["http://orcid.org/0000-0002-4926-2859"]),
        ]
        arp = {ORCID: [ArpValue(source="orcid")]}

        # Act
        result = subject.filter_invalid_responses(subject.aggregate(input_attributes, arp))

        # Assert
        assert result == [
            UserAttribute(name=ORCID, values=["http://orcid.org/0000-0002-4926-2859"], source="orcid")
        ]
