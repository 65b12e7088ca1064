"""Tests for the attribute authority HTTP client.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from unittest.mock import patch

import httpx
import pytest

from attribute_aggregation.config import AttributeAuthorityConfig
from attribute_aggregation.exceptions import BackendUnavailable, MalformedResponse
from attribute_aggregation.models import UserAttribute
from attribute_aggregation.pips.client import AuthorityClient

PARAM = "edu_person_principal_name"


@pytest.fixture
def cached_config(eduid_config) -> AttributeAuthorityConfig:
    return eduid_config.model_copy(update={"cache_ttl_seconds": 60})


# --- Responses ---


class TestResponseParsing:
    """Tests for parsing authority responses."""

    def test_parses_attribute_array(self, eduid_config, make_backend):
        # Arrange
        backend = make_backend(body='[{"name": "a", "values": ["1", "2"], "source": "x"}]')
        client = AuthorityClient(eduid_config, backend.transport)

        # Act
        result = client.fetch_attributes(PARAM, "urn")

        # Assert
        assert result == [UserAttribute(name="a", values=["1", "2"], source="x")]

    @pytest.mark.parametrize("body", ["[]", "", "  \n"])
    def test_empty_responses(self, eduid_config, make_backend, body):
        # Arrange
        client = AuthorityClient(eduid_config, make_backend(body=body).transport)

        # Act & Assert
        assert client.fetch_attributes(PARAM, "urn") == []

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            '{"name": "a", "values": []}',
            '[{"values": ["no name"]}]',
            '[{"name": "a", "values": [null]}]',
            '["just a string"]',
        ],
    )
    def test_malformed_bodies(self, eduid_config, make_backend, body):
        # Arrange
        client = AuthorityClient(eduid_config, make_backend(body=body).transport)

        # Act & Assert
        with pytest.raises(MalformedResponse) as exc_info:
            client.fetch_attributes(PARAM, "urn")
        assert exc_info.value.authority_id == "eduid"


# --- Failures ---


class TestTransportFailures:
    """Network failures and error statuses map to BackendUnavailable."""

    @pytest.mark.parametrize("status_code", [500, 503, 404, 401])
    def test_error_status(self, eduid_config, make_backend, status_code):
        # Arrange
        client = AuthorityClient(eduid_config, make_backend(status_code=status_code).transport)

        # Act & Assert
        with pytest.raises(BackendUnavailable, match=str(status_code)):
            client.fetch_attributes(PARAM, "urn")

    def test_timeout(self, eduid_config, make_backend):
        # Arrange
        client = AuthorityClient(eduid_config, make_backend(error=httpx.ConnectTimeout("slow")).transport)

        # Act & Assert
        with pytest.raises(BackendUnavailable, match="timed out after 30s"):
            client.fetch_attributes(PARAM, "urn")

    def test_connection_refused(self, eduid_config, make_backend):
        # Arrange
        client = AuthorityClient(eduid_config, make_backend(error=httpx.ConnectError("refused")).transport)

        # Act & Assert
        with pytest.raises(BackendUnavailable, match="ConnectError"):
            client.fetch_attributes(PARAM, "urn")

    def test_timeout_is_configured_per_authority(self, eduid_config):
        # Arrange
        config = eduid_config.model_copy(update={"timeout_seconds": 5})

        # Act
        with patch("attribute_aggregation.pips.client.httpx.Client") as client_cls:
            AuthorityClient(config)

        # Assert
        timeout = client_cls.call_args.kwargs["timeout"]
        assert timeout == httpx.Timeout(5.0)

    def test_no_auth_without_credentials(self, orcid_config, make_backend):
        # Arrange
        backend = make_backend()
        client = AuthorityClient(orcid_config, backend.transport)

        # Act
        client.fetch_attributes(PARAM, "urn")

        # Assert
        assert "Authorization" not in backend.requests[0].headers


# --- Cache ---


class TestResponseCache:
    """Tests for the optional per-authority response cache."""

    def test_disabled_by_default(self, eduid_config, make_backend):
        # Arrange
        backend = make_backend()
        client = AuthorityClient(eduid_config, backend.transport)

        # Act
        client.fetch_attributes(PARAM, "urn")
        client.fetch_attributes(PARAM, "urn")

        # Assert
        assert len(backend.requests) == 2

    def test_same_identifier_is_served_from_cache(self, cached_config, make_backend):
        # Arrange
        backend = make_backend(body='[{"name": "a", "values": ["1"]}]')
        client = AuthorityClient(cached_config, backend.transport)

        # Act
        first = client.fetch_attributes(PARAM, "urn:one")
        second = client.fetch_attributes(PARAM, "urn:one")

        # Assert
        assert first == second
        assert len(backend.requests) == 1

    def test_different_identifiers_are_not_shared(self, cached_config, make_backend):
        # Arrange
        backend = make_backend()
        client = AuthorityClient(cached_config, backend.transport)

        # Act
        client.fetch_attributes(PARAM, "urn:one")
        client.fetch_attributes(PARAM, "urn:two")

        # Assert
        assert len(backend.requests) == 2

    def test_failures_are_not_cached(self, cached_config, make_backend):
        # Arrange
        backend = make_backend(status_code=500)
        client = AuthorityClient(cached_config, backend.transport)
        with pytest.raises(BackendUnavailable):
            client.fetch_attributes(PARAM, "urn")
        backend.status_code = 200

        # Act
        result = client.fetch_attributes(PARAM, "urn")

        # Assert
        assert result == []
        assert len(backend.requests) == 2

    def test_expired_entry_is_refetched(self, cached_config, make_backend):
        # Arrange
        backend = make_backend()
        client = AuthorityClient(cached_config, backend.transport)

        client.fetch_attributes(PARAM, "urn")
        client.fetch_attributes(PARAM, "urn")
        client._cache[(PARAM, "urn")].cached_at -= 61

        # Act
        client.fetch_attributes(PARAM, "urn")

        # Assert
        assert len(backend.requests) == 2

    def test_close_drops_cached_responses(self, cached_config, make_backend):
        # Arrange
        client = AuthorityClient(cached_config, make_backend().transport)
        client.fetch_attributes(PARAM, "urn")

        # Act
        client.close()

        # Assert
        assert client._cache == {}

    def test_oldest_entry_is_evicted_when_full(self, cached_config, make_backend):
        # Arrange
        backend = make_backend()
        client = AuthorityClient(cached_config, backend.transport, max_cache_entries=2)
        client.fetch_attributes(PARAM, "urn:one")
        client.fetch_attributes(PARAM, "urn:two")

        # Act
        client.fetch_attributes(PARAM, "urn:three")
        client.fetch_attributes(PARAM, "urn:two")
        client.fetch_attributes(PARAM, "urn:one")

        # Assert
        assert len(client._cache) == 2
        assert len(backend.requests) == 4
