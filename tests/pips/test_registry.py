"""Tests for the aggregator registry."""

import pytest

from attribute_aggregation.config import AttributeAuthorityConfig
from attribute_aggregation.exceptions import ConfigurationError
from attribute_aggregation.pips.base import AttributeAggregator
from attribute_aggregation.pips.eduid import EduIDAttributeAggregator
from attribute_aggregation.pips.orcid import OrcidAttributeAggregator
from attribute_aggregation.pips.registry import create_aggregator, create_aggregators


class TestCreateAggregator:
    """Tests for selecting aggregator classes by authority type."""

    def test_type_defaults_to_id(self, eduid_config):
        # Act
        aggregator = create_aggregator(eduid_config)

        # Assert
        assert isinstance(aggregator, EduIDAttributeAggregator)
        assert aggregator.authority_id == "eduid"

    def test_explicit_type_overrides_id(self):
        # Arrange
        config = AttributeAuthorityConfig(id="orcid-test", type="orcid", endpoint="http://localhost/orcid")

        # Act
        aggregator = create_aggregator(config)

        # Assert
        assert isinstance(aggregator, OrcidAttributeAggregator)
        assert aggregator.authority_id == "orcid-test"

    def test_unknown_type_raises(self):
        # Arrange
        config = AttributeAuthorityConfig(id="voot", endpoint="http://localhost/voot")

        # Act & Assert
        with pytest.raises(ConfigurationError, match="Unknown attribute authority type 'voot'"):
            create_aggregator(config)

    def test_implementations_satisfy_protocol(self, eduid_config, orcid_config):
        # Act
        aggregators = [create_aggregator(eduid_config), create_aggregator(orcid_config)]

        # Assert
        assert all(isinstance(a, AttributeAggregator) for a in aggregators)


class TestCreateAggregators:
    """Tests for building aggregators in configuration order."""

    def test_preserves_configuration_order(self, eduid_config, orcid_config):
        # Act
        aggregators = create_aggregators([orcid_config, eduid_config])

        # Assert
        assert [a.authority_id for a in aggregators] == ["orcid", "eduid"]
