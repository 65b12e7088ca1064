"""Build the aggregation service from loaded configuration.

Shared by the API server and the CLI so both wire logging and aggregators
the same way.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from attribute_aggregation.aggregation.orchestrator import AttributeAggregationService
from attribute_aggregation.constants import AGGREGATION_LOG_FILENAME
from attribute_aggregation.telemetry.audit.aggregation_logger import create_aggregation_logger
from attribute_aggregation.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from attribute_aggregation.config import AppConfig


def create_aggregation_service(config: "AppConfig") -> AttributeAggregationService:
    """Create the orchestrator with its aggregators and audit logger.

    The audit logger is only attached when config.logging.log_dir is set.

    Raises:
        ConfigurationError: If an authority has an unknown type.
    """
    aggregation_logger = None
    if config.logging.log_dir:
        aggregation_logger = create_aggregation_logger(
            Path(config.logging.log_dir).expanduser() / AGGREGATION_LOG_FILENAME
        )

    service = AttributeAggregationService.from_config(config, aggregation_logger=aggregation_logger)

    get_system_logger().info(
        {
            "event": "aggregation_service_created",
            "authority_ids": service.authority_ids,
            "abort_on_failure": service.abort_on_failure,
        }
    )
    return service
