"""Config loading shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import click

from attribute_aggregation.config import AppConfig, get_config_path
from attribute_aggregation.exceptions import ConfigurationError
from attribute_aggregation.telemetry.system.system_logger import configure_system_logger


def load_config(config_path: Path | None) -> AppConfig:
    """Load configuration and configure the system logger.

    Args:
        config_path: Explicit --config path, or None for the default location.

    Raises:
        click.ClickException: If the configuration is missing or invalid.
    """
    path = config_path or get_config_path()
    try:
        config = AppConfig.load_from_files(path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    configure_system_logger(config.logging)
    return config
