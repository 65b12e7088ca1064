"""Application configuration for attribute-aggregation.

Defines configuration models for attribute authorities, aggregation behavior,
logging, and the HTTP API. Configuration is loaded once at startup and is
read-only afterwards; the loaded AppConfig is passed explicitly to the
orchestrator and aggregators.

Example usage:
    # Load from config file
    config = AppConfig.load_from_files(config_path)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from attribute_aggregation.constants import (
    CONFIG_DIR,
    CONFIG_FILENAME,
    CONFIG_PATH_ENV_VAR,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_AUTHORITY_TIMEOUT_SECONDS,
    DEFAULT_CACHE_TTL_SECONDS,
    MAX_AUTHORITY_TIMEOUT_SECONDS,
    MAX_CACHE_TTL_SECONDS,
    MIN_AUTHORITY_TIMEOUT_SECONDS,
)
from attribute_aggregation.utils.file_helpers import load_validated_json, require_file_exists


# =============================================================================
# Attribute Authorities
# =============================================================================


class AttributeAuthorityConfig(BaseModel):
    """Configuration for one attribute authority backend.

    Attributes:
        id: Authority identifier, stamped as source on every emitted attribute.
        type: Aggregator variant from the registry (defaults to id).
        endpoint: URL queried with a single identifier parameter.
        user: Optional HTTP Basic user name.
        password: Optional HTTP Basic password.
        required_input_attributes: Attribute names that must be present with a
            non-empty value before this authority is called.
        timeout_seconds: Per-call timeout (1-300).
        cache_ttl_seconds: Response cache lifetime; 0 disables caching.
        options: Authority-specific options.
    """

    id: str = Field(min_length=1)
    type: str | None = None
    endpoint: str
    user: str | None = None
    password: str | None = None
    required_input_attributes: list[str] = Field(default_factory=list)
    timeout_seconds: int = Field(
        default=DEFAULT_AUTHORITY_TIMEOUT_SECONDS,
        ge=MIN_AUTHORITY_TIMEOUT_SECONDS,
        le=MAX_AUTHORITY_TIMEOUT_SECONDS,
    )
    cache_ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        ge=0,
        le=MAX_CACHE_TTL_SECONDS,
    )
    options: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def credentials_come_in_pairs(self) -> Self:
        """Reject a user without password or a password without user."""
        if (self.user is None) != (self.password is None):
            raise ValueError("user and password must be configured together")
        return self

    @property
    def aggregator_type(self) -> str:
        """Registry key used to select the aggregator implementation."""
        return self.type or self.id

    @property
    def credentials(self) -> tuple[str, str] | None:
        """HTTP Basic credentials as (user, password), or None."""
        if self.user is None or self.password is None:
            return None
        return self.user, self.password


# =============================================================================
# Aggregation Behavior
# =============================================================================


class AggregationConfig(BaseModel):
    """Orchestrator behavior.

    Attributes:
        abort_on_failure: If True, one unavailable or malformed authority aborts
            the whole aggregation instead of being skipped.
    """

    abort_on_failure: bool = False

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    System events always go to stderr. When log_dir is set, logs are also
    written as JSON lines:
        <log_dir>/
        ├── system.jsonl          # Operational events (authority failures, startup)
        └── aggregations.jsonl    # One entry per aggregation request

    Attributes:
        log_dir: Base directory for log files (None disables file logging).
        log_level: Logging level (DEBUG or INFO).
    """

    log_dir: str | None = None
    log_level: Literal["DEBUG", "INFO"] = "INFO"

    model_config = ConfigDict(frozen=True)


# =============================================================================
# API Configuration
# =============================================================================


class ApiConfig(BaseModel):
    """HTTP API settings.

    Attributes:
        host: Bind address.
        port: Bind port.
        user: HTTP Basic user required for the aggregate endpoint.
        password: HTTP Basic password required for the aggregate endpoint.
    """

    host: str = DEFAULT_API_HOST
    port: int = Field(default=DEFAULT_API_PORT, ge=1, le=65535)
    user: str | None = None
    password: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def requires_basic_auth(self) -> bool:
        return self.user is not None and self.password is not None


class AppConfig(BaseModel):
    """Main application configuration for attribute-aggregation.

    Attributes:
        authorities: Attribute authorities, invoked in this order.
        aggregation: Orchestrator behavior.
        logging: Logging configuration.
        api: HTTP API settings.
    """

    authorities: list[AttributeAuthorityConfig] = Field(default_factory=list)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def unique_authority_ids(self) -> Self:
        """Authority ids are provenance markers and must be unique."""
        seen: set[str] = set()
        for authority in self.authorities:
            if authority.id in seen:
                raise ValueError(f"Duplicate attribute authority id: {authority.id}")
            seen.add(authority.id)
        return self

    @classmethod
    def load_from_files(cls, config_path: Path) -> "AppConfig":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config file.

        Returns:
            AppConfig instance with loaded configuration.

        Raises:
            ConfigurationError: If the config file is missing or invalid.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(
            config_path,
            cls,
            file_type="config",
            recovery_hint="Fix the file or point ATTRIBUTE_AGGREGATION_CONFIG at a valid one.",
            encoding="utf-8",
        )


def get_config_path() -> Path:
    """Get the config file path.

    Returns ATTRIBUTE_AGGREGATION_CONFIG if set, otherwise the file in the
    OS-appropriate config directory.
    """
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(CONFIG_DIR) / CONFIG_FILENAME
