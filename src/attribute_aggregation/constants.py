"""Application-wide constants for attribute-aggregation.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

import os

from platformdirs import user_config_dir

# ============================================================================
# Configuration Location
# ============================================================================

# OS-specific config directory:
# - macOS: ~/Library/Application Support/attribute-aggregation/
# - Linux: ~/.config/attribute-aggregation/
# - Windows: %APPDATA%\attribute-aggregation\
APP_NAME: str = "attribute-aggregation"
CONFIG_DIR: str = user_config_dir(APP_NAME)
CONFIG_FILENAME: str = "attribute_aggregation_config.json"

# Environment variable that overrides the config file location
CONFIG_PATH_ENV_VAR: str = "ATTRIBUTE_AGGREGATION_CONFIG"

# ============================================================================
# Well-known Attribute Names
# ============================================================================

EDU_PERSON_PRINCIPAL_NAME: str = "urn:mace:dir:attribute-def:eduPersonPrincipalName"
ORCID: str = "urn:mace:dir:attribute-def:eduPersonOrcid"

# ============================================================================
# Attribute Authority Transport
# ============================================================================

# Default per-authority request timeout (seconds)
DEFAULT_AUTHORITY_TIMEOUT_SECONDS: int = 30

# Timeout validation range (seconds)
MIN_AUTHORITY_TIMEOUT_SECONDS: int = 1
MAX_AUTHORITY_TIMEOUT_SECONDS: int = 300  # 5 minutes

# Response cache is disabled unless an authority sets cache_ttl_seconds > 0
DEFAULT_CACHE_TTL_SECONDS: int = 0
MAX_CACHE_TTL_SECONDS: int = 3600
MAX_CACHE_ENTRIES: int = 1024  # per authority; oldest entry evicted first

# Query parameter carrying the principal name to eduID and ORCID lookups
EDU_PERSON_PRINCIPAL_NAME_PARAM: str = "edu_person_principal_name"

# ============================================================================
# ORCID
# ============================================================================

# Canonical ORCID URL prefix emitted for valid identifiers
ORCID_CANONICAL_BASE_URL: str = "http://orcid.org/"

# ============================================================================
# API Server
# ============================================================================

DEFAULT_API_HOST: str = "127.0.0.1"
DEFAULT_API_PORT: int = int(os.environ.get("ATTRIBUTE_AGGREGATION_PORT", "8080"))

# Route prefix kept compatible with existing attribute consumers
API_PREFIX: str = "/aa/api"

# ============================================================================
# Logging
# ============================================================================

SYSTEM_LOGGER_NAME: str = "attribute-aggregation.system"
AGGREGATION_AUDIT_LOGGER_NAME: str = "attribute-aggregation.audit.aggregations"
SYSTEM_LOG_FILENAME: str = "system.jsonl"
AGGREGATION_LOG_FILENAME: str = "aggregations.jsonl"
