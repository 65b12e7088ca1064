"""HTTP Basic gate for the aggregate endpoint.

The attribute consumer authenticates with a shared user/password pair from
ApiConfig. When no pair is configured the endpoint is open; the service is
then expected to sit behind a gateway that authenticates callers.

Comparisons are constant-time.
"""

from __future__ import annotations

__all__ = [
    "require_basic_auth",
    "validate_secret",
]

import hmac
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from attribute_aggregation.api.deps import get_config
from attribute_aggregation.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

_basic = HTTPBasic(auto_error=False)


def validate_secret(provided: str, expected: str) -> bool:
    """Compare two secrets in constant time.

    Args:
        provided: Value from the request.
        expected: Configured value.

    Returns:
        True if they match, False otherwise.
    """
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_basic_auth(
    request: Request,
    credentials: Annotated[HTTPBasicCredentials | None, Depends(_basic)],
) -> None:
    """Dependency enforcing HTTP Basic credentials when configured.

    Raises:
        HTTPException: 401 with a WWW-Authenticate challenge on missing or
            wrong credentials.
    """
    api_config = get_config(request).api
    user, password = api_config.user, api_config.password
    if user is None or password is None:
        return

    if credentials is not None:
        user_ok = validate_secret(credentials.username, user)
        password_ok = validate_secret(credentials.password, password)
        if user_ok and password_ok:
            return

    logger.warning(
        {
            "event": "basic_auth_rejected",
            "path": request.url.path,
            "client": request.client.host if request.client else None,
        }
    )
    raise HTTPException(
        status_code=401,
        detail="Invalid or missing credentials",
        headers={"WWW-Authenticate": "Basic"},
    )
