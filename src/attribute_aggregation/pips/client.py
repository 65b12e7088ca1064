"""HTTP client for attribute authority backends.

One AuthorityClient is built per authority at startup and shared by all
requests. It wraps an httpx.Client configured once with the authority's
timeout, HTTP Basic credentials and Accept header; httpx.Client is safe to
use from multiple threads.

Outbound contract:
    GET <endpoint>?<param>=<identifier>
    Accept: application/json
    Authorization: Basic ... (if credentials configured)
    -> JSON array of {name, values, source?} (or an empty array)

Optional response cache:
- Enabled when cache_ttl_seconds > 0
- Keyed by the exact (parameter, identifier) of the request, so one caller's
  response is never served for another identifier
- Only successful responses are cached
- Holds at most max_cache_entries responses; the oldest is evicted first
- Guarded by a threading.Lock for concurrent requests
"""

from __future__ import annotations

__all__ = ["AuthorityClient"]

import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from attribute_aggregation.constants import MAX_CACHE_ENTRIES
from attribute_aggregation.exceptions import BackendUnavailable, MalformedResponse
from attribute_aggregation.models import UserAttribute
from attribute_aggregation.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from attribute_aggregation.config import AttributeAuthorityConfig

_ATTRIBUTE_LIST = TypeAdapter(list[UserAttribute])


@dataclass
class _CachedResponse:
    """Cached backend response with expiration tracking."""

    attributes: tuple[UserAttribute, ...]
    cached_at: float  # monotonic timestamp

    def is_expired(self, ttl: float) -> bool:
        """Check if cache entry has expired."""
        return time.monotonic() - self.cached_at > ttl


class AuthorityClient:
    """Transport for one attribute authority.

    Usage:
        client = AuthorityClient(authority_config)
        attributes = client.fetch_attributes("edu_person_principal_name", "urn:collab:...")

    Raises:
        BackendUnavailable: On timeout, connection failure or non-2xx status.
        MalformedResponse: If the body is not a JSON array of attributes.
    """

    def __init__(
        self,
        config: "AttributeAuthorityConfig",
        transport: httpx.BaseTransport | None = None,
        max_cache_entries: int = MAX_CACHE_ENTRIES,
    ) -> None:
        """Initialize the client.

        Args:
            config: Authority configuration (endpoint, credentials, timeout, cache TTL).
            transport: Optional httpx transport (tests use httpx.MockTransport).
            max_cache_entries: Upper bound on cached responses.
        """
        self._config = config
        credentials = config.credentials
        self._client = httpx.Client(
            timeout=httpx.Timeout(float(config.timeout_seconds)),
            auth=httpx.BasicAuth(*credentials) if credentials else None,
            headers={"Accept": "application/json"},
            transport=transport,
        )
        self._cache: dict[tuple[str, str], _CachedResponse] = {}
        self._max_cache_entries = max_cache_entries
        self._lock = threading.Lock()
        self._logger = get_system_logger()

    @property
    def authority_id(self) -> str:
        return self._config.id

    def fetch_attributes(self, parameter: str, identifier: str) -> list[UserAttribute]:
        """Query the authority for the attributes of identifier.

        Args:
            parameter: Query parameter name carrying the identifier.
            identifier: Value of the required input attribute.

        Returns:
            Attributes as returned by the backend (unstamped, unfiltered).

        Raises:
            BackendUnavailable: On timeout, connection failure or non-2xx status.
            MalformedResponse: If the body cannot be parsed.
        """
        key = (parameter, identifier)
        ttl = self._config.cache_ttl_seconds

        if ttl > 0:
            with self._lock:
                cached = self._cache.get(key)
                if cached is not None and not cached.is_expired(ttl):
                    self._logger.debug({"event": "authority_cache_hit", "authority_id": self.authority_id})
                    return list(cached.attributes)

        attributes = self._request(parameter, identifier)

        if ttl > 0:
            with self._lock:
                self._evict_expired(ttl)
                self._cache.pop(key, None)
                self._evict_oldest()
                self._cache[key] = _CachedResponse(attributes=tuple(attributes), cached_at=time.monotonic())

        return attributes

    def _request(self, parameter: str, identifier: str) -> list[UserAttribute]:
        try:
            response = self._client.get(self._config.endpoint, params={parameter: identifier})
        except httpx.TimeoutException as e:
            raise BackendUnavailable(
                self.authority_id, f"Request timed out after {self._config.timeout_seconds}s"
            ) from e
        except httpx.HTTPError as e:
            raise BackendUnavailable(self.authority_id, f"Request failed: {type(e).__name__}: {e}") from e

        if not response.is_success:
            raise BackendUnavailable(self.authority_id, f"Unexpected status {response.status_code}")

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> list[UserAttribute]:
        # An empty body is treated like an empty array
        if not response.content.strip():
            return []

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse(self.authority_id, f"Response is not JSON: {e}") from e

        if not isinstance(data, list):
            raise MalformedResponse(self.authority_id, f"Expected a JSON array, got {type(data).__name__}")

        try:
            return _ATTRIBUTE_LIST.validate_python(data)
        except ValidationError as e:
            raise MalformedResponse(
                self.authority_id, f"Response is not a list of attributes ({e.error_count()} errors)"
            ) from e

    def _evict_expired(self, ttl: float) -> None:
        """Drop expired entries. Caller must hold the lock."""
        for key in [k for k, v in self._cache.items() if v.is_expired(ttl)]:
            del self._cache[key]

    def _evict_oldest(self) -> None:
        """Make room for one entry. Caller must hold the lock."""
        # dicts keep insertion order, so the first key is the oldest entry
        while self._cache and len(self._cache) >= self._max_cache_entries:
            del self._cache[next(iter(self._cache))]

    def clear_cache(self) -> None:
        """Forget all cached responses."""
        with self._lock:
            self._cache.clear()

    def close(self) -> None:
        """Drop cached responses and close the underlying HTTP connection pool."""
        self.clear_cache()
        self._client.close()
