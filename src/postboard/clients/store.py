"""Client for the remote REST object store.

The store is a generic collection API (MockAPI style) that holds ``users``
and ``posts``. This module provides:

- Immutable store configuration resolved once at startup
- A lazily-created ``httpx.AsyncClient`` shared by all repositories
- Request metrics for monitoring
- Translation of transport failures into ``StoreError``
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from postboard.core.errors import AuthenticationError, ConfigurationError, StoreError
from postboard.core.settings import Settings

# Configure logger for this module
logger = logging.getLogger(__name__)

# HTTP status codes
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass
class StoreMetrics:
    """Running counters for store traffic, reported by the system endpoints."""

    request_count: int = 0
    failure_count: int = 0
    total_seconds: float = 0.0
    slowest_seconds: float = 0.0
    failures: Counter[str] = field(default_factory=Counter)
    by_collection: Counter[str] = field(default_factory=Counter)

    def record(self, path: str, seconds: float, failure: str | None = None) -> None:
        """Count one request against the collection named by ``path``."""
        self.request_count += 1
        self.total_seconds += seconds
        self.slowest_seconds = max(self.slowest_seconds, seconds)
        self.by_collection[path.strip("/").split("/", 1)[0] or "/"] += 1
        if failure:
            self.failure_count += 1
            self.failures[failure] += 1

    def snapshot(self) -> dict[str, Any]:
        """Return the counters as plain JSON-ready values."""
        average = self.total_seconds / self.request_count if self.request_count else 0.0
        return {
            "request_count": self.request_count,
            "failure_count": self.failure_count,
            "average_response_time": round(average, 6),
            "max_response_time": round(self.slowest_seconds, 6),
            "failures": dict(self.failures),
            "requests_by_collection": dict(self.by_collection),
        }


@dataclass(frozen=True)
class StoreConfig:
    """Immutable configuration for store access."""

    base_url: str
    timeout_seconds: float


def load_store_config(app_settings: Settings) -> StoreConfig:
    """Build the store configuration from settings.

    Raises:
        ConfigurationError: If no store location is configured.
    """
    base_url = app_settings.resolved_store_url
    if not base_url:
        raise ConfigurationError("STORE_BASE_URL")
    return StoreConfig(
        base_url=base_url,
        timeout_seconds=float(app_settings.store_timeout_seconds),
    )


class StoreClient:
    """HTTP client wrapper for the remote object store."""

    def __init__(
        self,
        config: StoreConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()
        self.metrics = StoreMetrics()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    headers=JSON_HEADERS,
                    transport=self._transport,
                )
        return self._client

    def url_for(self, path: str) -> str:
        """Return the absolute URL for a store path, used in error context."""
        return f"{self.config.base_url}{path}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request to the store.

        Status codes are returned to the caller for interpretation, except
        401/403 which mean the store rejected our credentials.

        Raises:
            StoreError: If the request could not be completed.
            AuthenticationError: If the store rejected the request as unauthenticated.
        """
        client = await self._ensure_client()
        endpoint = f"{method} {path}"
        started = time.perf_counter()
        failure: str | None = None

        try:
            response = await client.request(method, path, json=json, params=params)
            if not response.is_success:
                failure = f"http_{response.status_code}"
        except httpx.HTTPError as exc:
            failure = "network_error"
            logger.warning("Store request %s failed: %s", endpoint, exc)
            raise StoreError(
                f"Store request failed for {endpoint}",
                None,
                self.url_for(path),
                reason="Store unavailable",
            ) from exc
        finally:
            response_time = time.perf_counter() - started
            self.metrics.record(path, response_time, failure)

        logger.debug("%s -> %d (%.3fs)", endpoint, response.status_code, response_time)

        if response.status_code in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
            raise AuthenticationError(
                f"Store rejected {endpoint} with status {response.status_code}",
                reason=response.reason_phrase,
            )
        return response

    def get_metrics(self) -> dict[str, Any]:
        """Return store traffic counters for monitoring."""
        return {"base_url": self.config.base_url, **self.metrics.snapshot()}

    async def close(self) -> None:
        """Close the underlying HTTP client if it was created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def raise_for_store_status(
    response: httpx.Response,
    action: str,
    endpoint: str,
) -> None:
    """Raise ``StoreError`` if ``response`` is not a success.

    Args:
        response: The store response.
        action: Human-readable description, e.g. ``"Failed to fetch posts"``.
        endpoint: Absolute URL used for diagnostics.
    """
    if response.is_success:
        return
    reason = response.reason_phrase or str(response.status_code)
    raise StoreError(
        f"{action}: {reason}",
        response.status_code,
        endpoint,
        reason=reason,
    )


__all__ = [
    "HTTP_NOT_FOUND",
    "StoreClient",
    "StoreConfig",
    "StoreMetrics",
    "load_store_config",
    "raise_for_store_status",
]
