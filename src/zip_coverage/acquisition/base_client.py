"""
Abstract base client for ArcGIS REST map services.

This module provides the AsyncGISClient base class that implements:
- Proper httpx.AsyncClient lifecycle management
- Minimum spacing between consecutive requests
- Translation of httpx failures into acquisition exceptions
- Abstract methods for concrete layer clients

Requests are never retried: the first failure is raised to the caller.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from .exceptions import (
    ConnectionError,
    InvalidResponseError,
    NotFoundError,
    ServerError,
    ServiceStatusError,
    TimeoutError,
)
from .models import GISClientConfig

logger = logging.getLogger(__name__)


class AsyncGISClient(ABC):
    """
    Abstract base class for async ArcGIS REST clients.

    Usage:
        async with MyGISClient(config) as client:
            data = await client.get_json(url, params=params)

    Attributes:
        config: The GISClientConfig instance with all settings.
        _client: The httpx.AsyncClient instance (created on context entry).
    """

    def __init__(
        self,
        config: GISClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the GIS client with configuration.

        Args:
            config: GISClientConfig instance with all client settings.
            transport: Optional httpx transport, used to stub the network.
        """
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._request_count = 0
        self._last_request_time: float = 0

    async def __aenter__(self) -> "AsyncGISClient":
        await self._create_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self._close_client()

    @property
    def request_count(self) -> int:
        """Number of requests sent since the client was created."""
        return self._request_count

    async def _create_client(self) -> None:
        """Create the httpx.AsyncClient with configured settings."""
        timeout = httpx.Timeout(
            connect=self.config.timeout.connect,
            read=self.config.timeout.read,
            write=self.config.timeout.write,
            pool=self.config.timeout.pool,
        )

        limits = httpx.Limits(
            max_connections=self.config.limits.max_connections,
            max_keepalive_connections=self.config.limits.max_keepalive_connections,
            keepalive_expiry=self.config.limits.keepalive_expiry,
        )

        self._client = httpx.AsyncClient(
            timeout=timeout,
            limits=limits,
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "application/json",
            },
            follow_redirects=True,
            transport=self._transport,
        )

        logger.info("Created GIS client for %s", self.config.base_url)

    async def _close_client(self) -> None:
        """Close the httpx.AsyncClient and release resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info(
                "Closed GIS client (made %d requests)", self._request_count
            )

    def _ensure_client(self) -> httpx.AsyncClient:
        """
        Ensure the client is initialized and return it.

        Raises:
            RuntimeError: If client is not initialized (not in context manager).
        """
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with' context manager."
            )
        return self._client

    async def _rate_limit_delay(self) -> None:
        """Keep the configured minimum interval between requests."""
        interval = self.config.rate_limit.min_request_interval
        elapsed = time.monotonic() - self._last_request_time

        if self._request_count and elapsed < interval:
            delay = interval - elapsed
            logger.debug("Rate limiting: sleeping %.3f seconds", delay)
            await asyncio.sleep(delay)

        self._last_request_time = time.monotonic()

    def _classify_http_error(self, response: httpx.Response, url: str) -> Exception:
        """
        Convert a non-success response to the matching custom exception.

        Args:
            response: The httpx response with a 4xx/5xx status.
            url: The URL that was requested.

        Returns:
            Appropriate custom exception for the status code.
        """
        status = response.status_code
        reason = response.reason_phrase

        if status == 404:
            return NotFoundError(
                f"Resource not found: {url}",
                url=url,
                response_text=response.text,
            )
        elif status >= 500:
            return ServerError(
                f"Server error {status} {reason} for {url}",
                status_code=status,
                response_text=response.text,
            )
        return ServiceStatusError(
            f"HTTP {status} {reason} for {url}",
            status_code=status,
            response_text=response.text,
        )

    def _classify_transport_error(
        self, error: httpx.TransportError, url: str
    ) -> Exception:
        """
        Convert httpx transport errors to appropriate custom exceptions.

        Args:
            error: The httpx TransportError.
            url: The URL that was requested.

        Returns:
            Appropriate custom exception for the error type.
        """
        if isinstance(error, httpx.TimeoutException):
            timeout_type = "unknown"
            if isinstance(error, httpx.ConnectTimeout):
                timeout_type = "connect"
            elif isinstance(error, httpx.ReadTimeout):
                timeout_type = "read"
            elif isinstance(error, httpx.WriteTimeout):
                timeout_type = "write"
            elif isinstance(error, httpx.PoolTimeout):
                timeout_type = "pool"

            return TimeoutError(
                f"Request to {url} timed out ({timeout_type})",
                timeout_type=timeout_type,
                cause=error,
            )
        elif isinstance(error, httpx.ConnectError):
            return ConnectionError(
                f"Failed to connect to {url}",
                cause=error,
            )
        return ConnectionError(
            f"Transport error for {url}: {error}",
            cause=error,
        )

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """
        Make a single GET request.

        Args:
            url: The URL to request.
            **kwargs: Additional arguments passed to httpx.AsyncClient.get().

        Returns:
            The httpx.Response object.

        Raises:
            ServiceStatusError: For any non-success status.
            ConnectionError: If the service cannot be reached.
            TimeoutError: If the request times out.
        """
        client = self._ensure_client()
        await self._rate_limit_delay()

        logger.debug("GET %s", url)
        try:
            response = await client.get(url, **kwargs)
        except httpx.TransportError as e:
            raise self._classify_transport_error(e, url) from e
        finally:
            self._request_count += 1

        if not response.is_success:
            raise self._classify_http_error(response, url)
        return response

    async def get_json(self, url: str, **kwargs: Any) -> dict[str, Any]:
        """
        Make a GET request and parse the JSON response.

        Raises:
            InvalidResponseError: If response is not a JSON object.
        """
        response = await self.get(url, **kwargs)

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Failed to parse JSON from {url}",
                response_text=response.text,
                cause=e,
            )

        if not isinstance(data, dict):
            raise InvalidResponseError(
                f"Expected a JSON object from {url}",
                response_text=response.text,
            )
        return data

    @abstractmethod
    def get_layer_url(self) -> str:
        """
        Get the query URL for the configured layer.

        Subclasses must implement this to construct the correct URL
        for their specific map service.
        """
        pass
