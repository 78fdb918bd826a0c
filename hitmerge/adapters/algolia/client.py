"""
Algolia Client - Hosted search service REST client.

Features:
- Async HTTP client (httpx), created lazily
- Index settings and query endpoints
- Automatic retries with exponential backoff on network errors and 5xx
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from hitmerge.config.errors import (
    AuthenticationError,
    ErrorCode,
    SearchServiceError,
)
from hitmerge.config.settings import Settings

logger = logging.getLogger(__name__)

__all__ = ["AlgoliaClient"]


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, SearchServiceError) and exc.retryable


class AlgoliaClient:
    """
    Search service client.

    Example:
        >>> async with AlgoliaClient("APPID", "search-key") as client:
        ...     settings = await client.get_settings("products")
        ...     response = await client.search("products", "drill", {"hitsPerPage": 5})
    """

    def __init__(
        self,
        app_id: str,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        max_attempts: int = 3,
        backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            app_id: Application ID
            api_key: API key allowed to search and read settings
            base_url: Service URL (default https://{app_id}-dsn.algolia.net)
            timeout: Request timeout in seconds
            max_attempts: Attempts per request, including the first
            backoff: Base delay in seconds between attempts, doubled each retry
            transport: Custom httpx transport (tests)
        """
        self.app_id = app_id
        self.base_url = (base_url or f"https://{app_id}-dsn.algolia.net").rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff = backoff
        self._api_key = api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> AlgoliaClient:
        """Create a client from library settings."""
        return cls(
            app_id=settings.app_id,
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            max_attempts=settings.max_attempts,
        )

    async def __aenter__(self) -> AlgoliaClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "X-Algolia-Application-Id": self.app_id,
                    "X-Algolia-API-Key": self._api_key,
                },
            )
        return self._client

    async def get_settings(self, index: str) -> dict[str, Any]:
        """
        Fetch index settings.

        Args:
            index: Index name

        Returns:
            Settings mapping, including ``ranking`` and ``customRanking``
        """
        return await self._request("GET", f"/1/indexes/{quote(index, safe='')}/settings")

    async def search(
        self,
        index: str,
        query: str,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Run a query against one index.

        Args:
            index: Index name
            query: Query text
            params: Extra search parameters

        Returns:
            Raw search response
        """
        encoded = urlencode({"query": query, **(params or {})})
        return await self._request(
            "POST",
            f"/1/indexes/{quote(index, safe='')}/query",
            json={"params": encoded},
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request, retrying transient failures."""
        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff, max=10),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._send(method, path, **kwargs)
        raise AssertionError("unreachable")

    async def _send(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            raise SearchServiceError(
                f"Search service unreachable: {exc}",
                {"path": path},
                code=ErrorCode.SERVICE_UNAVAILABLE,
            ) from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(
                _error_message(response),
                {"path": path, "status": response.status_code},
            )
        if response.status_code >= 500:
            raise SearchServiceError(
                _error_message(response),
                {"path": path, "status": response.status_code},
                code=ErrorCode.SERVICE_UNAVAILABLE,
            )
        if response.is_error:
            raise SearchServiceError(
                _error_message(response),
                {"path": path, "status": response.status_code},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise SearchServiceError(
                "Search service returned invalid JSON",
                {"path": path, "status": response.status_code},
            ) from exc

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


def _error_message(response: httpx.Response) -> str:
    """Error message from the service body, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, str) and message:
        return message
    return f"HTTP {response.status_code} {response.reason_phrase}"
