"""
REST/JSON Protocol Handler.

Provides a base class for REST API communication with:
- Async HTTP requests via httpx
- A hard per-request timeout
- 404 treated as "no data"
- Error handling and response parsing
"""

import asyncio
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode

import httpx
from loguru import logger


class FetchError(Exception):
    """A single HTTP attempt failed (timeout, network error, bad status or body)."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class RestProtocol:
    """
    REST API protocol handler.

    Provides consistent HTTP communication with:
    - GET requests
    - JSON parsing
    - Timeouts mapped to FetchError
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
        client_provider: Callable[[], httpx.AsyncClient] | None = None,
    ):
        """
        Initialize REST protocol handler.

        Args:
            base_url: Base URL for all requests
            headers: Default headers to include
            timeout: Request timeout in seconds
            http_client: Optional shared HTTP client
            client_provider: Returns the client to use; consulted on every request
        """
        self.base_url = base_url.rstrip("/")
        self.default_headers = {
            "Accept": "application/json",
            "User-Agent": "sudia/1.0",
            **(headers or {}),
        }
        self.timeout = timeout

        self._http_client = http_client
        self._client_provider = client_provider

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client_provider is not None:
            return self._client_provider()
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._http_client

    def build_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        """
        Build full URL from path and query parameters.

        Args:
            path: URL path (relative to base_url) or absolute URL
            params: Query parameters

        Returns:
            Full URL string
        """
        if path.startswith(("http://", "https://")):
            url = path
        else:
            url = f"{self.base_url}/{path.lstrip('/')}"

        if params:
            # Filter out None values
            filtered = {k: v for k, v in params.items() if v is not None}
            if filtered:
                query = urlencode(filtered, doseq=True)
                url = f"{url}?{query}"

        return url

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """
        Make GET request and return the decoded JSON body.

        Args:
            path: URL path or absolute URL
            params: Query parameters
            headers: Additional headers
            timeout: Override of the default timeout, in seconds

        Returns:
            Parsed JSON response, or None for 404

        Raises:
            FetchError: On timeout, network error, non-2xx status or invalid JSON
        """
        url = self.build_url(path, params)
        request_headers = {**self.default_headers, **(headers or {})}

        logger.debug(f"GET {url}")

        limit = timeout if timeout is not None else self.timeout

        try:
            # httpx times each phase separately; the whole attempt gets one limit
            response = await asyncio.wait_for(
                self.client.get(url, headers=request_headers, timeout=limit),
                timeout=limit,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise FetchError(f"Timed out fetching {url}", url=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Network error fetching {url}: {e}", url=url) from e

        if response.status_code == 404:
            return None

        if not response.is_success:
            raise FetchError(
                f"HTTP {response.status_code} for {url}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {url}", status_code=response.status_code, url=url) from e
