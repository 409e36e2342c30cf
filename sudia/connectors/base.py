"""
Base connector class for all remote service integrations.

The heritage backend, the routing engine and the geocoder all inherit from
BaseConnector, which owns the HTTP client lifecycle and a REST handler.
"""

import httpx
from loguru import logger

from sudia.connectors.protocols.rest import RestProtocol


class BaseConnector:
    """
    Base class for all remote service connectors.

    Subclasses set ``connector_id``, ``connector_name`` and ``base_url``
    and call ``self.rest`` for requests.
    """

    # Class attributes to be set by subclasses
    connector_id: str = None  # e.g., "osrm"
    connector_name: str = None  # e.g., "OSRM routing engine"
    description: str = None

    base_url: str = None
    timeout: float = 15.0  # Request timeout in seconds

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ):
        """
        Initialize the connector.

        Args:
            base_url: Override of the class-level base URL
            timeout: Override of the class-level timeout
            http_client: Optional shared HTTP client
            headers: Extra default headers for every request
        """
        if self.connector_id is None:
            raise ValueError("connector_id must be set in subclass")

        if base_url is not None:
            self.base_url = base_url
        if timeout is not None:
            self.timeout = timeout

        self._http_client = http_client
        self._owns_client = http_client is None

        self.rest = RestProtocol(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            client_provider=lambda: self.http_client,
        )

        logger.debug(f"Initialized {self.connector_name} connector")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this connector created it.

        A later request opens a fresh client; an injected client is left open.
        """
        if self._owns_client and self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
            self._owns_client = True
        return self._http_client
