"""
Heritage backend connector.

The backend is an uncontrolled REST service that is frequently blocked by
CORS or simply slow. Every endpoint is fetched by racing a direct request
against the same URL rewritten through each public CORS proxy; whichever
answers first wins.

Endpoints:
    /locations, /locations/{id}, /cities, /persons, /persons/{id},
    /media, /event, /event/location/{id}, /event_media, /person_event
"""

from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from sudia.config import BackendSettings, settings
from sudia.connectors.base import BaseConnector
from sudia.connectors.protocols.race import AllStrategiesFailed, first_success, summarize_errors
from sudia.connectors.unwrap import extract_data, unwrap_proxy_envelope
from sudia.normalizers.fields import RawRecord


class BackendConnector(BaseConnector):
    """Connector for the Vietnam heritage REST backend."""

    connector_id = "heritage_backend"
    connector_name = "Heritage backend"
    description = "Sites, cities, persons, events and media of historical Vietnam"

    def __init__(
        self,
        config: BackendSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        config = config or settings.backend
        self.use_proxies = config.use_proxies
        self.proxy_templates = config.proxy_templates
        super().__init__(
            base_url=config.base_url,
            timeout=config.timeout,
            http_client=http_client,
        )

    def endpoint_url(self, endpoint: str) -> str:
        """Absolute URL of a backend endpoint."""
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def proxy_urls(self, url: str) -> list[str]:
        """The target URL rewritten through every configured proxy."""
        encoded = quote(url, safe="")
        return [template.replace("{url}", encoded) for template in self.proxy_templates]

    async def _fetch_direct(self, url: str) -> Any:
        return await self.rest.get_json(url)

    async def _fetch_via_proxy(self, proxy_url: str) -> Any:
        payload = await self.rest.get_json(proxy_url)
        return unwrap_proxy_envelope(payload)

    def strategies(self, endpoint: str) -> list[Callable[[], Awaitable[Any]]]:
        """Direct fetch plus one strategy per proxy, in launch order."""
        url = self.endpoint_url(endpoint)
        strategies = [lambda: self._fetch_direct(url)]
        if self.use_proxies:
            for proxy_url in self.proxy_urls(url):
                strategies.append(lambda proxy_url=proxy_url: self._fetch_via_proxy(proxy_url))
        return strategies

    async def fetch_payload(self, endpoint: str) -> Any:
        """
        Race the strategies for an endpoint and return the winning payload.

        Raises:
            AllStrategiesFailed: If no strategy produced a response
        """
        return await first_success(self.strategies(endpoint))

    async def fetch_from_api(self, endpoint: str) -> Any:
        """
        Fetch an endpoint through the direct/proxy race.

        Args:
            endpoint: Path relative to the backend base URL, e.g. "/locations"

        Returns:
            Decoded payload of the first strategy to succeed (None for 404),
            or an empty list when every strategy failed. Never raises.
        """
        try:
            return await self.fetch_payload(endpoint)
        except AllStrategiesFailed as e:
            logger.warning(f"[API] Failed to fetch {endpoint}: {summarize_errors(e)}")
            return []

    async def fetch_records(self, endpoint: str) -> list[RawRecord]:
        """Fetch an endpoint and flatten its payload into raw records."""
        return extract_data(await self.fetch_from_api(endpoint))
