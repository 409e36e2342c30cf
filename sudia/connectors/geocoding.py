"""
Nominatim geocoding connector.

Forward search is restricted to Vietnam; reverse geocoding returns a short
place label for a picked point.

API: https://nominatim.org/release-docs/latest/api/Overview/
"""

import httpx
from loguru import logger

from sudia.config import GeocodingSettings, settings
from sudia.connectors.base import BaseConnector
from sudia.connectors.protocols.rest import FetchError
from sudia.connectors.types import AddressSearchResult
from sudia.normalizers.values import parse_float

MIN_QUERY_LENGTH = 3
PICKED_LOCATION_LABEL = "Vị trí đã chọn"


def short_name(display_name: str) -> str:
    """First comma-separated part of a Nominatim display name."""
    return display_name.split(",")[0].strip()


class NominatimConnector(BaseConnector):
    """Connector for a Nominatim geocoder."""

    connector_id = "nominatim"
    connector_name = "Nominatim geocoder"
    description = "Address search and reverse geocoding"

    def __init__(
        self,
        config: GeocodingSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        config = config or settings.geocoding
        self.country_codes = config.country_codes
        self.result_limit = config.result_limit
        super().__init__(
            base_url=config.base_url,
            timeout=config.timeout,
            http_client=http_client,
            headers={
                "Accept-Language": config.accept_language,
                "User-Agent": config.user_agent,
            },
        )

    async def search_address(self, query: str) -> list[AddressSearchResult]:
        """Search addresses; short queries and failures give an empty list."""
        if not query or len(query) < MIN_QUERY_LENGTH:
            return []

        try:
            data = await self.rest.get_json(
                "/search",
                params={
                    "format": "json",
                    "q": query,
                    "limit": self.result_limit,
                    "countrycodes": self.country_codes,
                },
            )
        except FetchError as e:
            logger.warning(f"Address search failed for {query!r}: {e}")
            return []

        if not isinstance(data, list):
            if data is not None:
                logger.warning(f"Address search for {query!r} returned {type(data).__name__}, expected a list")
            return []

        results = []
        for item in data:
            if not isinstance(item, dict):
                continue
            display_name = item.get("display_name")
            if not isinstance(display_name, str):
                continue
            lat = parse_float(item.get("lat"))
            lon = parse_float(item.get("lon"))
            if not display_name or lat is None or lon is None:
                continue
            results.append(
                AddressSearchResult(
                    name=short_name(display_name),
                    address=display_name,
                    coordinates=(lat, lon),
                )
            )
        return results

    async def reverse_geocode(self, lat: float, lon: float) -> str:
        """Short label for a point; falls back to formatted coordinates."""
        try:
            data = await self.rest.get_json(
                "/reverse",
                params={
                    "format": "json",
                    "lat": lat,
                    "lon": lon,
                    "zoom": 18,
                    "addressdetails": 1,
                },
            )
        except FetchError as e:
            logger.warning(f"Reverse geocoding failed for {lat}, {lon}: {e}")
            return f"{lat:.4f}, {lon:.4f}"

        display_name = data.get("display_name") if isinstance(data, dict) else None
        label = short_name(display_name) if isinstance(display_name, str) else ""
        return label or PICKED_LOCATION_LABEL
