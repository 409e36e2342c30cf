"""
Connectors Module - remote services behind the historical map.

Architecture:
- BaseConnector: HTTP client lifecycle and REST handler shared by all connectors
- Protocols: REST GET/JSON handler and the first-success race combinator
- BackendConnector: the heritage REST backend, raced against CORS proxies
- ReferenceDataStore: single-flight cache of join/lookup collections
- OSRMConnector / NominatimConnector: routing and geocoding adapters
"""

from sudia.connectors.backend import BackendConnector
from sudia.connectors.base import BaseConnector
from sudia.connectors.geocoding import NominatimConnector
from sudia.connectors.reference import ReferenceDataStore
from sudia.connectors.routing import OSRMConnector
from sudia.connectors.types import (
    AddressSearchResult,
    Event,
    Media,
    Person,
    PersonDetail,
    RouteData,
    Site,
    SiteDetail,
)
from sudia.connectors.unwrap import extract_data

__all__ = [
    "BaseConnector",
    "BackendConnector",
    "ReferenceDataStore",
    "OSRMConnector",
    "NominatimConnector",
    "extract_data",
    "Site",
    "Person",
    "Event",
    "Media",
    "SiteDetail",
    "PersonDetail",
    "RouteData",
    "AddressSearchResult",
]
