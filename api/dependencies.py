"""
Shared dependencies for API routes.

The lifespan in api.main puts one service and one connector of each kind on
``app.state``; routes receive them through these providers so tests can
swap them with ``app.dependency_overrides``.
"""

from fastapi import Request

from sudia.connectors import NominatimConnector, OSRMConnector
from sudia.services import MapDataService


def get_service(request: Request) -> MapDataService:
    return request.app.state.service


def get_router(request: Request) -> OSRMConnector:
    return request.app.state.router


def get_geocoder(request: Request) -> NominatimConnector:
    return request.app.state.geocoder
