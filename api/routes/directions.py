"""
Directions and Geocoding API Routes.

Thin wrappers around the routing and geocoding connectors. Neither ever
fails the request: the connectors degrade to a straight line, an empty
result list or formatted coordinates.
"""

import logging

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_geocoder, get_router
from sudia.connectors import NominatimConnector, OSRMConnector

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/directions")
async def get_directions(
    from_lat: float = Query(..., ge=-90, le=90),
    from_lon: float = Query(..., ge=-180, le=180),
    to_lat: float = Query(..., ge=-90, le=90),
    to_lon: float = Query(..., ge=-180, le=180),
    routing: OSRMConnector = Depends(get_router),
):
    """Driving directions between two points."""
    route = await routing.fetch_directions((from_lat, from_lon), (to_lat, to_lon))
    if not route.available:
        logger.info(f"Serving straight-line route for ({from_lat}, {from_lon}) -> ({to_lat}, {to_lon})")
    return route.to_dict()


@router.get("/geocode/search")
async def search_address(
    q: str = Query("", description="Address to look up"),
    geocoder: NominatimConnector = Depends(get_geocoder),
):
    """Forward geocoding restricted to Vietnam."""
    results = await geocoder.search_address(q)
    return {
        "count": len(results),
        "results": [result.to_dict() for result in results],
    }


@router.get("/geocode/reverse")
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    geocoder: NominatimConnector = Depends(get_geocoder),
):
    """Short place label for a picked point."""
    return {"name": await geocoder.reverse_geocode(lat, lon)}
