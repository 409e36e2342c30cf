"""
Sites API Routes.

Mapped sites and cities for the map layer and the sidebar list, and the
site detail panel with its merged timeline.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_service
from sudia.filters import filter_sites, site_types
from sudia.services import MapDataService
from sudia.timeline import build_timeline, event_media, media_gallery, related_persons

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def get_sites(
    site_type: str | None = Query(None, alias="type", description="Filter by site type"),
    city: str | None = Query(None, description="Filter by city id"),
    q: str = Query("", description="Name contains"),
    service: MapDataService = Depends(get_service),
):
    """List mapped sites, optionally filtered."""
    all_sites = service.site_cache or await service.fetch_sites()
    matches = filter_sites(all_sites, q, site_type, city)

    return {
        "count": len(matches),
        "types": site_types(all_sites),
        "sites": [site.to_dict() for site in matches],
    }


@router.get("/cities")
async def get_cities(service: MapDataService = Depends(get_service)):
    """Mapped cities, for the city filter."""
    cities = await service.fetch_cities_list()
    return {
        "count": len(cities),
        "cities": [city.to_dict() for city in cities],
    }


@router.get("/{site_id}")
async def get_site_detail(
    site_id: str,
    service: MapDataService = Depends(get_service),
):
    """Get full details for a single site."""
    detail = await service.fetch_site_detail(site_id)

    if detail is None:
        raise HTTPException(status_code=404, detail="Site not found")

    gallery = media_gallery(event_media(detail.events))
    logger.debug(f"Site {site_id}: {len(detail.events)} events, {len(gallery['images'])} images")

    return {
        **detail.to_dict(),
        "timeline": [event.to_dict() for event in build_timeline(detail)],
        **gallery,
        "related_persons": [p.to_dict() for p in related_persons(detail.events)],
    }
