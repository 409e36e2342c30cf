"""
Persons API Routes.

Historical figures with their inferred cities and map positions.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_service
from sudia.filters import filter_persons, person_markers
from sudia.services import MapDataService
from sudia.timeline import media_gallery

logger = logging.getLogger(__name__)
router = APIRouter()


async def _all_persons(service: MapDataService):
    if service.person_cache:
        return service.person_cache
    # Location inference matches against the site cache
    if not service.site_cache:
        await service.fetch_sites()
    return await service.fetch_persons()


@router.get("")
async def get_persons(
    city: str | None = Query(None, description="Only persons related to this city id"),
    q: str = Query("", description="Name contains"),
    service: MapDataService = Depends(get_service),
):
    """List persons, optionally filtered."""
    matches = filter_persons(await _all_persons(service), q, city)
    return {
        "count": len(matches),
        "persons": [person.to_dict() for person in matches],
    }


@router.get("/markers")
async def get_person_markers(service: MapDataService = Depends(get_service)):
    """Located persons as virtual map sites."""
    markers = person_markers(await _all_persons(service))
    return {
        "count": len(markers),
        "sites": [marker.to_dict() for marker in markers],
    }


@router.get("/{person_id}")
async def get_person_detail(
    person_id: str,
    service: MapDataService = Depends(get_service),
):
    """Get biography, events and media for a single person."""
    detail = await service.fetch_person_detail(person_id)

    if detail is None:
        raise HTTPException(status_code=404, detail="Person not found")

    return {
        **detail.to_dict(),
        **media_gallery(detail.media),
    }
