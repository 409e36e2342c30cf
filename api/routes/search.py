"""
Search and cache API Routes.
"""

import logging

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_service
from sudia.filters import global_search
from sudia.services import MapDataService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search")
async def search(
    q: str = Query("", description="Search term"),
    service: MapDataService = Depends(get_service),
):
    """Top site and person name matches for the search box."""
    if not q.strip():
        return {"sites": [], "persons": []}

    found_sites = service.site_cache or await service.fetch_sites()
    found_persons = service.person_cache or await service.fetch_persons()
    return global_search(found_sites, found_persons, q).to_dict()


@router.post("/reload")
async def reload_data(service: MapDataService = Depends(get_service)):
    """Drop every cache and fetch everything from the backend again."""
    await service.reload()
    logger.info(f"Reloaded {len(service.site_cache)} sites and {len(service.person_cache)} persons")
    return {
        "status": "ok",
        "sites": len(service.site_cache),
        "persons": len(service.person_cache),
    }
