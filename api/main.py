"""
FastAPI Backend for the SUDIA historical map.

Serves sites, persons, timelines, directions and geocoding to the map
frontend, reconciled from the heritage backend by the sudia data layer.
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from api.routes import directions, persons, search, sites
from sudia import __version__
from sudia.config import get_settings
from sudia.connectors import NominatimConnector, OSRMConnector
from sudia.services import MapDataService

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    import time

    logger.info("Starting SUDIA Map API...")
    app.state.service = MapDataService()
    app.state.router = OSRMConnector()
    app.state.geocoder = NominatimConnector()

    # Pre-warm caches so the first visitor doesn't wait on the backend
    if settings.api.warm_cache:
        start = time.time()
        found_sites = await app.state.service.fetch_sites()
        found_persons = await app.state.service.fetch_persons()
        logger.info(
            f"[STARTUP] Pre-warmed {len(found_sites)} sites and {len(found_persons)} persons "
            f"in {(time.time() - start) * 1000:.0f}ms"
        )

    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.service.aclose()
    await app.state.router.aclose()
    await app.state.geocoder.aclose()


app = FastAPI(
    title="SUDIA Map API",
    description="Historical sites and figures of Vietnam",
    version=__version__,
    lifespan=lifespan,
)

# CORS - allow frontend to connect (configured via API_CORS_ORIGINS env var)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With"],
)

# GZip compression for responses > 500 bytes
app.add_middleware(GZipMiddleware, minimum_size=500)

# Include routers
app.include_router(sites.router, prefix="/api/sites", tags=["sites"])
app.include_router(persons.router, prefix="/api/persons", tags=["persons"])
app.include_router(directions.router, prefix="/api", tags=["directions"])
app.include_router(search.router, prefix="/api", tags=["search"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__, "service": "SUDIA Map API"}
