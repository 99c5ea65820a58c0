"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from elevation_lookup.config import Settings
from elevation_lookup.elevation.routes import router
from elevation_lookup.elevation.service import ElevationLookupService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the lookup service on startup and shut it down on teardown."""
    settings = Settings.from_env()
    app.state.elevation_service = ElevationLookupService(settings)
    logger.info("Elevation lookup service initialized", extra={"api_url": settings.api_url})
    yield
    app.state.elevation_service.shutdown()
    logger.info("Elevation lookup service shut down")


app = FastAPI(title="Elevation Lookup API", lifespan=lifespan)
app.include_router(router)
