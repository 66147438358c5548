"""
Fare Estimator API - Main application entry point.

City typeahead, date-to-quarter mapping and fare estimates backed by a
remote prediction service.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, get_settings
from app.core.middleware import MaxBodySizeMiddleware
from app.cities.views import router as cities_router
from app.estimates.views import router as estimates_router
from app.meta.service import MetadataLoader
from app.meta.views import router as meta_router

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup: load the city list in the background so the API is usable at once
    loader: MetadataLoader = app.state.metadata_loader
    task = asyncio.create_task(loader.mount())
    yield
    # Shutdown
    loader.unmount()
    if not task.done():
        # The late result is already ignored; don't leave the task dangling.
        task.cancel()


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Fare Estimator API

Pick two cities and a future travel date to get a fare estimate.

### Features

- 🔎 **City typeahead**: ranked substring suggestions over the known city list
- 📅 **Quarter mapping**: travel dates are reduced to calendar quarters
- ✈️ **Estimates**: route + quarter are sent to the prediction model
- ⚡ **Quick routes**: popular presets for a one-click estimate
        """,
        lifespan=lifespan,
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
    )

    app.state.settings = settings
    app.state.http_transport = transport
    app.state.metadata_loader = MetadataLoader(
        settings.FARE_API_URL,
        transport=transport,
        timeout=settings.FARE_API_TIMEOUT_SECONDS,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MaxBodySizeMiddleware, max_body_bytes=settings.MAX_REQUEST_BODY_BYTES)

    for router in (cities_router, meta_router, estimates_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/", tags=["Health"])
    async def root():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        state = app.state.metadata_loader.state
        return {
            "status": "healthy",
            "fare_api": "configured" if settings.FARE_API_URL else "missing",
            "cities": "loading" if state.loading else ("error" if state.error else "loaded"),
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
