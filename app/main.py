"""
Akwaba Stays API - Main application entry point.

Location search backend for the lodging and vehicle rental mobile app.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core import Database, configure_logging, get_settings
from app.locations.service import get_location_service
from app.locations.views import router as locations_router

settings = get_settings()
API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    configure_logging()
    await Database.connect()
    # Load the location snapshot in the background; searches return
    # nothing until it is ready.
    get_location_service().store.ensure_fresh()
    yield
    # Shutdown
    await Database.disconnect()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
## Akwaba Stays API

Location search for lodging and vehicle rentals.

### Features

- 🔎 **Location Search**: cities, communes and neighborhoods, ranked by relevance
- 📍 **Suggestions**: default cities before anything is typed
- 🏙️ **Popular Destinations**: cities with the most active listings

Matching ignores accents, case, hyphens, spaces and apostrophes, so
"cote divoire" finds "Côte d'Ivoire".
    """,
    lifespan=lifespan,
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(locations_router, prefix=API_PREFIX)


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
    return {
        "status": "healthy",
        "database": "connected" if Database.client else "disconnected",
        "locations": "loading" if get_location_service().is_loading() else "ready",
        "version": settings.APP_VERSION,
    }
