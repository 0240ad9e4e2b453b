"""Main FastAPI application for the Rift Report service."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rift_report import __version__
from rift_report.core import get_global_settings, setup_logging
from rift_report.features.player_summary import router as player_summary_router

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


def _validate_api_key_configuration() -> None:
    """Log whether a Riot API key is available."""
    if not settings.riot_api_key:
        logger.warning(
            "RIOT_API_KEY not configured, report requests will fail",
            hint="Get your key from https://developer.riotgames.com",
        )
    elif settings.riot_api_key.startswith("RGAPI-"):
        logger.info("Riot API key configured (development key detected)")
    else:
        logger.info("Riot API key configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up Rift Report application", version=__version__)
    _validate_api_key_configuration()
    yield
    logger.info("Shutting down Rift Report application")


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "player-summary",
        "description": "Live player reports aggregated from recent match history.",
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints.",
    },
]

# Create FastAPI application
app = FastAPI(
    title="Rift Report - Player Summary Service",
    description="""
    League of Legends player reports built on demand from the Riot API.

    Match IDs are listed, match documents fetched concurrently through a
    bounded cache, filtered by game mode and aggregated into totals, streak,
    role distribution, champion stats, power picks and match history.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(player_summary_router)


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns the health status of the application including its version and
    debug mode.
    """
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": __version__,
        "debug": settings.debug,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rift_report.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
