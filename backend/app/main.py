"""Main FastAPI application for the Arena Stats Backend."""

from contextlib import asynccontextmanager
from typing import Dict, Any

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.routing import APIRoute

from app.core import close_db_manager, get_global_settings, setup_logging
from app.core.dependencies import reset_shared_clients
from app.features.stats import stats_router

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


def _validate_api_key_configuration() -> None:
    """Log Riot API key configuration status."""
    api_key = settings.riot_api_key
    if not api_key or api_key in ("dev_api_key", "your_riot_api_key_here"):
        logger.warning(
            "RIOT_API_KEY not configured! Set it in the .env file.",
            hint="Get your key from https://developer.riotgames.com",
        )
    elif api_key.startswith("RGAPI-"):
        logger.info("Riot API key configured (development key detected)")
    else:
        logger.info("Riot API key configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up Arena Stats Backend application")
    _validate_api_key_configuration()
    yield
    logger.info("Shutting down Arena Stats Backend application")
    reset_shared_clients()
    await close_db_manager()


tags_metadata = [
    {
        "name": "arena",
        "description": "Arena match history and statistics by Riot ID.",
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints.",
    },
]

app = FastAPI(
    title="Arena Stats",
    description="""
    League of Legends Arena statistics by Riot ID.

    Match history is fetched incrementally from the Riot API under a shared
    request budget and cached in PostgreSQL; statistics are computed from the
    full cached history.
    """,
    version="1.0.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(stats_router, prefix="/api/v1/arena")
# Unprefixed paths used by existing frontends
app.include_router(stats_router)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def list_routes() -> str:
    """HTML list of available routes."""
    items = []
    for route in app.routes:
        if isinstance(route, APIRoute):
            for method in sorted(route.methods):
                items.append(f"<li><strong>{method}</strong> {route.path}</li>")
    return f"<h1>Available Routes</h1><ul>{''.join(items)}</ul>"


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """Health check endpoint used by monitoring tools and load balancers."""
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": "1.0.0",
        "debug": settings.debug,
    }
