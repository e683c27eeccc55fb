"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from open_music import __version__
from open_music.api import api_router
from open_music.config import get_settings
from open_music.database import engine
from open_music.services.base import APIError
from open_music.services.cache import close_cache

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("@")[-1])  # Hide credentials
    logger.info("Cache: %s", settings.redis_url.split("@")[-1])

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    await close_cache()
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(APIError)
async def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Render NotFoundError, ConflictError and ValidationError with their status codes."""
    if (exc.status_code or 500) >= 500:
        logger.error("Unhandled API error: %s", exc)
    return JSONResponse(
        status_code=exc.status_code or 500,
        content={"detail": str(exc) or "Request failed"},
    )


# Include API router
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the API is running."""
    return {"status": "healthy", "version": __version__}
