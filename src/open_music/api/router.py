"""Main API router aggregation."""

from fastapi import APIRouter

from open_music.api.albums import router as albums_router
from open_music.api.auth import router as auth_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(albums_router)
