"""API routers."""

from open_music.api.router import api_router

__all__ = ["api_router"]
