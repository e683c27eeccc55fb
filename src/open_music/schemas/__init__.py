"""Pydantic schemas for request/response validation."""

from open_music.schemas.album import (
    AlbumCoverUpdate,
    AlbumCreate,
    AlbumCreated,
    AlbumDetails,
    AlbumLikes,
    AlbumLikesResponse,
    AlbumUpdate,
    MessageResponse,
    SongSummary,
)
from open_music.schemas.user import Token, UserCreate, UserLogin, UserResponse

__all__ = [
    # Album schemas
    "AlbumCreate",
    "AlbumUpdate",
    "AlbumCoverUpdate",
    "AlbumCreated",
    "AlbumDetails",
    "AlbumLikes",
    "AlbumLikesResponse",
    "SongSummary",
    "MessageResponse",
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "Token",
]
