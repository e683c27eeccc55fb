"""Pydantic schemas for album API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field, HttpUrl


class AlbumCreate(BaseModel):
    """Schema for creating an album."""

    name: str = Field(min_length=1, max_length=255, description="Album name")
    year: int = Field(ge=1900, le=2100, description="Release year")


class AlbumUpdate(AlbumCreate):
    """Schema for updating an album's name and year."""


class AlbumCoverUpdate(BaseModel):
    """Schema for assigning a cover image to an album."""

    cover_url: HttpUrl = Field(description="URL of the cover image")


class AlbumCreated(BaseModel):
    """Response for a newly created album."""

    album_id: str = Field(description="Generated album ID")


class SongSummary(BaseModel):
    """A song as listed inside album details."""

    id: str = Field(description="Song ID")
    title: str = Field(description="Song title")
    performer: str = Field(description="Song performer")


class AlbumDetails(BaseModel):
    """Album with its songs."""

    id: str = Field(description="Album ID")
    name: str = Field(description="Album name")
    year: int = Field(description="Release year")
    cover_url: str | None = Field(default=None, description="Cover image URL")
    songs: list[SongSummary] = Field(default_factory=list, description="Songs on this album")


class AlbumLikes(BaseModel):
    """Like count of an album and where it was read from."""

    source: Literal["cache", "database"] = Field(description="Where the count came from")
    likes: int = Field(ge=0, description="Number of users who liked the album")


class AlbumLikesResponse(BaseModel):
    """Response for the album like count endpoint."""

    likes: int = Field(description="Number of users who liked the album")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(description="Human-readable result")
