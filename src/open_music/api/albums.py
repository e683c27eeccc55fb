"""Album API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response

from open_music.repositories.albums import AlbumRepository, get_album_repository
from open_music.schemas.album import (
    AlbumCoverUpdate,
    AlbumCreate,
    AlbumCreated,
    AlbumDetails,
    AlbumLikesResponse,
    AlbumUpdate,
    MessageResponse,
)
from open_music.services.base import NotFoundError
from open_music.utils.identifiers import AlbumId, validate_album_id
from open_music.utils.security import CurrentUser

router = APIRouter(prefix="/albums", tags=["albums"])


def album_id_path(album_id: Annotated[str, Path(description="Album ID")]) -> AlbumId:
    """Validate the album id taken from the URL.

    A malformed id can never match a stored album, so it is reported as not found.
    """
    try:
        return validate_album_id(album_id)
    except ValueError:
        raise NotFoundError("Album not found") from None


ValidAlbumId = Annotated[AlbumId, Depends(album_id_path)]
Repository = Annotated[AlbumRepository, Depends(get_album_repository)]


@router.post("", response_model=AlbumCreated, status_code=201)
async def create_album(album: AlbumCreate, repository: Repository) -> AlbumCreated:
    """Create a new album and return its generated ID."""
    album_id = await repository.add_album(name=album.name, year=album.year)
    return AlbumCreated(album_id=album_id)


@router.get("/{album_id}", response_model=AlbumDetails)
async def get_album(album_id: ValidAlbumId, repository: Repository) -> AlbumDetails:
    """Get an album with the songs that belong to it."""
    return await repository.get_album_by_id(album_id)


@router.put("/{album_id}", response_model=MessageResponse)
async def update_album(
    album_id: ValidAlbumId,
    album: AlbumUpdate,
    repository: Repository,
) -> MessageResponse:
    """Update an album's name and release year."""
    await repository.edit_album_by_id(album_id, name=album.name, year=album.year)
    return MessageResponse(message="Album updated")


@router.delete("/{album_id}", response_model=MessageResponse)
async def delete_album(album_id: ValidAlbumId, repository: Repository) -> MessageResponse:
    """Delete an album."""
    await repository.delete_album_by_id(album_id)
    return MessageResponse(message="Album deleted")


@router.post("/{album_id}/covers", response_model=MessageResponse, status_code=201)
async def upload_album_cover(
    album_id: ValidAlbumId,
    cover: AlbumCoverUpdate,
    repository: Repository,
) -> MessageResponse:
    """Assign a cover image URL to an album."""
    await repository.post_album_cover_by_id(album_id, str(cover.cover_url))
    return MessageResponse(message="Album cover uploaded")


@router.post("/{album_id}/likes", response_model=MessageResponse, status_code=201)
async def like_album(
    album_id: ValidAlbumId,
    current_user: CurrentUser,
    repository: Repository,
) -> MessageResponse:
    """Like an album as the authenticated user.

    Requires authentication. Each user can like an album once.
    """
    message = await repository.add_user_album_like(current_user.id, album_id)
    return MessageResponse(message=message)


@router.get("/{album_id}/likes", response_model=AlbumLikesResponse)
async def get_album_likes(
    album_id: ValidAlbumId,
    response: Response,
    repository: Repository,
) -> AlbumLikesResponse:
    """Get the number of likes of an album.

    The ``X-Data-Source`` response header tells whether the count was served
    from the cache or read from the database.
    """
    result = await repository.get_album_likes(album_id)
    response.headers["X-Data-Source"] = result.source
    return AlbumLikesResponse(likes=result.likes)


@router.delete("/{album_id}/likes", response_model=MessageResponse)
async def unlike_album(
    album_id: ValidAlbumId,
    current_user: CurrentUser,
    repository: Repository,
) -> MessageResponse:
    """Remove the authenticated user's like from an album.

    Requires authentication.
    """
    await repository.delete_user_album_like(current_user.id, album_id)
    return MessageResponse(message="Album like removed")
