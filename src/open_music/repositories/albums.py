"""Album data access: CRUD, covers, and likes with a cached like count.

Every method runs inside the caller's session transaction. SQLAlchemy and
cache failures are translated to ``ValidationError``; ``NotFoundError`` and
``ConflictError`` reach the caller unchanged.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from fastapi import Depends
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from open_music.database import get_db
from open_music.models.album import Album
from open_music.models.like import AlbumLike
from open_music.models.song import Song
from open_music.schemas.album import AlbumDetails, AlbumLikes, SongSummary
from open_music.services.base import CacheError, ConflictError, NotFoundError, ValidationError
from open_music.services.cache import CacheBackend, get_cache
from open_music.utils.identifiers import new_album_id, new_like_id

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def album_likes_cache_key(album_id: str) -> str:
    """Cache key holding the like count of an album."""
    return f"album-likes:{album_id}"


def _translate_errors(method: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Re-raise storage failures from a repository method as ValidationError."""

    @functools.wraps(method)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await method(*args, **kwargs)
        except (SQLAlchemyError, CacheError) as e:
            logger.error("%s failed: %s", method.__name__, e)
            raise ValidationError(str(e)) from e

    return wrapper


class AlbumRepository:
    """Repository for albums, their covers, and user likes."""

    def __init__(self, session: AsyncSession, cache: CacheBackend) -> None:
        self.session = session
        self.cache = cache

    # ── ALBUMS ────────────────────────────────────────────

    @_translate_errors
    async def add_album(self, name: str, year: int) -> str:
        """Insert a new album.

        Args:
            name: Album name.
            year: Release year.

        Returns:
            The generated album id.

        Raises:
            ValidationError: If the album could not be stored.
        """
        album_id = new_album_id()
        result = await self.session.execute(
            insert(Album).values(id=album_id, name=name, year=year).returning(Album.id)
        )
        created_id = result.scalar_one_or_none()
        if not created_id:
            raise ValidationError("Failed to add album")

        logger.info("Added album %s", created_id)
        return created_id

    @_translate_errors
    async def get_album_by_id(self, album_id: str) -> AlbumDetails:
        """Load an album together with the songs that reference it.

        Raises:
            NotFoundError: If the album does not exist.
        """
        result = await self.session.execute(select(Album).where(Album.id == album_id))
        album = result.scalar_one_or_none()
        if album is None:
            raise NotFoundError("Album not found")

        songs_result = await self.session.execute(
            select(Song.id, Song.title, Song.performer)
            .where(Song.album_id == album_id)
            .order_by(Song.title, Song.id)
        )
        songs = [
            SongSummary(id=row.id, title=row.title, performer=row.performer)
            for row in songs_result
        ]

        return AlbumDetails(
            id=album.id,
            name=album.name,
            year=album.year,
            cover_url=album.cover,
            songs=songs,
        )

    @_translate_errors
    async def edit_album_by_id(self, album_id: str, name: str, year: int) -> None:
        """Update an album's name and year.

        Raises:
            NotFoundError: If no album has this id.
        """
        result = await self.session.execute(
            update(Album).where(Album.id == album_id).values(name=name, year=year)
        )
        if not result.rowcount:
            raise NotFoundError("Failed to update album. Id not found")

        logger.info("Updated album %s", album_id)

    @_translate_errors
    async def delete_album_by_id(self, album_id: str) -> None:
        """Delete an album.

        Its likes go with it, so the cached like count is dropped as well.

        Raises:
            NotFoundError: If no album has this id.
        """
        result = await self.session.execute(delete(Album).where(Album.id == album_id))
        if not result.rowcount:
            raise NotFoundError("Failed to delete album. Id not found")

        await self.cache.delete(album_likes_cache_key(album_id))
        logger.info("Deleted album %s", album_id)

    @_translate_errors
    async def post_album_cover_by_id(self, album_id: str, cover_url: str) -> None:
        """Set the cover image URL of an album.

        Raises:
            NotFoundError: If no album has this id.
        """
        result = await self.session.execute(
            update(Album).where(Album.id == album_id).values(cover=cover_url)
        )
        if not result.rowcount:
            raise NotFoundError("Failed to update album cover. Id not found")

        logger.info("Updated cover of album %s", album_id)

    # ── LIKES ─────────────────────────────────────────────

    async def _verify_album_exists(self, album_id: str) -> None:
        result = await self.session.execute(select(Album.id).where(Album.id == album_id))
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Album not found")

    async def _find_like_id(self, user_id: str, album_id: str) -> str | None:
        result = await self.session.execute(
            select(AlbumLike.id).where(
                AlbumLike.user_id == user_id,
                AlbumLike.album_id == album_id,
            )
        )
        return result.scalar_one_or_none()

    @_translate_errors
    async def add_user_album_like(self, user_id: str, album_id: str) -> str:
        """Record that a user likes an album.

        Returns:
            A confirmation message.

        Raises:
            NotFoundError: If the album does not exist.
            ConflictError: If the user already likes the album.
            ValidationError: If the like could not be stored, e.g. the user
                does not exist.
        """
        await self._verify_album_exists(album_id)

        if await self._find_like_id(user_id, album_id) is not None:
            raise ConflictError("You have already liked this album")

        like = AlbumLike(id=new_like_id(), user_id=user_id, album_id=album_id)
        try:
            # Savepoint keeps the request transaction usable after a failed insert
            async with self.session.begin_nested():
                self.session.add(like)
                await self.session.flush()
        except IntegrityError:
            if await self._find_like_id(user_id, album_id) is not None:
                # Another request inserted the same (user, album) pair first
                raise ConflictError("You have already liked this album") from None
            raise

        await self.cache.delete(album_likes_cache_key(album_id))
        logger.info("User %s liked album %s", user_id, album_id)
        return "Album liked"

    @_translate_errors
    async def get_album_likes(self, album_id: str) -> AlbumLikes:
        """Return the number of likes of an album, preferring the cache.

        On a cache miss the count is read from the database and written back
        to the cache. A cache hit is returned as-is, without checking that
        the album still exists.

        Raises:
            NotFoundError: If the count is not cached and the album does not exist.
        """
        key = album_likes_cache_key(album_id)
        cached = await self._read_cached_count(key)
        if cached is not None:
            return AlbumLikes(source="cache", likes=cached)

        await self._verify_album_exists(album_id)

        result = await self.session.execute(
            select(func.count(AlbumLike.user_id)).where(AlbumLike.album_id == album_id)
        )
        likes = result.scalar_one()

        await self.cache.set(key, str(likes))
        return AlbumLikes(source="database", likes=likes)

    async def _read_cached_count(self, key: str) -> int | None:
        try:
            value = await self.cache.get(key)
        except CacheError as e:
            logger.warning("Cache read failed, falling back to database: %s", e)
            return None

        if value is None:
            return None

        try:
            return int(value)
        except ValueError:
            logger.warning("Ignoring malformed cached value for %s: %r", key, value)
            return None

    @_translate_errors
    async def delete_user_album_like(self, user_id: str, album_id: str) -> None:
        """Remove a user's like from an album.

        Raises:
            NotFoundError: If the album does not exist or the user has not liked it.
            ValidationError: If the like disappeared before it could be deleted.
        """
        await self._verify_album_exists(album_id)

        if await self._find_like_id(user_id, album_id) is None:
            raise NotFoundError("You have not liked this album")

        result = await self.session.execute(
            delete(AlbumLike)
            .where(AlbumLike.user_id == user_id, AlbumLike.album_id == album_id)
        )
        if not result.rowcount:
            raise ValidationError("Failed to remove album like")

        await self.cache.delete(album_likes_cache_key(album_id))
        logger.info("User %s unliked album %s", user_id, album_id)


def get_album_repository(
    db: AsyncSession = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
) -> AlbumRepository:
    """Dependency that provides an AlbumRepository bound to the request session."""
    return AlbumRepository(db, cache)
