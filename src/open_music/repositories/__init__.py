"""Data access repositories."""

from open_music.repositories.albums import AlbumRepository, get_album_repository

__all__ = ["AlbumRepository", "get_album_repository"]
