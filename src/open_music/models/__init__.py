"""SQLAlchemy ORM models."""

from open_music.models.album import Album
from open_music.models.like import AlbumLike
from open_music.models.song import Song
from open_music.models.user import User

__all__ = [
    "Album",
    "AlbumLike",
    "Song",
    "User",
]
