"""Song ORM model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from open_music.database import Base

if TYPE_CHECKING:
    from open_music.models.album import Album


class Song(Base):
    """A song, optionally belonging to an album.

    Songs are managed elsewhere; this service only reads them as part of
    album details.
    """

    __tablename__ = "songs"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)  # song-<nanoid>
    title: Mapped[str] = mapped_column(String(255))
    year: Mapped[int] = mapped_column()
    performer: Mapped[str] = mapped_column(String(255))
    genre: Mapped[str] = mapped_column(String(100))
    duration: Mapped[int | None] = mapped_column(nullable=True)  # Seconds
    album_id: Mapped[str | None] = mapped_column(
        "albumId",
        String(32),
        ForeignKey("albums.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    album: Mapped[Album | None] = relationship(back_populates="songs")
