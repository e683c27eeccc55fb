"""Album ORM model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from open_music.database import Base

if TYPE_CHECKING:
    from open_music.models.like import AlbumLike
    from open_music.models.song import Song


class Album(Base):
    """A music album in the catalog."""

    __tablename__ = "albums"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)  # album-<nanoid>
    name: Mapped[str] = mapped_column(String(255))
    year: Mapped[int] = mapped_column()
    cover: Mapped[str | None] = mapped_column(String(500), nullable=True)  # Cover image URL

    # Relationships
    songs: Mapped[list[Song]] = relationship(back_populates="album", passive_deletes=True)
    likes: Mapped[list[AlbumLike]] = relationship(
        back_populates="album", cascade="all, delete-orphan", passive_deletes=True
    )
