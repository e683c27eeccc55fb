"""Album like ORM model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from open_music.database import Base

if TYPE_CHECKING:
    from open_music.models.album import Album
    from open_music.models.user import User


class AlbumLike(Base):
    """Association between a user and an album they liked."""

    __tablename__ = "user_album_likes"
    __table_args__ = (UniqueConstraint("user_id", "album_id", name="uq_user_album_like"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True)  # like-<nanoid>
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    album_id: Mapped[str] = mapped_column(ForeignKey("albums.id", ondelete="CASCADE"), index=True)

    # Relationships
    user: Mapped[User] = relationship(back_populates="album_likes")
    album: Mapped[Album] = relationship(back_populates="likes")
