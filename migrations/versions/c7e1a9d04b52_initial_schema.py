"""Initial schema

Revision ID: c7e1a9d04b52
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "c7e1a9d04b52"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create base tables (no dependencies)
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("fullname", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_email"), ["email"], unique=True)
        batch_op.create_index(batch_op.f("ix_users_username"), ["username"], unique=True)

    op.create_table(
        "albums",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("cover", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    # Tables that reference albums and users
    op.create_table(
        "songs",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("performer", sa.String(length=255), nullable=False),
        sa.Column("genre", sa.String(length=100), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("albumId", sa.String(length=32), nullable=True),
        sa.ForeignKeyConstraint(["albumId"], ["albums.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("songs", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_songs_albumId"), ["albumId"], unique=False)

    op.create_table(
        "user_album_likes",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("album_id", sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(["album_id"], ["albums.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "album_id", name="uq_user_album_like"),
    )
    with op.batch_alter_table("user_album_likes", schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f("ix_user_album_likes_album_id"), ["album_id"], unique=False
        )
        batch_op.create_index(batch_op.f("ix_user_album_likes_user_id"), ["user_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables in reverse order of creation
    with op.batch_alter_table("user_album_likes", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_user_album_likes_user_id"))
        batch_op.drop_index(batch_op.f("ix_user_album_likes_album_id"))
    op.drop_table("user_album_likes")

    with op.batch_alter_table("songs", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_songs_albumId"))
    op.drop_table("songs")

    op.drop_table("albums")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_username"))
        batch_op.drop_index(batch_op.f("ix_users_email"))
    op.drop_table("users")
