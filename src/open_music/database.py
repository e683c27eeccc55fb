"""Database configuration with async SQLAlchemy support."""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from open_music.config import get_settings


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ``ON DELETE CASCADE`` / ``SET NULL`` and unknown parent
    rows unless ``PRAGMA foreign_keys`` is set per connection. Other
    dialects are left untouched.
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


settings = get_settings()

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)
enable_sqlite_foreign_keys(engine)

# Create async session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Dependency that provides an async database session.

    Yields a session and ensures it's closed after the request. The whole
    request runs in one transaction: committed on success, rolled back if
    the endpoint raises.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
