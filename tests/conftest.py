"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from open_music import models  # noqa: E402, F401 - registers tables on Base.metadata
from open_music.database import Base, enable_sqlite_foreign_keys  # noqa: E402
from open_music.main import app  # noqa: E402
from open_music.repositories.albums import AlbumRepository  # noqa: E402
from open_music.services.cache import InMemoryCache  # noqa: E402


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession]:
    """Session on a fresh in-memory SQLite database with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def cache() -> InMemoryCache:
    """Empty in-memory cache."""
    return InMemoryCache()


@pytest.fixture
def repository(db_session: AsyncSession, cache: InMemoryCache) -> AlbumRepository:
    """AlbumRepository over the in-memory database and cache."""
    return AlbumRepository(db_session, cache)
