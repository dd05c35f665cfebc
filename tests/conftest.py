"""
Top-level pytest configuration.

Provides:
  - A fresh in-memory SQLite database (aiosqlite) per test with all tables created.
  - A db_session fixture bound to that database.
  - An async_client fixture wired to the FastAPI app with get_db overridden.
  - A ``users`` fixture with three committed users.
"""

from __future__ import annotations

import os
from typing import AsyncGenerator

# ---------------------------------------------------------------------------
# Environment must be set BEFORE any app module is imported so that
# pydantic-settings picks up the test values.
# ---------------------------------------------------------------------------
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from tests.factories import UserFactory

TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)


# ---------------------------------------------------------------------------
# Per-test engine (SQLite in-memory by default, shared via StaticPool so every session in
# the test sees the same data). A new engine per test gives each test an empty
# database, so sessions can commit for real.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine():
    """Create the test engine (TEST_DATABASE_URL) and all tables."""
    # Import Base here (after env vars are set) to ensure models register.
    from app.core.database import Base
    import app.models  # noqa: F401

    if TEST_DATABASE_URL.startswith("sqlite"):
        test_engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        test_engine = create_async_engine(TEST_DATABASE_URL)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for the test."""
    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


# ---------------------------------------------------------------------------
# Override FastAPI database dependency to use the test session.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an httpx AsyncClient backed by the FastAPI app.

    The app's get_db dependency is overridden to yield the test session so all
    requests in a test share it and see any data seeded in that test.
    """
    from app.core.database import get_db
    from app.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seeded fixtures
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def users(db_session: AsyncSession):
    """Three committed users, ascending ids."""
    created = [
        await UserFactory.create_async(db_session, name="Alice", bio="Likes hiking"),
        await UserFactory.create_async(db_session, name="Bob", bio=None),
        await UserFactory.create_async(db_session, name="Carol", bio="Reads a lot"),
    ]
    await db_session.commit()
    return created


@pytest.fixture
def user_ids(users) -> list[int]:
    """Plain ids of the seeded users (safe to use after a rollback)."""
    return [u.id for u in users]
