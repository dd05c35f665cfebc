"""
Concurrency tests against a database shared by separate connections.

Each task uses its own session and connection, so the database decides the
race, not the in-process pre-checks. The tests always run on a file-backed
SQLite database, and also on PostgreSQL when ``TEST_DATABASE_URL`` points at
one. SQLite admits one writer at a time; PostgreSQL runs the transactions
truly interleaved under READ COMMITTED.
"""

from __future__ import annotations

import asyncio
import os

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.core.exceptions import DuplicateSwipe
from app.models.match import Match
from app.models.swipe import Swipe
from app.services.matching_engine import MatchingEngine
from tests.factories import UserFactory

POSTGRES_URL = os.getenv("TEST_DATABASE_URL", "")


@pytest_asyncio.fixture(params=["sqlite", "postgresql"])
async def shared_db(request, tmp_path):
    """Yield (sessionmaker, [user ids]) for three committed users."""
    from app.core.database import Base
    import app.models  # noqa: F401

    if request.param == "sqlite":
        db_engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'race.db'}",
            connect_args={"timeout": 30},
        )
    else:
        if not POSTGRES_URL.startswith("postgresql"):
            pytest.skip("TEST_DATABASE_URL does not point at PostgreSQL")
        db_engine = create_async_engine(POSTGRES_URL, pool_size=15)

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        created = [
            await UserFactory.create_async(session, name=name)
            for name in ("Alice", "Bob", "Carol")
        ]
        await session.commit()
        user_ids = [u.id for u in created]

    yield factory, user_ids

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await db_engine.dispose()


async def _count(factory, model) -> int:
    async with factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


class TestConcurrentSwipes:
    async def test_identical_swipes_record_exactly_one(self, shared_db):
        factory, (alice, bob, _) = shared_db
        engine = MatchingEngine()

        async def attempt():
            async with factory() as session:
                return await engine.record_swipe(session, alice, bob, True)

        results = await asyncio.gather(*(attempt() for _ in range(10)), return_exceptions=True)

        successes = [r for r in results if not isinstance(r, BaseException)]
        duplicates = [r for r in results if isinstance(r, DuplicateSwipe)]
        assert len(successes) == 1
        assert len(duplicates) == 9
        assert await _count(factory, Swipe) == 1

    async def test_crossing_likes_create_one_match(self, shared_db):
        factory, (alice, bob, _) = shared_db
        engine = MatchingEngine()

        async def like(swiper_id, target_id):
            async with factory() as session:
                return await engine.record_swipe(session, swiper_id, target_id, True)

        results = await asyncio.gather(like(alice, bob), like(bob, alice))

        assert sum(r.match_created for r in results) == 1
        assert await _count(factory, Match) == 1
        assert await _count(factory, Swipe) == 2

    async def test_crossing_likes_on_many_pairs(self, shared_db):
        factory, (alice, bob, carol) = shared_db
        engine = MatchingEngine()
        pairs = [(alice, bob), (bob, carol), (carol, alice)]

        async def like(swiper_id, target_id):
            async with factory() as session:
                return await engine.record_swipe(session, swiper_id, target_id, True)

        results = await asyncio.gather(
            *(like(a, b) for a, b in pairs),
            *(like(b, a) for a, b in pairs),
        )

        assert sum(r.match_created for r in results) == 3
        assert await _count(factory, Match) == 3
