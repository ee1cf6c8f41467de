"""
Shared database fixtures.

Each test gets its own freshly created schema, so ids start at 1 and no
rows or AUTOINCREMENT state leak between tests. In-memory SQLite is the
default; point TEST_DATABASE_URL at PostgreSQL (asyncpg) to run the same
tests there.
"""

import os
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from cardbox.backend.core.config import is_sqlite_url
from cardbox.backend.models.base import Base
from cardbox.backend.models import card  # noqa: F401

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    if is_sqlite_url(TEST_DATABASE_URL):
        # One shared connection, or every session would see its own empty :memory: db
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for one test; whatever it flushed is rolled back afterwards."""
    async with db_session_factory() as session:
        yield session
        await session.rollback()
