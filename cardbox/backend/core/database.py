"""
Async engine and sessions for the card database.

The engine is built on first use, not at import, so modules can be imported
(and tests can patch get_session_factory) without a configured database.
Pool settings from database.yaml only apply to server databases; SQLite
drivers pool on their own.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cardbox.backend.core.config import get_app_config, get_database_url, is_sqlite_url
from cardbox.backend.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        url = get_database_url()
        db = get_app_config().database
        pool_options = {} if is_sqlite_url(url) else {
            "pool_size": db.pool_size,
            "max_overflow": db.max_overflow,
            "pool_timeout": db.pool_timeout,
            "pool_recycle": db.pool_recycle,
        }
        _engine = create_async_engine(url, echo=db.echo, **pool_options)
        logger.debug("Database engine created", extra={"dialect": _engine.dialect.name})
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def create_tables() -> None:
    """CREATE TABLE IF NOT EXISTS for every model; alembic owns real migrations."""
    from cardbox.backend.models.base import Base
    from cardbox.backend.models import card  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request.

    Committed when the endpoint returns, rolled back if it raises.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
