"""
LinguaCorp API — Database Engine & Session Factory
===================================================

What:  Async SQLAlchemy engine construction, session factory and declarative base.
How:   The application factory calls create_engine_from_settings() only when
       PHRASE_STORE=database; the resulting session factory is handed to
       SqlPhraseService. Nothing here runs at import time.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings and are passed
    to server databases (PostgreSQL via asyncpg). SQLite URLs (aiosqlite, used
    in tests) get SQLAlchemy's default SQLite pool instead, which rejects
    those arguments.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from linguacorp.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for migrations.
    """
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured database URL.

    SQL echo is switched on when LOG_LEVEL=DEBUG.
    """
    engine_kwargs: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}

    if not settings.database_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    return create_async_engine(settings.database_url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory with expire_on_commit=False.

    Stores return ORM attributes after commit; expiring them would trigger a
    lazy reload outside the session.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def dispose_engine(engine: AsyncEngine) -> None:
    """Closes all pooled connections. Called from the lifespan on shutdown."""
    await engine.dispose()
