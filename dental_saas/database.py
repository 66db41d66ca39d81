"""
Dental SaaS Backend — Database Engine & Session Management
============================================================

What:  Async SQLAlchemy engine factory, session factory and declarative base.
How:   `build_engine()` creates an async engine with connection pooling;
       `build_session_factory()` binds an `async_sessionmaker` to it.
Who:   Used by `repositories.sql.SqlStore`, Alembic and the test suite.
When:  The engine is created once per application instance (create_app);
       sessions are created per repository operation.

Connection Pooling Strategy:
    pool_size / max_overflow come from settings for server databases.
    SQLite (aiosqlite) URLs skip pool arguments: the dialect picks its own
    pool class and rejects sizing options.
    pool_recycle=3600 recycles connections every hour.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from dental_saas.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every entity table registers on this metadata; Alembic and the
    startup table bootstrap both read it.
    """
    pass


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create an async engine for the configured store.

    Args:
        database_url: Override for settings.database_url (tests pass a temp SQLite file).
    """
    url = database_url or settings.database_url
    options = {"echo": settings.log_level == "DEBUG"}

    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    return create_async_engine(url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows are read after the transaction closes
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def verify_connection(engine: AsyncEngine) -> None:
    """
    What:  Runs SELECT 1 against the store.
    When:  Application startup (fatal on failure) and GET /health.
    Raises whatever the driver raises; callers decide how fatal it is.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def create_tables(engine: AsyncEngine) -> None:
    """
    What:  Creates every registered entity table that does not exist yet.
    How:   Base.metadata.create_all is idempotent (checkfirst=True).
    """
    # Import models so their tables are registered on Base.metadata
    from dental_saas import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Gracefully closes all connections in the pool (application shutdown)."""
    await engine.dispose()
