"""Async engine construction and schema management."""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vela.infrastructure.persistence.sqlalchemy.base import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create the process-wide async engine for ``database_url``."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def _register_models() -> None:
    # Importing the model modules registers their tables on Base.metadata
    import vela_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401, PLC0415


async def create_tables(engine: AsyncEngine) -> None:
    """Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    _register_models()
    logger.info("Ensuring all database tables exist...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema is up to date")


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all database tables (USE WITH CAUTION!)."""
    _register_models()
    logger.warning("Dropping all database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
