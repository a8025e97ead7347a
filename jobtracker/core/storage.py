"""Database connection and storage utilities."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jobtracker.core.config import settings

logger = logging.getLogger(__name__)

# Process-wide engine, created on first use
_engine: AsyncEngine | None = None
_session_factory: sessionmaker | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_engine() -> AsyncEngine:
    """Get or create the async database engine."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            str(settings.database_url),
            echo=False,
            pool_pre_ping=True,
        )
        logger.debug("Database engine created")
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory bound to the engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def init_models() -> None:
    """Create tables for all registered models."""
    # Register models on Base.metadata
    import jobtracker.models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_engine() -> None:
    """Dispose of the engine and its connection pool."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.debug("Database engine disposed")
