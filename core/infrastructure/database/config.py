"""
Database configuration.

Manages engine creation, the session factory and schema creation.
"""
from typing import Optional
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.settings.sections import DatabaseSettings


logger = logging.getLogger(__name__)


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    SQLite gets a single shared connection (StaticPool) for in-memory
    databases; every other backend uses a pre-pinged pool.

    Returns:
        Configured async engine
    """
    url = make_url(settings.database_url)
    logger.info(f"Creating database engine: {url.render_as_string(hide_password=True)}")

    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_async_engine(url, echo=settings.echo_sql, **kwargs)

    return create_async_engine(
        url,
        echo=settings.echo_sql,
        pool_pre_ping=True,  # Test connections before using
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Global engine instance
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """
    Get or create global engine instance.

    Returns:
        Global async engine
    """
    global _engine

    if _engine is None:
        from core.settings import get_app_settings

        _engine = create_engine(get_app_settings().database)

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get session factory bound to the global engine.

    Returns:
        Session factory for creating sessions
    """
    global _session_factory

    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())

    return _session_factory


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(engine: Optional[AsyncEngine] = None) -> None:
    """
    Initialize database.

    Creates all tables if they don't exist.
    """
    from core.data.models import Base

    logger.info("Initializing database...")

    engine = engine or get_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("✅ Database initialized successfully")


async def close_database() -> None:
    """Close database connections."""
    global _engine, _session_factory

    if _engine is not None:
        logger.info("Closing database connections...")
        await _engine.dispose()
        logger.info("✅ Database connections closed")

    _engine = None
    _session_factory = None
