"""Evidence Integrity - Database Session Management
Supports PostgreSQL (production) and SQLite (testing).
"""

import asyncio
import os
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import db_settings

from .models import Base


ENV_VAR = "EVIDENCE_INTEGRITY_ENV"


def get_async_database_url() -> str:
    """Get async database URL from environment."""
    env = os.getenv(ENV_VAR, "development")

    if env == "test":
        url = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://")
        return url

    url = os.getenv("DATABASE_URL", "")

    # In production, require explicit DATABASE_URL
    if env == "production" and not url:
        raise RuntimeError(
            "DATABASE_URL must be set in production mode. "
            f"Set {ENV_VAR}=development for local development."
        )

    # Block SQLite in production
    if env == "production" and "sqlite" in url.lower():
        raise RuntimeError("SQLite is not supported in production mode. Use PostgreSQL.")

    if not url:
        return db_settings.async_url

    # Convert to async URL if needed
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://")
    return url


def _get_async_engine_kwargs(url: str):
    """Get async engine keyword arguments based on database type."""
    if "sqlite" in url:
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": db_settings.pool_size,
        "max_overflow": db_settings.max_overflow,
    }


def get_async_engine(url: str | None = None):
    """Create async database engine."""
    db_url = url or get_async_database_url()
    return create_async_engine(db_url, **_get_async_engine_kwargs(db_url))


# Lazy initialization - only create the engine when needed
_async_engine = None
_async_session_local = None


def _get_async_engine_instance():
    global _async_engine
    if _async_engine is None:
        _async_engine = get_async_engine()
    return _async_engine


def _get_async_session_local():
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            _get_async_engine_instance(), class_=AsyncSession, expire_on_commit=False
        )
    return _async_session_local


async def init_db_async():
    """Initialize database tables."""
    eng = _get_async_engine_instance()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Dispose the engine and its pool."""
    global _async_engine, _async_session_local
    if _async_engine is not None:
        await _async_engine.dispose()
    _async_engine = None
    _async_session_local = None


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Async database session for scripts and the CLI."""
    AsyncSessionLocal = _get_async_session_local()
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# Dependency for FastAPI
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    AsyncSessionLocal = _get_async_session_local()
    async with AsyncSessionLocal() as session:
        yield session


async def test_connection() -> bool:
    """Test database connection."""
    try:
        engine = _get_async_engine_instance()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection test failed: {e}")
        return False


async def wait_for_database(max_wait: float = 60.0, interval: float = 2.0) -> bool:
    """Wait for database to become available.

    Args:
        max_wait: Maximum time to wait in seconds
        interval: Time between connection attempts

    Returns:
        True if database became available
    """
    start = time.time()

    while time.time() - start < max_wait:
        if await test_connection():
            logger.info("Database connection established")
            return True

        logger.info(f"Waiting for database... ({time.time() - start:.0f}s / {max_wait:.0f}s)")
        await asyncio.sleep(interval)

    logger.error(f"Database not available after {max_wait}s")
    return False
