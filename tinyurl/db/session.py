"""
Database Engine and Session Management

This module builds the async SQLAlchemy engine and session factory from
settings. Nothing here is created at import time: the application lifespan
calls these functions on startup, keeps the results on app.state, and
disposes the engine on shutdown.

Key Features:
- Database abstraction: the adapter is chosen from DATABASE_URL
- Connection pooling: configured per database type by the adapter
- Table bootstrap: optional create-if-missing on startup
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from tinyurl.core.setting import Settings
from tinyurl.db import models  # noqa: F401  registers tables on SQLModel.metadata
from tinyurl.db.interface import DatabaseAdapter
from tinyurl.db.postgresql_adapter import PostgreSQLAdapter
from tinyurl.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


def get_database_adapter(app_settings: Settings) -> DatabaseAdapter:
    """
    Factory function to get the database adapter for DATABASE_URL.

    Returns:
        SQLiteAdapter for sqlite URLs, PostgreSQLAdapter for postgresql URLs

    Raises:
        ValueError: If the URL names an unsupported backend
    """
    database_url = app_settings.DATABASE_URL
    if database_url.startswith("sqlite"):
        return SQLiteAdapter(busy_timeout=app_settings.STORE_TIMEOUT_SECONDS)
    if database_url.startswith("postgresql"):
        return PostgreSQLAdapter(
            pool_size=app_settings.DB_POOL_SIZE,
            max_overflow=app_settings.DB_MAX_OVERFLOW,
            pool_timeout=app_settings.DB_POOL_TIMEOUT,
            command_timeout=app_settings.STORE_TIMEOUT_SECONDS,
        )
    raise ValueError(f"Unsupported database URL: {database_url}")


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create the async session factory bound to an engine.

    Each store operation opens its own short-lived session from this
    factory, so sessions are never shared between requests.
    """
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create missing tables (CREATE TABLE IF NOT EXISTS semantics)."""
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ensured")
