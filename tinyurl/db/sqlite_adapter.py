"""
SQLite Database Adapter

This module implements the DatabaseAdapter interface for SQLite.
All SQLite-specific configuration and behavior is encapsulated here.

SQLite is a file-based database that's perfect for:
- Local development
- Testing
- Single-instance deployments

Key characteristics:
- File-based (single .db file)
- No server required
- Single writer at a time (file locking with a busy timeout)
"""

from typing import Any

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from sqlalchemy.sql.dml import Insert

from tinyurl.db.interface import DatabaseAdapter
from tinyurl.db.models import UrlMapping


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.

    Every operation opens its own connection (NullPool); concurrent writers
    wait on SQLite's file lock for up to busy_timeout seconds.
    """

    def __init__(self, busy_timeout: float = 5.0):
        self.busy_timeout = busy_timeout

    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Create SQLite async engine with appropriate configuration.

        Args:
            database_url: SQLite connection string (sqlite+aiosqlite:///...)
            **kwargs: Additional engine options (merged with SQLite defaults)

        Returns:
            Configured AsyncEngine for SQLite
        """
        engine_kwargs = self.get_engine_kwargs()
        engine_kwargs.update(kwargs)

        return create_async_engine(
            database_url,
            poolclass=self.get_pool_class(),
            connect_args=self.get_connect_args(),
            **engine_kwargs
        )

    def get_pool_class(self) -> type[NullPool]:
        """
        SQLite uses NullPool: a file-based database gains nothing from
        keeping connections open, and SQLite serializes writers anyway.
        """
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "check_same_thread": False,
            "timeout": self.busy_timeout,
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False  # Set to True only for SQL debugging in development
        }

    def build_conflict_free_insert(self, values: dict[str, Any]) -> Insert:
        """
        INSERT ... ON CONFLICT (code) DO NOTHING RETURNING code.

        Requires SQLite 3.35+ for RETURNING.
        """
        table = UrlMapping.__table__
        return (
            sqlite_insert(table)
            .values(**values)
            .on_conflict_do_nothing(index_elements=[table.c.code])
            .returning(table.c.code)
        )

    def get_dialect_name(self) -> str:
        return "sqlite"
