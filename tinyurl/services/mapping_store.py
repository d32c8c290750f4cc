"""
Mapping Store

Durable persistence for short code mappings. The store is the only
component that touches the database and the sole arbiter of code
uniqueness.

Design Decisions:
- insert() is a single conflict-ignoring INSERT: a duplicate code is
  detected by the primary key inside the database, never by a prior read
- A duplicate is reported as InsertOutcome.CONFLICT, an ordinary return
  value the allocator retries on
- Every other failure (connectivity, pool exhaustion, timeout) becomes
  StorageError
- Each operation checks out its own session, bounded by a timeout
"""

import asyncio
import enum
import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from tinyurl.core.exceptions import StorageError
from tinyurl.db.interface import DatabaseAdapter
from tinyurl.db.models import UrlMapping, utcnow

logger = logging.getLogger(__name__)


class InsertOutcome(enum.Enum):
    """Result of a single insert attempt."""
    INSERTED = "inserted"
    CONFLICT = "conflict"


class MappingStore(ABC):
    """Contract the allocator and resolver depend on."""

    @abstractmethod
    async def insert(self, code: str, target_url: str) -> InsertOutcome:
        """
        Persist a new mapping.

        Returns:
            INSERTED if the row was written, CONFLICT if the code exists

        Raises:
            StorageError: On any other failure
        """

    @abstractmethod
    async def lookup(self, code: str) -> Optional[str]:
        """
        Fetch the URL for a code.

        Returns:
            The stored URL, or None if no mapping has this code

        Raises:
            StorageError: On any failure
        """


class SQLMappingStore(MappingStore):
    """
    MappingStore backed by SQLAlchemy (SQLite or PostgreSQL).

    Holds only the injected session factory and adapter; no per-request
    state lives on the instance, so one store serves all requests.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker,
        adapter: DatabaseAdapter,
        timeout: float = 5.0,
    ):
        self.session_maker = session_maker
        self.adapter = adapter
        self.timeout = timeout

    async def insert(self, code: str, target_url: str) -> InsertOutcome:
        inserted = await self._bounded(self._insert(code, target_url), "insert")
        return InsertOutcome.INSERTED if inserted else InsertOutcome.CONFLICT

    async def lookup(self, code: str) -> Optional[str]:
        return await self._bounded(self._lookup(code), "lookup")

    async def _insert(self, code: str, target_url: str) -> bool:
        statement = self.adapter.build_conflict_free_insert({
            "code": code,
            "target_url": target_url,
            "created_at": utcnow(),
        })
        async with self.session_maker() as session:
            result = await session.execute(statement)
            returned = result.scalar_one_or_none()
            await session.commit()
        return returned is not None

    async def _lookup(self, code: str) -> Optional[str]:
        statement = select(UrlMapping.target_url).where(UrlMapping.code == code)
        async with self.session_maker() as session:
            result = await session.execute(statement)
            return result.scalar_one_or_none()

    async def _bounded(self, operation, name: str):
        """Run a store coroutine under the timeout, translating failures."""
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise StorageError(
                f"{name} timed out after {self.timeout}s", original_error=e
            ) from e
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"{name} failed: {e}", original_error=e) from e
