"""
Service Lifecycle Manager

This module builds and tears down the process-wide resources: the database
engine with its connection pool, and the store, allocator and resolver
built on top of it.

Design:
- Built once on application startup, disposed on shutdown
- Held on app.state and handed to endpoints through dependencies; nothing
  is reachable through module globals
- The connection pool is the only state shared between requests
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from tinyurl.core.setting import Settings
from tinyurl.db.session import create_session_maker, get_database_adapter, init_models
from tinyurl.services.allocator import Allocator
from tinyurl.services.code_generator import CodeGenerator
from tinyurl.services.mapping_store import SQLMappingStore
from tinyurl.services.resolver import Resolver

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    """Handles injected into request handlers."""
    engine: AsyncEngine
    store: SQLMappingStore
    allocator: Allocator
    resolver: Resolver

    async def close(self) -> None:
        await self.engine.dispose()


async def initialize_services(app_settings: Settings) -> AppServices:
    """
    Connect to the database and wire up the shortener core.

    Creates missing tables when CREATE_TABLES is enabled.
    """
    adapter = get_database_adapter(app_settings)
    engine = adapter.create_engine(app_settings.DATABASE_URL)
    logger.info(f"Using {adapter.get_dialect_name()} database")

    try:
        if app_settings.CREATE_TABLES:
            await init_models(engine)
    except Exception:
        await engine.dispose()
        raise

    store = SQLMappingStore(
        session_maker=create_session_maker(engine),
        adapter=adapter,
        timeout=app_settings.STORE_TIMEOUT_SECONDS,
    )
    generator = CodeGenerator(
        length=app_settings.SHORT_CODE_LENGTH,
        alphabet=app_settings.SHORT_CODE_ALPHABET,
    )
    services = AppServices(
        engine=engine,
        store=store,
        allocator=Allocator(
            store,
            generator,
            max_attempts=app_settings.MAX_ALLOCATION_ATTEMPTS,
            max_url_length=app_settings.MAX_URL_LENGTH,
        ),
        resolver=Resolver(store),
    )

    logger.info(
        f"Shortener initialized: code_length={generator.length}, "
        f"max_attempts={app_settings.MAX_ALLOCATION_ATTEMPTS}"
    )
    return services


async def shutdown_services(services: AppServices) -> None:
    """Release the connection pool."""
    logger.info("Disposing database engine")
    await services.close()
