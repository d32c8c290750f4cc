"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from tinyurl.core.pool_manager import AppServices, initialize_services, shutdown_services
from tinyurl.core.setting import Settings
from tinyurl.main import create_app


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file per test."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'tinyurl-test.db'}",
        BASE_URL="http://testserver",
        CREATE_TABLES=True,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
async def services(test_settings) -> AsyncGenerator[AppServices, None]:
    services = await initialize_services(test_settings)
    yield services
    await shutdown_services(services)


@pytest.fixture
def app(test_settings, services):
    app = create_app(test_settings)
    app.state.services = services
    return app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456?tab=votes#answer-1",
    ]
