"""Tests for the HTTP endpoints."""

from types import SimpleNamespace

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from doubles import FailingMappingStore, InMemoryMappingStore, ScriptedCodeGenerator
from tinyurl.main import create_app
from tinyurl.services.allocator import Allocator
from tinyurl.services.code_generator import CodeGenerator
from tinyurl.services.resolver import Resolver


def app_with_store(test_settings, store, generator=None, max_attempts=5):
    """Build an app wired to a test double instead of the database."""
    generator = generator or CodeGenerator()
    app = create_app(test_settings)
    app.state.services = SimpleNamespace(
        allocator=Allocator(store, generator, max_attempts=max_attempts),
        resolver=Resolver(store),
    )
    return app


@pytest.mark.asyncio
class TestShortenAndResolve:
    """End-to-end through FastAPI and SQLite."""

    async def test_example_scenario(self, client):
        response = await client.post("/", json={"url": "https://example.com/a"})
        assert response.status_code == 201
        body = response.json()
        code = body["code"]
        assert len(code) == 6
        assert code.isalnum()
        assert body["short_url"] == f"http://testserver/{code}"

        response = await client.get(f"/resolve/{code}")
        assert response.status_code == 200
        assert response.json() == {"code": code, "url": "https://example.com/a"}

        response = await client.get("/resolve/zzzzzz")
        assert response.status_code == 404

    async def test_shorten_alias_path(self, client):
        response = await client.post("/shorten", json={"url": "https://example.com/b"})
        assert response.status_code == 201
        assert "code" in response.json()

    async def test_redirect(self, client, sample_urls):
        for url in sample_urls:
            code = (await client.post("/", json={"url": url})).json()["code"]

            response = await client.get(f"/{code}")

            assert response.status_code == 308
            assert response.headers["location"] == url

    async def test_redirect_unknown_code(self, client):
        response = await client.get("/zzzzzz")
        assert response.status_code == 404

    async def test_malformed_code_is_not_found(self, client):
        response = await client.get("/doesNotExist")
        assert response.status_code == 404
        response = await client.get("/resolve/doesNotExist")
        assert response.status_code == 404

    @pytest.mark.parametrize("url", ["", "   ", "not-a-url", "ftp://example.com/file"])
    async def test_invalid_url_is_400(self, client, url):
        response = await client.post("/", json={"url": url})
        assert response.status_code == 400

    async def test_malformed_body_is_422(self, client):
        response = await client.post("/", json={"link": "https://example.com"})
        assert response.status_code == 422

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_response_time_header(self, client):
        response = await client.get("/health")
        assert float(response.headers["x-response-time-ms"]) >= 0

    async def test_lone_surrogate_url_is_400(self, client):
        """A URL that cannot be encoded as UTF-8 is a client error."""
        response = await client.post(
            "/",
            content=b'{"url": "https://example.com/\\ud800"}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "UTF-8" in response.json()["detail"]

    async def test_control_character_url_is_400(self, client):
        response = await client.post("/", json={"url": "https://example.com/a\x00b"})
        assert response.status_code == 400

    async def test_rejected_url_is_truncated_in_detail(self, client):
        url = "ftp://example.com/" + "a" * 1000
        response = await client.post("/", json={"url": url})
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert url not in detail
        assert len(detail) < 200


@pytest.mark.asyncio
class TestErrorMapping:
    """Failure outcomes map to HTTP statuses."""

    async def test_exhaustion_is_500(self, test_settings):
        store = InMemoryMappingStore({"AAAAAA": "https://taken.example.com"})
        app = app_with_store(test_settings, store, ScriptedCodeGenerator(["AAAAAA"]), max_attempts=3)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            response = await ac.post("/", json={"url": "https://example.com/a"})

        assert response.status_code == 500
        assert len(store.insert_calls) == 3

    async def test_storage_failure_on_shorten_is_503(self, test_settings):
        app = app_with_store(test_settings, FailingMappingStore())

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            response = await ac.post("/", json={"url": "https://example.com/a"})

        assert response.status_code == 503

    async def test_storage_failure_on_resolve_is_503(self, test_settings):
        app = app_with_store(test_settings, FailingMappingStore())

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            redirect = await ac.get("/QxidHT")
            resolved = await ac.get("/resolve/QxidHT")

        assert redirect.status_code == 503
        assert resolved.status_code == 503


@pytest.mark.asyncio
class TestRequestLogging:
    """The access log level follows the response status."""

    async def test_success_logged_at_info(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="tinyurl.http"):
            await client.post("/", json={"url": "https://example.com/a"})

        records = [r for r in caplog.records if r.name == "tinyurl.http"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "POST / -> 201" in records[0].getMessage()

    async def test_not_found_logged_at_info(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="tinyurl.http"):
            await client.get("/zzzzzz")

        records = [r for r in caplog.records if r.name == "tinyurl.http"]
        assert [r.levelno for r in records] == [logging.INFO]
        assert "-> 404" in records[0].getMessage()

    async def test_storage_failure_logged_at_error(self, test_settings, caplog):
        app = app_with_store(test_settings, FailingMappingStore())

        with caplog.at_level(logging.INFO, logger="tinyurl.http"):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
                await ac.get("/QxidHT")

        records = [r for r in caplog.records if r.name == "tinyurl.http"]
        assert [r.levelno for r in records] == [logging.ERROR]
        assert "GET /QxidHT -> 503" in records[0].getMessage()
