"""Tests for the resolver read path."""

import pytest

from doubles import FailingMappingStore, InMemoryMappingStore
from tinyurl.core.exceptions import StorageError
from tinyurl.services.resolver import Resolver, could_be_stored_code


@pytest.mark.asyncio
class TestResolver:

    async def test_known_code(self):
        store = InMemoryMappingStore({"QxidHT": "https://example.com/a"})
        resolver = Resolver(store)

        assert await resolver.resolve("QxidHT") == "https://example.com/a"

    async def test_repeated_reads_are_stable(self):
        store = InMemoryMappingStore({"QxidHT": "https://example.com/a"})
        resolver = Resolver(store)

        results = [await resolver.resolve("QxidHT") for _ in range(5)]

        assert results == ["https://example.com/a"] * 5

    async def test_unknown_code(self):
        resolver = Resolver(InMemoryMappingStore())
        assert await resolver.resolve("zzzzzz") is None

    async def test_long_unknown_code_is_looked_up(self):
        store = InMemoryMappingStore()
        resolver = Resolver(store)

        assert await resolver.resolve("doesNotExist") is None
        assert store.lookup_calls == ["doesNotExist"]

    async def test_codes_issued_under_other_settings_still_resolve(self):
        """Changing code length or alphabet does not orphan earlier codes."""
        store = InMemoryMappingStore({
            "abc": "https://example.com/short",
            "Ab12Cd34": "https://example.com/long",
            "ab-12_": "https://example.com/symbols",
        })
        resolver = Resolver(store)

        assert await resolver.resolve("abc") == "https://example.com/short"
        assert await resolver.resolve("Ab12Cd34") == "https://example.com/long"
        assert await resolver.resolve("ab-12_") == "https://example.com/symbols"

    @pytest.mark.parametrize("code", ["", "x" * 17, "abc 12", "ab/c12", "ébc123", "ab\x00c"])
    async def test_malformed_code_skips_store(self, code):
        store = InMemoryMappingStore()
        resolver = Resolver(store)

        assert await resolver.resolve(code) is None
        assert store.lookup_calls == []

    async def test_storage_error_propagates(self):
        resolver = Resolver(FailingMappingStore())

        with pytest.raises(StorageError):
            await resolver.resolve("QxidHT")


class TestStoredCodeShape:

    @pytest.mark.parametrize("code", ["a", "QxidHT", "x" * 16, "ab-12_"])
    def test_accepted(self, code):
        assert could_be_stored_code(code)

    def test_non_string_rejected(self):
        assert not could_be_stored_code(None)
