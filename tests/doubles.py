"""Test doubles for the mapping store and code generator."""

import asyncio
from typing import Iterable, Optional

from tinyurl.core.exceptions import StorageError
from tinyurl.services.code_generator import CodeGenerator
from tinyurl.services.mapping_store import InsertOutcome, MappingStore


class InMemoryMappingStore(MappingStore):
    """Dict-backed store; check and set run without a suspension point."""

    def __init__(self, rows: Optional[dict] = None):
        self.rows = dict(rows or {})
        self.insert_calls = []
        self.lookup_calls = []

    async def insert(self, code: str, target_url: str) -> InsertOutcome:
        self.insert_calls.append(code)
        await asyncio.sleep(0)
        if code in self.rows:
            return InsertOutcome.CONFLICT
        self.rows[code] = target_url
        return InsertOutcome.INSERTED

    async def lookup(self, code: str) -> Optional[str]:
        self.lookup_calls.append(code)
        await asyncio.sleep(0)
        return self.rows.get(code)


class FailingMappingStore(MappingStore):
    """Store whose every operation fails."""

    def __init__(self):
        self.insert_calls = 0

    async def insert(self, code: str, target_url: str) -> InsertOutcome:
        self.insert_calls += 1
        raise StorageError("connection refused")

    async def lookup(self, code: str) -> Optional[str]:
        raise StorageError("connection refused")


class ScriptedCodeGenerator(CodeGenerator):
    """Returns the given codes in order, repeating the last one forever."""

    def __init__(self, codes: Iterable[str]):
        super().__init__(length=6)
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code
