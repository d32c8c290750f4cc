"""
Services module for business logic separation.

This module contains the short code core, kept separate from API
endpoints and database models:
- CodeGenerator: candidate codes
- MappingStore: uniqueness-enforcing persistence
- Allocator: write path with bounded collision retry
- Resolver: read path
"""

from tinyurl.services.allocator import Allocator
from tinyurl.services.code_generator import CodeGenerator
from tinyurl.services.mapping_store import InsertOutcome, MappingStore, SQLMappingStore
from tinyurl.services.resolver import Resolver

__all__ = [
    "Allocator",
    "CodeGenerator",
    "InsertOutcome",
    "MappingStore",
    "Resolver",
    "SQLMappingStore",
]
