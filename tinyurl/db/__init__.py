"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter / PostgreSQLAdapter: concrete backends
- Session management: engine and session factory construction

To add a new database backend:
1. Create a new adapter class inheriting from DatabaseAdapter
2. Implement all abstract methods
3. Return it from get_database_adapter() in session.py
"""

from tinyurl.db.interface import DatabaseAdapter
from tinyurl.db.models import UrlMapping
from tinyurl.db.session import create_session_maker, get_database_adapter, init_models

__all__ = [
    "DatabaseAdapter",
    "UrlMapping",
    "create_session_maker",
    "get_database_adapter",
    "init_models",
]
