"""
Resolver

Read path: maps a short code back to its URL. A string that cannot fit the
code column is answered as not found without a database round-trip.

The check is deliberately independent of the configured code length and
alphabet, so codes issued under an earlier configuration keep resolving.
"""

from typing import Optional

from tinyurl.core.setting import CODE_COLUMN_LENGTH
from tinyurl.services.mapping_store import MappingStore


def could_be_stored_code(code: str) -> bool:
    """Check whether a string could be the primary key of a mapping."""
    return (
        isinstance(code, str)
        and 0 < len(code) <= CODE_COLUMN_LENGTH
        and code.isascii()
        and code.isprintable()
        and not any(ch.isspace() or ch == "/" for ch in code)
    )


class Resolver:
    """Look up the URL behind a short code."""

    def __init__(self, store: MappingStore):
        self.store = store

    async def resolve(self, code: str) -> Optional[str]:
        """
        Get the original URL for a short code.

        Returns:
            The stored URL, or None if the code is unknown or malformed

        Raises:
            StorageError: If the store fails
        """
        if not could_be_stored_code(code):
            return None
        return await self.store.lookup(code)
