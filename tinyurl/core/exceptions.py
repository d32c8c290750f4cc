"""
Custom Exceptions

This module defines the error taxonomy surfaced by the shortener core.

- InvalidInputError: rejected URL, never retried
- AllocationExhaustedError: every allocation attempt collided
- StorageError: connectivity, timeout or serialization failure at the store

Code conflicts are not exceptions: the store reports them as an
InsertOutcome and the allocator retries them locally.
"""

# Longest prefix of rejected input quoted back in error messages
MAX_ECHOED_CHARS = 100


class ShortenerError(Exception):
    """Base exception for the URL shortener service."""
    pass


class InvalidInputError(ShortenerError):
    """Raised when a submitted URL fails validation."""

    def __init__(self, value: str, reason: str = "Invalid input"):
        self.value = value
        self.reason = reason
        shown = value
        if isinstance(value, str) and len(value) > MAX_ECHOED_CHARS:
            shown = value[:MAX_ECHOED_CHARS] + "..."
        super().__init__(f"{reason}: {shown!r}")


class AllocationExhaustedError(ShortenerError):
    """Raised when no free code was found within the attempt bound."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"No free short code found after {attempts} attempts"
        )


class StorageError(ShortenerError):
    """Raised when a mapping store operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Storage error: {message}")
