"""
Short Code Allocator

Turns a submitted URL into exactly one newly stored mapping, or an
explicit failure.

Algorithm:
1. Validate the URL (InvalidInputError)
2. Draw a candidate code
3. Insert it; the store answers INSERTED or CONFLICT
4. On CONFLICT draw again, up to max_attempts inserts in total
   (AllocationExhaustedError once the bound is spent)
5. StorageError from the store propagates untouched; retrying a failed
   store is the caller's decision, not ours
"""

import logging

from tinyurl.core.exceptions import AllocationExhaustedError, InvalidInputError
from tinyurl.core.validators import url_rejection_reason
from tinyurl.services.code_generator import CodeGenerator
from tinyurl.services.mapping_store import InsertOutcome, MappingStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class Allocator:
    """
    Allocate short codes with bounded collision retry.

    Stateless between calls: any number of shorten() calls may run
    concurrently against the same instance.
    """

    def __init__(
        self,
        store: MappingStore,
        generator: CodeGenerator,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        max_url_length: int = 2048,
    ):
        """
        Args:
            store: Mapping store that enforces code uniqueness
            generator: Source of candidate codes
            max_attempts: Total insert attempts before giving up
            max_url_length: Longest URL accepted
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.store = store
        self.generator = generator
        self.max_attempts = max_attempts
        self.max_url_length = max_url_length

    async def shorten(self, url: str) -> str:
        """
        Store a new mapping for url and return its code.

        Raises:
            InvalidInputError: If the URL is rejected
            AllocationExhaustedError: If every attempt collided
            StorageError: If the store fails
        """
        reason = url_rejection_reason(url, max_length=self.max_url_length)
        if reason is not None:
            raise InvalidInputError(url, reason=reason)

        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate()
            outcome = await self.store.insert(code, url)

            if outcome is InsertOutcome.INSERTED:
                if attempt > 1:
                    logger.info(f"Allocated code {code} after {attempt} attempts")
                return code

            logger.debug(
                f"Code collision on {code} (attempt {attempt}/{self.max_attempts})"
            )

        logger.error(
            f"Allocation exhausted after {self.max_attempts} attempts; "
            f"code space is {self.generator.space_size} codes"
        )
        raise AllocationExhaustedError(self.max_attempts)
