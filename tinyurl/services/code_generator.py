"""
Short Code Generator

Produces one candidate short code per call by drawing characters uniformly
from a fixed alphabet.

Design Decisions:
- Random, not derived from the URL: the same URL shortened twice gets
  independent candidates
- Base62 alphabet [0-9a-zA-Z], 6 characters: 62**6 (about 5.7e10) codes
- Candidates are NOT unique by construction; the mapping store rejects a
  duplicate and the allocator draws again
- Uses the secrets module, which needs no locking when called from many
  concurrent allocations
"""

import secrets

from tinyurl.core.setting import BASE62_ALPHABET

DEFAULT_CODE_LENGTH = 6


class CodeGenerator:
    """Generate fixed-length short codes over a bounded alphabet."""

    def __init__(self, length: int = DEFAULT_CODE_LENGTH, alphabet: str = BASE62_ALPHABET):
        if length < 1:
            raise ValueError(f"Short code length must be positive, got {length}")
        if len(set(alphabet)) < 2:
            raise ValueError("Short code alphabet needs at least two distinct characters")
        self.length = length
        self.alphabet = alphabet
        self._charset = frozenset(alphabet)

    @property
    def space_size(self) -> int:
        """Number of distinct codes this generator can produce."""
        return len(self._charset) ** self.length

    def generate(self) -> str:
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))
