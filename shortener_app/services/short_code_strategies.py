"""
Short code generation strategies for URL shortener.
Uses Strategy Pattern to allow different generation algorithms.

Generators don't guarantee uniqueness: the caller checks the store and
the database unique constraint settles races.
"""

import string
import uuid
from abc import ABC, abstractmethod
from typing import Callable


# 62 characters: a-z, A-Z, 0-9
SHORT_CODE_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits
SHORT_CODE_LENGTH = 6


def generate_short_code_from_bytes(random_bytes: bytes, length: int = SHORT_CODE_LENGTH) -> str:
    """
    Map random bytes to a short code.

    Each byte b becomes SHORT_CODE_CHARS[b % 62], so the result is
    deterministic for fixed input.

    Raises:
        ValueError: If fewer than `length` bytes are given
    """
    if len(random_bytes) < length:
        raise ValueError(f"Need {length} random bytes, got {len(random_bytes)}")
    return "".join(
        SHORT_CODE_CHARS[b % len(SHORT_CODE_CHARS)] for b in random_bytes[:length]
    )


def _uuid4_bytes() -> bytes:
    return uuid.uuid4().bytes


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a short code.

        Returns:
            A short code string (not guaranteed unique)
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation from a UUID4.

    uuid4 is backed by os.urandom, so codes are unpredictable.
    The byte source is injectable to make generation reproducible in tests.
    """

    def __init__(
        self,
        length: int = SHORT_CODE_LENGTH,
        random_bytes: Callable[[], bytes] = _uuid4_bytes
    ):
        # a UUID carries 16 bytes
        if not 1 <= length <= 16:
            raise ValueError(f"Short code length must be between 1 and 16, got {length}")
        self.length = length
        self.random_bytes = random_bytes

    def generate(self) -> str:
        return generate_short_code_from_bytes(self.random_bytes(), self.length)


def generate_short_code() -> str:
    """Generate a random 6-character short code."""
    return RandomShortCodeStrategy().generate()
