"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).

The cache only ever holds code -> original_url. It is an accelerator:
every backend reports its own failures as a miss / False and never raises,
so a broken cache can't fail a request.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple
import logging
import time

logger = logging.getLogger(__name__)


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    This is the Strategy Pattern interface - allows multiple cache implementations
    without changing the service layer code.

    All methods are async because cache operations involve I/O (network for Redis).
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 86400) -> bool:
        """
        Set value in cache with TTL (Time To Live).

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (default: 24 hours)

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Args:
            key: Cache key

        Returns:
            True if deleted, False if key didn't exist or the delete failed
        """
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache implementation.

    - Shared by every server process
    - TTL enforced by Redis (SETEX)
    - Connection errors are logged and treated as a miss
    """

    def __init__(self, redis_client):
        """
        Initialize Redis cache.

        Args:
            redis_client: Redis client instance (redis.Redis)
        """
        self.redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(key)
        except Exception as e:
            logger.warning("Redis get error for %r: %s", key, e)
            return None
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def set(self, key: str, value: str, ttl: int = 86400) -> bool:
        try:
            return bool(self.redis.setex(key, ttl, value))
        except Exception as e:
            logger.warning("Redis set error for %r: %s", key, e)
            return False

    async def delete(self, key: str) -> bool:
        try:
            return bool(self.redis.delete(key))
        except Exception as e:
            logger.warning("Redis delete error for %r: %s", key, e)
            return False


class InMemoryCache(CacheStrategy):
    """
    In-memory cache implementation using Python dict.

    Entries expire after their TTL (checked lazily on read).
    Not shared between processes, so it's meant for development and tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize in-memory cache.

        Args:
            clock: Time source in seconds (injectable for tests)
        """
        self._cache: Dict[str, Tuple[str, float]] = {}
        self._clock = clock

    async def get(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._cache[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: int = 86400) -> bool:
        self._cache[key] = (value, self._clock() + ttl)
        return True

    async def delete(self, key: str) -> bool:
        return self._cache.pop(key, None) is not None


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Every lookup goes to the relational store.
    """

    async def get(self, key: str) -> Optional[str]:
        """Always returns None (cache miss)"""
        return None

    async def set(self, key: str, value: str, ttl: int = 86400) -> bool:
        """Pretends to set but does nothing"""
        return True

    async def delete(self, key: str) -> bool:
        """Nothing to delete"""
        return False
