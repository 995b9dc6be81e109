"""
Factory for creating cache instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum
import logging

from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache
from shortener_app.config import settings
from shortener_app.exceptions import StoreNotConfigured

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


class CacheFactory:
    """
    Simple factory for creating cache instances.

    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).
    """

    _instance: CacheStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: CacheBackend) -> CacheStrategy:
        """
        Create or return cached cache instance.

        Args:
            backend: Type of cache backend (from enum)

        Returns:
            Singleton cache instance
        """
        # Return cached instance if exists
        if cls._instance is not None:
            return cls._instance

        if backend == CacheBackend.REDIS:
            import redis

            # No ping here: an unreachable Redis must not stop the service,
            # RedisCache turns every failed call into a miss.
            redis_client = redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            cls._instance = RedisCache(redis_client)
            logger.info("Redis cache initialized (%s)", settings.redis_url)

        elif backend == CacheBackend.MEMORY:
            cls._instance = InMemoryCache()
            logger.info("In-memory cache initialized")

        elif backend == CacheBackend.NULL:
            cls._instance = NullCache()
            logger.info("Null cache initialized")

        else:
            raise ValueError(f"Unknown cache backend: {backend}")

        return cls._instance

    @classmethod
    def from_settings(cls) -> CacheStrategy:
        """Create the cache configured by settings.cache_backend."""
        if not settings.cache_backend:
            raise StoreNotConfigured("Cache not configured")
        return cls.create(CacheBackend(settings.cache_backend))

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
