"""
Factory for creating cache instances.
"""

import logging
from enum import Enum

from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


class CacheFactory:
    """
    Simple factory for creating cache instances.

    Builds a new instance per call; the application factory owns the one it
    creates and injects it into the resolver.
    """

    @classmethod
    def create(cls, backend: CacheBackend, redis_url: str = "redis://localhost:6379/0") -> CacheStrategy:
        """
        Create a cache instance.

        Args:
            backend: Type of cache backend (from enum)
            redis_url: Connection URL, used by the Redis backend only

        Returns:
            Cache instance (in-memory if Redis is unreachable)
        """
        if backend == CacheBackend.REDIS:
            import redis

            try:
                redis_client = redis.from_url(
                    redis_url,
                    decode_responses=False,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )

                # Test connection immediately
                redis_client.ping()

                logger.info("Redis cache initialized")
                return RedisCache(redis_client)

            except redis.RedisError as e:
                logger.warning("Redis connection failed: %s; falling back to in-memory cache", e)
                return InMemoryCache()

        elif backend == CacheBackend.MEMORY:
            logger.info("In-memory cache initialized")
            return InMemoryCache()

        elif backend == CacheBackend.NULL:
            logger.info("Null cache initialized")
            return NullCache()

        else:
            raise ValueError(f"Unknown cache backend: {backend}")
