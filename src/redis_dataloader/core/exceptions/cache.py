"""
Cache-Related Exceptions

All exceptions raised by the Redis store layer.
"""

from redis_dataloader.core.exceptions.base import RedisDataLoaderError


class CacheError(RedisDataLoaderError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when unable to connect to Redis.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class CacheKeyError(CacheError):
    """
    Raised when a Redis command on a key fails.

    Fails the whole resolution pass: store errors are not isolated per key.
    """
    pass
