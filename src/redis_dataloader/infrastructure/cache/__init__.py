"""
Cache Module

Redis store access used by the loader.
"""

from .redis_client import (
    PROBE_SCRIPT,
    RedisClient,
    close_redis,
    get_redis_client,
    init_redis,
)

__all__ = [
    "PROBE_SCRIPT",
    "RedisClient",
    "get_redis_client",
    "init_redis",
    "close_redis",
]
