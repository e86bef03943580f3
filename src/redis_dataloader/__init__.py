"""
redis-dataloader

Batched read-through Redis cache with negative caching.

Usage:
------
```python
from redis_dataloader import RedisClient, RedisDataLoader, NotFoundError

client = RedisClient()
await client.connect()

users = RedisDataLoader("users", fetch_users, client=client, ttl=600)
user = await users.load(42)
```
"""

from redis_dataloader.core.exceptions import (
    BatchSizeMismatchError,
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    ConfigurationError,
    DuplicateLoaderNameError,
    EmptyKeysError,
    NotFoundError,
    RedisDataLoaderError,
)
from redis_dataloader.infrastructure.cache.redis_client import RedisClient
from redis_dataloader.loader.redis_dataloader import RedisDataLoader
from redis_dataloader.loader.registry import NameRegistry, get_default_registry

__version__ = "1.0.0"

__all__ = [
    "RedisDataLoader",
    "RedisClient",
    "NameRegistry",
    "get_default_registry",
    "RedisDataLoaderError",
    "ConfigurationError",
    "DuplicateLoaderNameError",
    "EmptyKeysError",
    "BatchSizeMismatchError",
    "NotFoundError",
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
]
