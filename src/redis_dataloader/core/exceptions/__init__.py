"""
Exception Module

Structured exception hierarchy for the loader.

Module Structure:
-----------------
- **base.py**: RedisDataLoaderError base class + configuration errors
- **cache.py**: Redis store exceptions
- **loader.py**: Per-key result exceptions (NotFoundError) and batch contract errors

Usage:
------
```python
from redis_dataloader.core.exceptions import NotFoundError, CacheKeyError
```
"""

from redis_dataloader.core.exceptions.base import (
    ConfigurationError,
    DuplicateLoaderNameError,
    EmptyKeysError,
    RedisDataLoaderError,
)
from redis_dataloader.core.exceptions.cache import CacheConnectionError, CacheError, CacheKeyError
from redis_dataloader.core.exceptions.loader import BatchSizeMismatchError, NotFoundError

__all__ = [
    # Base
    "RedisDataLoaderError",
    "ConfigurationError",
    "DuplicateLoaderNameError",
    "EmptyKeysError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    # Loader
    "NotFoundError",
    "BatchSizeMismatchError",
]
