"""
Core Module

Foundational components: configuration, logging, exceptions and the store protocol.
"""

from .exceptions import (
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
from .interfaces import CacheBackend
from .logging import get_logger, log_stage, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_stage",
    "CacheBackend",
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
