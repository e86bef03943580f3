"""
Loader Result Exceptions

Exceptions that travel as per-key results rather than failing a whole call.
"""

from typing import Any

from redis_dataloader.core.exceptions.base import ConfigurationError, RedisDataLoaderError


class NotFoundError(RedisDataLoaderError):
    """
    Signals that no entity exists for a key.

    A batch function may return this instead of None for a key. Either way
    the loader writes a negative entry, and exists() reports False.
    """

    def __init__(self, message: str = "Not found", key: Any = None, details: dict[str, Any] | None = None):
        super().__init__(message, details=details)
        self.key = key
        if key is not None:
            self.details.setdefault("key", key)


class BatchSizeMismatchError(ConfigurationError):
    """
    Raised when a batch function returns a different number of results than keys.

    Results are matched to keys by position, so a length mismatch cannot be
    resolved safely.
    """
    pass
