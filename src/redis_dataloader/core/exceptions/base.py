"""
Base Exception Class

This module contains the base exception class that all other loader exceptions
inherit from, plus the configuration errors raised at call time.
"""

from typing import Any


class RedisDataLoaderError(Exception):
    """
    Base exception for all loader errors.

    All custom exceptions inherit from this class to enable:
    - Consistent error handling
    - Structured error logging
    - Rich context for debugging

    Attributes:
        message: Error message
        details: Additional error details (dict)

    Example:
        raise CacheKeyError(
            "Redis GET failed",
            details={"key": "users:42"}
        )
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = (details or {}).copy()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def with_context(self, **context) -> "RedisDataLoaderError":
        """
        Add additional context to the error details.

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        details_str = f", details={self.details}" if self.details else ""
        return f"{self.__class__.__name__}(message='{self.message}'{details_str})"

    @classmethod
    def from_exception(cls, exc: Exception, message: str | None = None, **details) -> "RedisDataLoaderError":
        """
        Create an error from another exception.

        Useful for wrapping third-party exceptions with additional context.

        Example:
            >>> try:
            ...     await redis.get(key)
            ... except RedisError as e:
            ...     raise CacheKeyError.from_exception(e, key=key)
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details,
        }
        return cls(error_message, details=error_details)


class ConfigurationError(RedisDataLoaderError):
    """Raised when the loader is misconfigured or misused."""
    pass


class DuplicateLoaderNameError(ConfigurationError):
    """
    Raised when two loaders are created with the same namespace name.

    Two loaders sharing a namespace would read and overwrite each other's
    entries, so this is fatal unless duplicate checking is disabled.
    """
    pass


class EmptyKeysError(ConfigurationError):
    """Raised when a key-addressed operation is called without any key."""
    pass
