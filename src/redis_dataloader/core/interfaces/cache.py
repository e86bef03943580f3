"""
Cache Backend Protocol

This module defines the store capability the loader needs, enabling
dependency injection and testability.

Architectural Decision: Protocol-based abstraction
- The loader depends on four operations, not on a concrete Redis client
- Tests substitute an in-memory implementation
- No multi-key read is part of the contract: the backing store may be a
  sharded cluster where one MGET cannot span slots
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """
    Protocol defining the store operations used by RedisDataLoader.

    Implementations:
    - RedisClient: Production Redis-backed store
    - In-memory stubs in the test suite
    """

    async def get(self, key: str) -> str | None:
        """
        Get value from the store.

        Returns:
            Stored string, or None if the key is absent

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """
        Set value with an expiry.

        Args:
            key: Store key
            value: Value to store
            ttl: Time-to-live in seconds

        Returns:
            bool: True if the store acknowledged the write

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def delete(self, *keys: str) -> int:
        """
        Delete keys from the store.

        Returns:
            int: Number of keys removed

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def probe(self, key: str, not_found_marker: str) -> int | str | None:
        """
        Atomically classify one key.

        Args:
            key: Store key
            not_found_marker: Stored value that denotes a negative entry

        Returns:
            1 if the key holds a positive entry, not_found_marker if it holds
            a negative entry, None if the key is absent

        Raises:
            CacheKeyError: If operation fails
        """
        ...
