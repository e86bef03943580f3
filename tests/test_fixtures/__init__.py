"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import BatchFnRecorder, CacheTestFactory, FakeClock, InMemoryRedis

__all__ = ["BatchFnRecorder", "CacheTestFactory", "FakeClock", "InMemoryRedis"]
