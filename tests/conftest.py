"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src/ to sys.path so tests run without an editable install
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from test_fixtures.cache_factory import BatchFnRecorder, FakeClock, InMemoryRedis  # noqa: E402

# ============================================================================
# Pytest Configuration
# ============================================================================

# pytest-asyncio runs in auto mode via pyproject.toml configuration


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# Mock Configuration Fixtures
# ============================================================================


@pytest.fixture
def mock_settings():
    """
    Mock application settings for testing.

    Returns a MagicMock with the loader and redis groups populated.
    """
    from redis_dataloader.core.config.settings import Settings

    settings = MagicMock(spec=Settings)

    settings.loader.LOADER_DEFAULT_TTL = 3600
    settings.loader.LOADER_NOT_FOUND_TTL = 30
    settings.loader.LOADER_CHECK_DUPLICATES = True
    settings.loader.LOADER_MAX_BATCH_SIZE = None
    settings.loader.LOADER_BATCH_WINDOW = 0.0

    settings.redis.REDIS_HOST = "localhost"
    settings.redis.REDIS_PORT = 6379
    settings.redis.REDIS_DB = 0
    settings.redis.REDIS_PASSWORD = None
    settings.redis.REDIS_MAX_CONNECTIONS = 10
    settings.redis.REDIS_SOCKET_TIMEOUT = 5
    settings.redis.REDIS_SOCKET_CONNECT_TIMEOUT = 5
    settings.redis.REDIS_HEALTH_CHECK_INTERVAL = 30

    return settings


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """Manually advanced clock shared by the in-memory store."""
    return FakeClock()


@pytest.fixture
def in_memory_redis_client(clock):
    """
    In-memory Redis stub for testing.

    Mimics GET / SET EX / DEL and the existence probe, expiring entries
    against the fake clock.
    """
    return InMemoryRedis(clock=clock)


@pytest.fixture
def mock_redis_client():
    """Generic mock store for asserting calls."""
    client = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.probe = AsyncMock(return_value=None)
    return client


# ============================================================================
# Loader Fixtures
# ============================================================================


@pytest.fixture
def registry():
    """Isolated name registry so loader names never collide across tests."""
    from redis_dataloader.loader.registry import NameRegistry

    return NameRegistry(check_duplicates=True)


@pytest.fixture
def batch_fn():
    """Recording batch function; populate `batch_fn.source` per test."""
    return BatchFnRecorder()


@pytest.fixture
def make_loader(in_memory_redis_client, registry, batch_fn, mock_settings):
    """
    Build RedisDataLoader instances wired to the in-memory store.

    Usage:
        loader = make_loader("users", not_found=lambda key: "missing")
    """
    from redis_dataloader.loader.redis_dataloader import RedisDataLoader

    def _make(name: str = "test", **options):
        options.setdefault("client", in_memory_redis_client)
        options.setdefault("registry", registry)
        options.setdefault("settings", mock_settings)
        fetch = options.pop("batch_fn", batch_fn)
        return RedisDataLoader(name, fetch, **options)

    return _make
