"""
Unit Tests for Exception Hierarchy

Tests the exception classes, their context helpers, and inheritance.
"""

import pytest

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


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test inheritance relationships."""

    @pytest.mark.parametrize(
        "exc_class,parent",
        [
            (ConfigurationError, RedisDataLoaderError),
            (DuplicateLoaderNameError, ConfigurationError),
            (EmptyKeysError, ConfigurationError),
            (BatchSizeMismatchError, ConfigurationError),
            (CacheError, RedisDataLoaderError),
            (CacheConnectionError, CacheError),
            (CacheKeyError, CacheError),
            (NotFoundError, RedisDataLoaderError),
        ],
    )
    def test_inheritance(self, exc_class, parent):
        assert issubclass(exc_class, parent)

    def test_not_found_is_not_a_configuration_error(self):
        assert not issubclass(NotFoundError, ConfigurationError)


@pytest.mark.unit
class TestRedisDataLoaderError:
    """Test the base exception helpers."""

    def test_message_and_details(self):
        error = CacheKeyError("Redis GET failed", details={"key": "users:1"})

        assert str(error) == "Redis GET failed"
        assert error.details == {"key": "users:1"}

    def test_details_are_copied(self):
        details = {"key": "users:1"}
        error = CacheKeyError("failed", details=details)

        error.with_context(attempt=2)

        assert details == {"key": "users:1"}
        assert error.details == {"key": "users:1", "attempt": 2}

    def test_to_dict(self):
        error = ConfigurationError("bad", details={"a": 1})

        assert error.to_dict() == {
            "error_type": "ConfigurationError",
            "message": "bad",
            "details": {"a": 1},
        }

    def test_repr_includes_details(self):
        assert repr(CacheError("boom", details={"k": 1})) == "CacheError(message='boom', details={'k': 1})"
        assert repr(CacheError("boom")) == "CacheError(message='boom')"

    def test_from_exception(self):
        original = TimeoutError("timed out")

        error = CacheKeyError.from_exception(original, key="users:1")

        assert isinstance(error, CacheKeyError)
        assert error.message == "timed out"
        assert error.details["original_error"] == "TimeoutError"
        assert error.details["key"] == "users:1"


@pytest.mark.unit
class TestNotFoundError:
    """Test the per-key not found error."""

    def test_defaults(self):
        error = NotFoundError()

        assert error.message == "Not found"
        assert error.key is None
        assert "key" not in error.details

    def test_key_recorded(self):
        error = NotFoundError("user 7 not found", key=7)

        assert error.key == 7
        assert error.details["key"] == 7
