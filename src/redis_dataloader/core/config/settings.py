#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
Redis-backed batch loader. Every tunable lives here so loaders created
without explicit options pick up consistent defaults.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with reload_settings()
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redis_dataloader.core.config.constants import DEFAULT_NOT_FOUND_TTL, DEFAULT_TTL


class RedisSettings(BaseSettings):
    """
    Redis connection configuration.

    STAGE-REDIS: Connection pool configuration
    """

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum pooled connections")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoaderSettings(BaseSettings):
    """
    Loader defaults applied when a RedisDataLoader is built without explicit options.

    STAGE-0.0: Loader configuration
    """

    LOADER_DEFAULT_TTL: int = Field(default=DEFAULT_TTL, description="TTL for cached values (seconds)")
    LOADER_NOT_FOUND_TTL: int = Field(
        default=DEFAULT_NOT_FOUND_TTL, description="TTL for negative entries (seconds)"
    )
    LOADER_CHECK_DUPLICATES: bool = Field(
        default=True, description="Reject two loaders sharing a namespace"
    )
    LOADER_MAX_BATCH_SIZE: int | None = Field(
        default=None, description="Split batches larger than this (None = unbounded)"
    )
    LOADER_BATCH_WINDOW: float = Field(
        default=0.0, description="Seconds to wait before dispatching a batch (0 = next tick)"
    )

    @field_validator("LOADER_DEFAULT_TTL", "LOADER_NOT_FOUND_TTL")
    @classmethod
    def validate_ttl(cls, v):
        """TTLs must be positive: Redis rejects SET EX 0."""
        if v <= 0:
            raise ValueError("TTL must be a positive number of seconds")
        return v

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    Usage:
        from redis_dataloader.core.config import get_settings

        settings = get_settings()
        redis_host = settings.redis.REDIS_HOST
        ttl = settings.loader.LOADER_DEFAULT_TTL
    """

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum pooled connections")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Loader settings
    LOADER_DEFAULT_TTL: int = Field(default=DEFAULT_TTL, description="TTL for cached values (seconds)")
    LOADER_NOT_FOUND_TTL: int = Field(
        default=DEFAULT_NOT_FOUND_TTL, description="TTL for negative entries (seconds)"
    )
    LOADER_CHECK_DUPLICATES: bool = Field(
        default=True, description="Reject two loaders sharing a namespace"
    )
    LOADER_MAX_BATCH_SIZE: int | None = Field(
        default=None, description="Split batches larger than this (None = unbounded)"
    )
    LOADER_BATCH_WINDOW: float = Field(
        default=0.0, description="Seconds to wait before dispatching a batch (0 = next tick)"
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    # Nested configuration objects
    @property
    def redis(self) -> "RedisSettings":
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_MAX_CONNECTIONS=self.REDIS_MAX_CONNECTIONS,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def loader(self) -> "LoaderSettings":
        """Get loader settings."""
        return LoaderSettings(
            LOADER_DEFAULT_TTL=self.LOADER_DEFAULT_TTL,
            LOADER_NOT_FOUND_TTL=self.LOADER_NOT_FOUND_TTL,
            LOADER_CHECK_DUPLICATES=self.LOADER_CHECK_DUPLICATES,
            LOADER_MAX_BATCH_SIZE=self.LOADER_MAX_BATCH_SIZE,
            LOADER_BATCH_WINDOW=self.LOADER_BATCH_WINDOW,
        )

    @property
    def logging(self) -> "LoggingSettings":
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
