"""
Configuration Module

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Stage identifiers, entry states, store value tags and defaults

Usage:
------
```python
from redis_dataloader.core.config import get_settings
from redis_dataloader.core.config.constants import Stage

settings = get_settings()
ttl = settings.loader.LOADER_NOT_FOUND_TTL  # 30
```

Environment Variables:
---------------------
```bash
REDIS_HOST=localhost
REDIS_PORT=6379
LOADER_DEFAULT_TTL=3600
LOADER_NOT_FOUND_TTL=30
LOADER_CHECK_DUPLICATES=true
LOG_LEVEL=INFO
LOG_FORMAT=json
```
"""

from .settings import LoaderSettings, LoggingSettings, RedisSettings, Settings, get_settings, reload_settings

__all__ = [
    "Settings",
    "RedisSettings",
    "LoaderSettings",
    "LoggingSettings",
    "get_settings",
    "reload_settings",
]
