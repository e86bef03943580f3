from .cache import CacheBackend

__all__ = ["CacheBackend"]
