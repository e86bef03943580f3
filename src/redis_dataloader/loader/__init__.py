"""
Loader Module

The Redis-backed batch loader and its building blocks.
"""

from .codec import NOT_FOUND_ENTRY, StoredKind, StoredValue, decode_stored, encode_value
from .dispatcher import BatchDispatcher
from .keys import KeyNamespacer
from .observer import LoaderObserver
from .redis_dataloader import RedisDataLoader
from .registry import NameRegistry, get_default_registry
from .resolution import ResolutionEntry, build_entries

__all__ = [
    "RedisDataLoader",
    "BatchDispatcher",
    "KeyNamespacer",
    "LoaderObserver",
    "NameRegistry",
    "get_default_registry",
    "ResolutionEntry",
    "build_entries",
    "NOT_FOUND_ENTRY",
    "StoredKind",
    "StoredValue",
    "decode_stored",
    "encode_value",
]
