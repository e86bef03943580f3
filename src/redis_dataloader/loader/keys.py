"""
Key Namespacer

Maps a logical key to the Redis key `{name}:{normalized-key}`.
"""

from collections.abc import Callable, Hashable
from typing import Any

from redis_dataloader.core.config.constants import KEY_SEPARATOR, SEQUENCE_KEY_SEPARATOR
from redis_dataloader.core.exceptions import ConfigurationError

_SCALAR_KEY_TYPES = (str, int, float)


class KeyNamespacer:
    """
    Derives store keys for one loader namespace.

    Strings and numbers are used as is; lists and tuples of them are joined
    with ','. Anything else needs a key_fn.

    Distinct logical keys must map to distinct store keys. A key_fn that
    collapses two keys makes them share one cache entry.
    """

    def __init__(self, namespace: str, key_fn: Callable[[Any], Hashable] | None = None):
        self._namespace = namespace
        self._key_fn = key_fn

    @property
    def namespace(self) -> str:
        return self._namespace

    def normalize(self, key: Any) -> str:
        """
        Normalize a logical key to its string form.

        Raises:
            ConfigurationError: If the key is not string/number shaped and no key_fn is set
        """
        if self._key_fn is not None:
            return str(self._key_fn(key))

        if isinstance(key, _SCALAR_KEY_TYPES):
            return str(key)

        if isinstance(key, (list, tuple)) and all(isinstance(part, _SCALAR_KEY_TYPES) for part in key):
            return SEQUENCE_KEY_SEPARATOR.join(str(part) for part in key)

        raise ConfigurationError(
            f"Loader '{self._namespace}' needs a key_fn for keys of type {type(key).__name__}",
            details={"namespace": self._namespace, "key_type": type(key).__name__},
        )

    def store_key(self, key: Any) -> str:
        """Return the Redis key for a logical key."""
        return f"{self._namespace}{KEY_SEPARATOR}{self.normalize(key)}"
