"""
Loader Name Registry

Guards against two loaders sharing a Redis namespace. Names are only ever
added. A shared default registry is used unless one is injected, so tests
can isolate themselves with a fresh NameRegistry.
"""

from redis_dataloader.core.config.settings import get_settings
from redis_dataloader.core.exceptions import DuplicateLoaderNameError


class NameRegistry:
    """
    Set of namespace names in use.

    Args:
        check_duplicates: Reject a name already registered. None defers to
            the caller of register(), then to settings.loader.LOADER_CHECK_DUPLICATES.
    """

    def __init__(self, check_duplicates: bool | None = None):
        self._names: set[str] = set()
        self.check_duplicates = check_duplicates

    def _checking(self, check_duplicates: bool | None) -> bool:
        if self.check_duplicates is not None:
            return self.check_duplicates
        if check_duplicates is not None:
            return check_duplicates
        return get_settings().loader.LOADER_CHECK_DUPLICATES

    def register(self, name: str, check_duplicates: bool | None = None) -> None:
        """
        Record a namespace name.

        Args:
            name: Namespace name
            check_duplicates: Used when the registry itself was built without
                a setting (RedisDataLoader passes its own loader settings)

        Raises:
            DuplicateLoaderNameError: If checking is on and the name is taken
        """
        if self._checking(check_duplicates) and name in self._names:
            raise DuplicateLoaderNameError(
                f"RedisDataLoader name {name} already used",
                details={"name": name},
            )
        self._names.add(name)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def names(self) -> frozenset[str]:
        return frozenset(self._names)


_default_registry = NameRegistry()


def get_default_registry() -> NameRegistry:
    """Get the process-wide registry shared by loaders built without one."""
    return _default_registry
