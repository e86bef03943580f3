"""
Redis-backed Batch Loader

Architecture:
    RedisDataLoader (Public API)
        ├── BatchDispatcher (per-tick coalescing of load() calls)
        ├── KeyNamespacer ({name}:{key} store keys)
        ├── resolve() (dedup → Redis read → fallback fetch → write back)
        ├── NameRegistry (one loader per namespace)
        └── LoaderObserver (logging, sink, counters)

Resolution pass for one batch:
    1. Deduplicate keys by store key (first occurrence is representative)
    2. One GET per distinct store key, concurrently (no MGET: cluster safe)
    3. Call the batch function once with the keys still unresolved
    4. Write values with ttl, "no value" results as negative entries with
       ttl_not_found; errors are never written
    5. Expand results back to the input order and multiplicity
"""

import asyncio
from collections.abc import Awaitable, Callable, Hashable, Sequence
from typing import Any, Generic, TypeVar

from redis_dataloader.core.config.constants import PROBE_PRESENT, SUFFIX_SEPARATOR, Stage
from redis_dataloader.core.config.settings import Settings, get_settings
from redis_dataloader.core.exceptions import BatchSizeMismatchError, EmptyKeysError, NotFoundError
from redis_dataloader.core.interfaces.cache import CacheBackend
from redis_dataloader.core.logging.logger import reset_loader_name, set_loader_name
from redis_dataloader.loader.codec import (
    NOT_FOUND_ENTRY,
    StoredKind,
    decode_stored,
    encode_value,
    orjson_deserialize,
    orjson_serialize,
)
from redis_dataloader.loader.dispatcher import BatchDispatcher
from redis_dataloader.loader.keys import KeyNamespacer
from redis_dataloader.loader.observer import LoaderObserver, LogSink
from redis_dataloader.loader.registry import NameRegistry, get_default_registry
from redis_dataloader.loader.resolution import ResolutionEntry, build_entries

K = TypeVar("K")
V = TypeVar("V")

BatchLoadFn = Callable[[list[K]], Awaitable[Sequence[V | None | BaseException]]]
Serializer = Callable[[V], str]
Deserializer = Callable[[K, str], V]
NotFoundFactory = Callable[[K], Any]


class RedisDataLoader(Generic[K, V]):
    """
    Read-through Redis cache in front of a batch fetch function.

    Usage:
        async def fetch_users(ids: list[int]) -> list[User | None]:
            rows = await db.fetch_users(ids)
            by_id = {row.id: row for row in rows}
            return [by_id.get(i) for i in ids]

        users = RedisDataLoader(
            "users",
            fetch_users,
            client=redis_client,
            serialize=lambda user: user.model_dump_json(),
            deserialize=lambda key, raw: User.model_validate_json(raw),
            ttl=600,
            not_found=lambda key: NotFoundError(f"user {key} not found", key=key),
        )

        user = await users.load(42)

    Args:
        name: Namespace; store keys are "{name}:{key}"
        batch_fn: Async function from keys to values, None ("no value") or
            exception instances, one per key in order
        client: Store implementing CacheBackend (usually RedisClient)
        serialize: Value -> str (default: orjson)
        deserialize: (key, str) -> value (default: orjson)
        ttl: Seconds to keep values (default: LOADER_DEFAULT_TTL)
        ttl_not_found: Seconds to keep negative entries (default: LOADER_NOT_FOUND_TTL, 30)
        suffix: Appended to name as "{name}-{suffix}"
        key_fn: Key normalization; required for keys that are not str/number shaped
        not_found: Placeholder factory for keys with no value
        log_sink: Callable receiving (message, **fields) for every loader event
        registry: Name registry (default: process-wide registry)
        max_batch_size: Split dispatch batches at this size
        batch_window: Seconds to wait before dispatching a batch
    """

    def __init__(
        self,
        name: str,
        batch_fn: BatchLoadFn,
        *,
        client: CacheBackend,
        serialize: Serializer | None = None,
        deserialize: Deserializer | None = None,
        ttl: int | None = None,
        ttl_not_found: int | None = None,
        suffix: str | None = None,
        key_fn: Callable[[K], Hashable] | None = None,
        not_found: NotFoundFactory | None = None,
        log_sink: LogSink | None = None,
        registry: NameRegistry | None = None,
        max_batch_size: int | None = None,
        batch_window: float | None = None,
        settings: Settings | None = None,
    ):
        loader_settings = (settings or get_settings()).loader

        self._name = f"{name}{SUFFIX_SEPARATOR}{suffix}" if suffix else name
        self._batch_fn = batch_fn
        self._client = client
        self._serialize = serialize or orjson_serialize
        self._deserialize = deserialize or orjson_deserialize
        self._ttl = ttl if ttl is not None else loader_settings.LOADER_DEFAULT_TTL
        self._ttl_not_found = (
            ttl_not_found if ttl_not_found is not None else loader_settings.LOADER_NOT_FOUND_TTL
        )
        self._not_found = not_found
        self._namespacer = KeyNamespacer(self._name, key_fn)
        self._observer = LoaderObserver(self._name, log_sink)
        self._dispatcher: BatchDispatcher[K, V] = BatchDispatcher(
            self.resolve,
            max_batch_size=(
                max_batch_size if max_batch_size is not None else loader_settings.LOADER_MAX_BATCH_SIZE
            ),
            batch_window=(
                batch_window if batch_window is not None else loader_settings.LOADER_BATCH_WINDOW
            ),
        )

        self._registry = registry if registry is not None else get_default_registry()
        self._registry.register(self._name, check_duplicates=loader_settings.LOADER_CHECK_DUPLICATES)
        self._observer.event(
            Stage.LOADER_INIT,
            f"New RedisDataLoader {self._name}",
            level="info",
            ttl=self._ttl,
            ttl_not_found=self._ttl_not_found,
        )

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"RedisDataLoader(name='{self._name}', ttl={self._ttl}, ttl_not_found={self._ttl_not_found})"

    def store_key(self, key: K) -> str:
        """Redis key for a logical key."""
        return self._namespacer.store_key(key)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load(self, key: K) -> V | Any:
        """
        Load one key; concurrent calls in the same tick share one resolution pass.

        Returns:
            The value, the not_found placeholder, or None

        Raises:
            Exception: An error returned by the batch function for this key,
                a not_found placeholder that is an exception, or a store error
        """
        return await self._dispatcher.load(key)

    async def load_many(self, keys: Sequence[K]) -> list[V | Any | Exception]:
        """Load several keys; per-key errors are returned in place of values."""
        return await self._dispatcher.load_many(keys)

    async def resolve(self, keys: Sequence[K]) -> list[V | Any | BaseException | None]:
        """
        Run one resolution pass over a batch of keys.

        Duplicates are allowed. The result has one entry per input key, in
        input order.

        Raises:
            CacheKeyError: If any Redis command fails
            BatchSizeMismatchError: If batch_fn returns the wrong number of results
        """
        token = set_loader_name(self._name)
        try:
            store_keys = [self._namespacer.store_key(key) for key in keys]
            entries = build_entries(keys, store_keys)
            self._observer.event(
                Stage.DEDUPLICATION,
                "Deduplicated batch",
                requested=len(store_keys),
                unique=len(entries),
            )

            entries = await self._read_cached(entries)
            entries = await self._fetch_missing(entries)

            self._observer.event(
                Stage.RESULT_ASSEMBLY,
                "map to be returned",
                states={store_key: entry.state.value for store_key, entry in entries.items()},
            )
            return [self._result_for(key, entries[store_key]) for key, store_key in zip(keys, store_keys)]
        finally:
            reset_loader_name(token)

    async def _read_cached(self, entries: dict[str, ResolutionEntry]) -> dict[str, ResolutionEntry]:
        self._observer.event(
            Stage.STORE_READ,
            "Reading keys from redis",
            keys=self._observer.short_keys(entries),
        )
        raws = await asyncio.gather(*(self._client.get(store_key) for store_key in entries))

        resolved: dict[str, ResolutionEntry] = {}
        for (store_key, entry), raw in zip(entries.items(), raws):
            stored = decode_stored(raw)
            if stored.kind is StoredKind.VALUE:
                entry = entry.hit(self._deserialize(entry.key, stored.payload))
            elif stored.kind is StoredKind.NOT_FOUND and self._not_found is not None:
                entry = entry.negative_hit(self._not_found(entry.key))
            # Absent, or negative without a placeholder factory: stays a miss
            resolved[store_key] = entry

        self._observer.record_reads(resolved.values())
        return resolved

    async def _fetch_missing(self, entries: dict[str, ResolutionEntry]) -> dict[str, ResolutionEntry]:
        misses = [entry for entry in entries.values() if entry.is_miss]
        if not misses:
            return entries

        self._observer.event(
            Stage.FALLBACK_FETCH,
            "Loading from datasource",
            keys=self._observer.short_keys(entry.store_key for entry in misses),
        )
        results = await self._batch_fn([entry.key for entry in misses])
        if len(results) != len(misses):
            raise BatchSizeMismatchError(
                f"Batch function for {self._name} returned {len(results)} results for {len(misses)} keys",
                details={"loader": self._name, "keys": len(misses), "results": len(results)},
            )

        resolved = dict(entries)
        writes = []
        for entry, result in zip(misses, results):
            if result is None or isinstance(result, NotFoundError):
                resolved[entry.store_key] = entry.fetch_not_found(result)
                writes.append(self._store_not_found(entry.store_key))
            elif isinstance(result, BaseException):
                resolved[entry.store_key] = entry.fetch_error(result)
            else:
                resolved[entry.store_key] = entry.fetched(result)
                writes.append(self._store(entry.store_key, result))

        await asyncio.gather(*writes)
        self._observer.record_fetches(resolved[entry.store_key] for entry in misses)
        return resolved

    def _result_for(self, key: K, entry: ResolutionEntry) -> Any:
        if entry.value is not None:
            return entry.value
        if self._not_found is not None:
            return self._not_found(key)
        return None

    # -------------------------------------------------------------------------
    # Store writes
    # -------------------------------------------------------------------------

    async def _store(self, store_key: str, value: V) -> bool:
        raw = encode_value(self._serialize(value))
        self._observer.event(Stage.STORE_WRITE, "saving to redis", key=store_key, ttl=self._ttl)
        return await self._client.set(store_key, raw, ttl=self._ttl)

    async def _store_not_found(self, store_key: str) -> bool:
        self._observer.event(
            Stage.STORE_WRITE_NOT_FOUND,
            "saving not found to redis",
            key=store_key,
            ttl=self._ttl_not_found,
        )
        return await self._client.set(store_key, NOT_FOUND_ENTRY, ttl=self._ttl_not_found)

    # -------------------------------------------------------------------------
    # Operations layered on the resolver
    # -------------------------------------------------------------------------

    async def exists(self, key: K) -> bool:
        """
        Whether a key currently has a value.

        One atomic probe answers for cached keys. Uncached keys go through a
        full load(); a NotFoundError from it means False.
        """
        store_key = self._namespacer.store_key(key)
        probed = await self._client.probe(store_key, NOT_FOUND_ENTRY)
        self._observer.event(Stage.EXISTS_PROBE, "Probed key", key=store_key, result=probed)

        if probed is not None:
            return probed == PROBE_PRESENT

        try:
            value = await self.load(key)
        except NotFoundError:
            return False
        return value is not None

    async def load_cached(self, *keys: K) -> V | Any | None:
        """
        Populate the cache for keys, then answer from what Redis now holds.

        Only the answer for the first key is returned.

        Returns:
            Deserialized value, the not_found placeholder for a negative
            entry (None without a factory), or None if absent

        Raises:
            EmptyKeysError: If called without keys
        """
        if not keys:
            raise EmptyKeysError("load_cached() needs at least one key")

        await self.resolve(list(keys))
        raws = await asyncio.gather(*(self._client.get(self._namespacer.store_key(key)) for key in keys))
        self._observer.event(Stage.CACHED_READ, "Read cached values", keys=len(keys))

        answers = []
        for key, raw in zip(keys, raws):
            stored = decode_stored(raw)
            if stored.kind is StoredKind.NOT_FOUND:
                answers.append(self._not_found(key) if self._not_found is not None else None)
            elif stored.kind is StoredKind.VALUE:
                answers.append(self._deserialize(key, stored.payload))
            else:
                answers.append(None)
        return answers[0]

    async def clear(self, *keys: K) -> int:
        """
        Delete the cache entries of the given keys.

        One DEL per key, so keys may live on different cluster shards.

        Returns:
            Number of entries actually removed

        Raises:
            EmptyKeysError: If called without keys
        """
        if not keys:
            raise EmptyKeysError("clear() needs at least one key")

        store_keys = [self._namespacer.store_key(key) for key in keys]
        removed = await asyncio.gather(*(self._client.delete(store_key) for store_key in store_keys))
        self._observer.event(Stage.CLEAR, "Cleared keys", keys=store_keys, removed=sum(removed))
        return sum(removed)

    async def prime(self, key: K, value: V | BaseException) -> bool:
        """
        Write a value as if the batch function had returned it.

        Exceptions are never cached: priming with one is a no-op.

        Returns:
            True if Redis acknowledged the write
        """
        if isinstance(value, BaseException):
            self._observer.event(Stage.PRIME, "Skipped priming an error", key=self.store_key(key))
            return False
        return await self._store(self._namespacer.store_key(key), value)

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        """Hit/miss counters for this loader."""
        return self._observer.get_stats()
