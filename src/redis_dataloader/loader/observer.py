"""
Loader Observer

All side effects that are not cache reads or writes: structured logging,
the caller's optional logging sink, and hit/miss counters.
"""

from collections.abc import Callable, Iterable
from typing import Any

from redis_dataloader.core.config.constants import LOG_KEY_TRUNCATE, EntryState, Stage
from redis_dataloader.core.logging.logger import get_logger, log_stage
from redis_dataloader.loader.resolution import ResolutionEntry, count_states

logger = get_logger(__name__)

LogSink = Callable[..., None]


class LoaderObserver:
    """
    Tracks loader metrics and logs resolution stages.

    The sink, when given, receives every event as sink(message, **fields).

    Metrics Tracked:
    - hits: entries served from Redis
    - negative_hits: negative entries served from Redis
    - misses: entries passed to the batch function
    - fetch_errors: errors returned by the batch function
    """

    def __init__(self, name: str, sink: LogSink | None = None, logger_instance=None):
        self._name = name
        self._sink = sink
        self._logger = logger_instance or logger

        self._hits = 0
        self._negative_hits = 0
        self._misses = 0
        self._fetch_errors = 0

    def event(self, stage: Stage, message: str, level: str = "debug", **fields: Any) -> None:
        """Log one event and forward it to the sink."""
        log_stage(self._logger, stage, message, level=level, loader=self._name, **fields)
        if self._sink is not None:
            self._sink(message, **fields)

    def record_reads(self, entries: Iterable[ResolutionEntry]) -> None:
        """Count the outcome of the store read phase."""
        counts = count_states(entries)
        self._hits += counts[EntryState.HIT]
        self._negative_hits += counts[EntryState.NEGATIVE_HIT]
        self._misses += counts[EntryState.UNRESOLVED]

    def record_fetches(self, entries: Iterable[ResolutionEntry]) -> None:
        """Count the outcome of the fallback fetch phase."""
        self._fetch_errors += count_states(entries)[EntryState.FETCH_ERROR]

    @staticmethod
    def short_keys(store_keys: Iterable[str]) -> list[str]:
        return [key[:LOG_KEY_TRUNCATE] for key in store_keys]

    def get_stats(self) -> dict[str, Any]:
        """
        Get loader statistics.

        Returns:
            Dict with counters and the overall hit rate
        """
        lookups = self._hits + self._negative_hits + self._misses
        hit_rate = (self._hits + self._negative_hits) / lookups if lookups > 0 else 0.0

        return {
            "loader": self._name,
            "hits": self._hits,
            "negative_hits": self._negative_hits,
            "misses": self._misses,
            "fetch_errors": self._fetch_errors,
            "total_lookups": lookups,
            "hit_rate": round(hit_rate, 3),
        }
