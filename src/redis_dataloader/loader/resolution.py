"""
Resolution Entries

One entry per distinct store key inside a single batch pass. Entries are
immutable: each transition returns a new entry, and only an UNRESOLVED entry
may transition.

    UNRESOLVED ──> HIT              value read from Redis
               ──> NEGATIVE_HIT     negative entry read from Redis
               ──> FETCHED          batch function returned a value
               ──> FETCH_NOT_FOUND  batch function returned None / NotFoundError
               ──> FETCH_ERROR      batch function returned another error
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from redis_dataloader.core.config.constants import EntryState


@dataclass(frozen=True)
class ResolutionEntry:
    store_key: str
    key: Any
    state: EntryState = EntryState.UNRESOLVED
    value: Any = None

    @property
    def is_miss(self) -> bool:
        return self.state is EntryState.UNRESOLVED

    def _transition(self, state: EntryState, value: Any) -> "ResolutionEntry":
        if self.state is not EntryState.UNRESOLVED:
            raise ValueError(
                f"Entry {self.store_key} already resolved as {self.state.value}; cannot become {state.value}"
            )
        return replace(self, state=state, value=value)

    def hit(self, value: Any) -> "ResolutionEntry":
        return self._transition(EntryState.HIT, value)

    def negative_hit(self, placeholder: Any) -> "ResolutionEntry":
        return self._transition(EntryState.NEGATIVE_HIT, placeholder)

    def fetched(self, value: Any) -> "ResolutionEntry":
        return self._transition(EntryState.FETCHED, value)

    def fetch_not_found(self, value: Any = None) -> "ResolutionEntry":
        return self._transition(EntryState.FETCH_NOT_FOUND, value)

    def fetch_error(self, error: BaseException) -> "ResolutionEntry":
        return self._transition(EntryState.FETCH_ERROR, error)


def build_entries(keys: Iterable[Any], store_keys: Iterable[str]) -> dict[str, ResolutionEntry]:
    """
    Deduplicate a batch by store key.

    Returns entries in first-occurrence order; the first logical key seen for
    a store key becomes its representative.
    """
    entries: dict[str, ResolutionEntry] = {}
    for key, store_key in zip(keys, store_keys):
        if store_key not in entries:
            entries[store_key] = ResolutionEntry(store_key=store_key, key=key)
    return entries


def count_states(entries: Iterable[ResolutionEntry]) -> dict[EntryState, int]:
    """Tally entries per state."""
    counts = {state: 0 for state in EntryState}
    for entry in entries:
        counts[entry.state] += 1
    return counts
