"""A small least-recently-used cache backed by a list with linear search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")

# Scores are kept in the range of an unsigned 32-bit counter.
_SCORE_LIMIT = 2**32


@dataclass
class _Entry(Generic[K, V]):
    score: int
    key: K
    value: V


class LruCache(Generic[K, V]):
    """Cache that evicts the least recently used entry when full.

    Every insertion and every ``try_get`` gives the entry the newest score;
    the entry with the lowest score is evicted first. Lookups are linear, so
    the cache suits small sizes.
    """

    def __init__(self, max_entries: int) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._entries: List[_Entry[K, V]] = []
        self._next_score = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def _find(self, key: K) -> Optional[_Entry[K, V]]:
        return next((entry for entry in self._entries if entry.key == key), None)

    def get(self, key: K, allocator: Callable[[], V]) -> V:
        """Return the value for ``key``, creating and inserting it with ``allocator`` if absent.

        Finding an existing entry does not refresh its usage.
        """
        entry = self._find(key)
        if entry is not None:
            return entry.value
        value = allocator()
        self.insert(key, value)
        return value

    def has(self, key: K) -> bool:
        """Return True if there is an entry for ``key``."""
        return self._find(key) is not None

    def try_get(self, key: K) -> Optional[V]:
        """Return the value for ``key`` and mark it recently used, or None if absent."""
        entry = self._find(key)
        if entry is None:
            return None
        entry.score = self._next_score
        self._increment_score()
        return entry.value

    def try_take(self, key: K) -> Optional[V]:
        """Remove the entry for ``key`` and return its value, or None if absent."""
        entry = self._find(key)
        if entry is None:
            return None
        self._entries.remove(entry)
        return entry.value

    def insert(self, key: K, value: V) -> None:
        """Add an entry, evicting the least recently used one if the cache is full."""
        if len(self._entries) >= self._max_entries:
            oldest = min(self._entries, key=lambda entry: entry.score)
            self._entries.remove(oldest)
        self._entries.append(_Entry(self._next_score, key, value))
        self._increment_score()

    def iterate_values(self, func: Callable[[V], object]) -> None:
        """Call ``func`` on each value in turn; stop as soon as it returns a false value."""
        for entry in list(self._entries):
            if not func(entry.value):
                break

    def values(self) -> Iterator[V]:
        """Iterate over the cached values."""
        return (entry.value for entry in list(self._entries))

    def clear(self) -> None:
        """Remove every entry and reset the usage counter."""
        self._entries.clear()
        self._next_score = 0

    def _increment_score(self) -> None:
        self._next_score += 1
        if self._next_score == _SCORE_LIMIT:
            # Counter wrapped: renumber entries from zero, keeping their order.
            self._next_score = 0
            self._entries.sort(key=lambda entry: entry.score)
            for entry in self._entries:
                entry.score = self._next_score
                self._next_score += 1