"""Process-wide transposition table shared by concurrent solver calls."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping

from ..metrics import TRANSPOSITION_TABLE_LOOKUPS, TRANSPOSITION_TABLE_SIZE
from ..rules.outcome import Outcome

_LOOKUP_HITS = TRANSPOSITION_TABLE_LOOKUPS.labels("hit")
_LOOKUP_MISSES = TRANSPOSITION_TABLE_LOOKUPS.labels("miss")


class SharedTranspositionTable:
    """Append-only fingerprint -> Outcome map guarded by a single lock.

    A position's minimax outcome never changes, so entries are inserted
    once and never updated or evicted. ``put`` keeps the first value stored
    for a key.
    """

    def __init__(self) -> None:
        self._table: dict[int, Outcome] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: int) -> Outcome | None:
        """Look up ``key``.

        Args:
            key: Position fingerprint

        Returns:
            The stored Outcome, or None if the key is unknown
        """
        with self._lock:
            value = self._table.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
        (_LOOKUP_MISSES if value is None else _LOOKUP_HITS).inc()
        return value

    def put(self, key: int, value: Outcome) -> Outcome:
        """Insert ``value`` unless ``key`` is already present.

        Returns:
            The value held by the table for ``key`` after the call
        """
        with self._lock:
            stored = self._table.setdefault(key, value)
            size = len(self._table)
        TRANSPOSITION_TABLE_SIZE.set(size)
        return stored

    def put_many(self, entries: Mapping[int, Outcome] | Iterable[tuple[int, Outcome]]) -> int:
        """Insert several entries under one lock acquisition.

        Returns:
            Number of keys that were not present before
        """
        items = entries.items() if isinstance(entries, Mapping) else entries
        added = 0
        with self._lock:
            for key, value in items:
                if key not in self._table:
                    self._table[key] = value
                    added += 1
            size = len(self._table)
        TRANSPOSITION_TABLE_SIZE.set(size)
        return added

    def __contains__(self, key: int) -> bool:
        with self._lock:
            return key in self._table

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def clear(self) -> None:
        """Drop all entries and reset stats. Only meant for tests."""
        with self._lock:
            self._table.clear()
            self.hits = 0
            self.misses = 0
        TRANSPOSITION_TABLE_SIZE.set(0)

    def stats(self) -> dict:
        """Return usage statistics.

        Returns:
            Dictionary with entries, hits, misses and hit_rate.
        """
        with self._lock:
            entries = len(self._table)
            hits = self.hits
            misses = self.misses
        total_lookups = hits + misses
        hit_rate = hits / total_lookups if total_lookups > 0 else 0.0
        return {
            "entries": entries,
            "hits": hits,
            "misses": misses,
            "hit_rate": hit_rate,
        }
