"""Unit tests for SharedTranspositionTable."""

import threading

from prometheus_client import REGISTRY

from app.ai.transposition_table import SharedTranspositionTable
from app.rules.outcome import Outcome


class TestBasicOperations:
    """Tests for basic get/put operations."""

    def test_put_and_get(self) -> None:
        """Should store and retrieve values."""
        table = SharedTranspositionTable()
        table.put(1, Outcome.WIN1)
        assert table.get(1) is Outcome.WIN1

    def test_get_nonexistent_key_returns_none(self) -> None:
        """Should return None for keys not in table."""
        table = SharedTranspositionTable()
        assert table.get(42) is None

    def test_put_keeps_first_value(self) -> None:
        """Entries are append-only: a second put must not overwrite."""
        table = SharedTranspositionTable()
        assert table.put(7, Outcome.DRAW) is Outcome.DRAW
        assert table.put(7, Outcome.WIN2) is Outcome.DRAW
        assert table.get(7) is Outcome.DRAW

    def test_contains_and_len(self) -> None:
        table = SharedTranspositionTable()
        assert len(table) == 0
        table.put(1, Outcome.DRAW)
        table.put(2, Outcome.WIN1)
        assert 1 in table
        assert 3 not in table
        assert len(table) == 2

    def test_put_many_counts_new_keys(self) -> None:
        table = SharedTranspositionTable()
        table.put(1, Outcome.DRAW)
        added = table.put_many({1: Outcome.WIN1, 2: Outcome.WIN2})
        assert added == 1
        assert table.get(1) is Outcome.DRAW
        assert table.get(2) is Outcome.WIN2

    def test_put_many_accepts_pairs(self) -> None:
        table = SharedTranspositionTable()
        assert table.put_many([(5, Outcome.WIN1), (6, Outcome.DRAW)]) == 2

    def test_clear(self) -> None:
        """Should clear all entries and reset stats."""
        table = SharedTranspositionTable()
        table.put(1, Outcome.DRAW)
        table.get(1)
        table.get(2)

        table.clear()

        assert len(table) == 0
        assert table.hits == 0
        assert table.misses == 0


class TestStats:
    """Tests for statistics tracking."""

    def test_hit_and_miss_tracking(self) -> None:
        table = SharedTranspositionTable()
        table.put(1, Outcome.DRAW)
        table.get(1)
        table.get(1)
        table.get(2)
        stats = table.stats()
        assert stats["entries"] == 1
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert abs(stats["hit_rate"] - 2 / 3) < 1e-9

    def test_hit_rate_without_lookups(self) -> None:
        assert SharedTranspositionTable().stats()["hit_rate"] == 0.0


class TestConcurrency:
    """Concurrent writers must agree on one value per key."""

    def test_concurrent_puts_keep_a_single_value(self) -> None:
        table = SharedTranspositionTable()
        barrier = threading.Barrier(8)
        seen: list[Outcome] = []
        seen_lock = threading.Lock()

        def _writer(value: Outcome) -> None:
            barrier.wait()
            for key in range(500):
                stored = table.put(key, value)
                if key == 0:
                    with seen_lock:
                        seen.append(stored)

        threads = [
            threading.Thread(target=_writer, args=(Outcome.WIN1 if i % 2 else Outcome.WIN2,))
            for i in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(table) == 500
        assert len(set(seen)) == 1
        assert table.get(0) is seen[0]


class TestLookupMetrics:
    """Lookups feed the Prometheus hit/miss counter."""

    @staticmethod
    def _lookups(outcome: str) -> float:
        return REGISTRY.get_sample_value(
            "gobblet_transposition_table_lookups_total", {"outcome": outcome}
        ) or 0.0

    def test_hits_and_misses_are_counted(self) -> None:
        table = SharedTranspositionTable()
        table.put(1, Outcome.DRAW)
        hits_before = self._lookups("hit")
        misses_before = self._lookups("miss")

        table.get(1)
        table.get(1)
        table.get(2)

        assert self._lookups("hit") - hits_before == 2
        assert self._lookups("miss") - misses_before == 1
