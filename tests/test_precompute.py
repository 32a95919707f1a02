"""Tests for the transposition table warm-up."""

import pytest

from app.ai.precompute import (
    DEFAULT_PRECOMPUTE_PLIES,
    parse_precompute_plies,
    warm_up,
)
from app.ai.solver import Solver
from app.errors import ConfigurationError
from app.rules.outcome import Outcome


def _positions_within(root, plies):
    frontier = [root]
    reached = {}
    for _ in range(plies):
        next_frontier = []
        for position in frontier:
            for move in position.legal_moves():
                successor = position.copy()
                successor.apply_move(move)
                reached.setdefault(successor.encode(), successor)
                next_frontier.append(successor)
        frontier = next_frontier
    return reached


class TestWarmUp:

    def test_inserts_every_position_within_plies(self, table, position_after) -> None:
        root = position_after(7)
        added = warm_up(table, plies=2, root=root)
        reached = _positions_within(root, 2)
        assert added == len(table)
        assert len(table) >= len(reached)
        for key in reached:
            assert key in table

    def test_publishes_every_solved_subposition(self, table, position_after) -> None:
        root = position_after(7)
        added = warm_up(table, plies=2, root=root)
        reference = Solver()
        for position in _positions_within(root, 2).values():
            reference.solve(position)
        assert added == len(reference.memo)
        for key, outcome in reference.memo.items():
            assert table.get(key) is outcome

    def test_warm_positions_need_no_search(self, table, position_after) -> None:
        warm_up(table, plies=1, root=position_after(7))
        solver = Solver(table)
        assert solver.solve(position_after(8)) is Outcome.WIN1
        assert solver.nodes_expanded == 0

    def test_warm_results_match_cold_solves(self, table, position_after) -> None:
        root = position_after(7)
        warm_up(table, plies=2, root=root)
        for key, position in _positions_within(root, 2).items():
            assert table.get(key) is Solver().solve(position)

    def test_warm_table_does_not_change_outcomes(self, table, position_after) -> None:
        root = position_after(6)
        cold = Solver().solve(root)
        warm_up(table, plies=1, root=root)
        assert Solver(table).solve(root) is cold

    def test_zero_plies_does_nothing(self, table) -> None:
        assert warm_up(table, plies=0) == 0
        assert len(table) == 0

    def test_root_is_not_modified(self, table, position_after) -> None:
        root = position_after(8)
        before = root.copy()
        warm_up(table, plies=1, root=root)
        assert root == before


class TestParsePlies:

    def test_default_when_unset(self) -> None:
        assert parse_precompute_plies(None) == DEFAULT_PRECOMPUTE_PLIES
        assert parse_precompute_plies("  ") == DEFAULT_PRECOMPUTE_PLIES

    def test_integer_value(self) -> None:
        assert parse_precompute_plies("0") == 0
        assert parse_precompute_plies("2") == 2

    @pytest.mark.parametrize("raw", ["abc", "1.5", "-1"])
    def test_invalid_values(self, raw) -> None:
        with pytest.raises(ConfigurationError):
            parse_precompute_plies(raw)
