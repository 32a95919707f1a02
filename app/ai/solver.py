"""Exhaustive minimax solver for Gobblet positions.

The game tree is small enough to search completely: there is no depth limit
and no heuristic evaluation. Two cut-offs keep the search cheap without
changing the result:

- if any move completes a line for the mover, the position is a win for the
  mover and no successor is searched;
- among the searched successors, the first one that is a win for the mover
  ends the scan.

Results are memoised per :class:`Solver` (one solver per request). The
final result of every top-level :meth:`Solver.solve` goes straight to the
process-wide :class:`SharedTranspositionTable`; :meth:`Solver.publish` hands
over the rest of the memo once the request is done with it.
"""

from __future__ import annotations

import logging

from ..metrics import SOLVER_NODES
from ..rules.outcome import Outcome, evaluate_outcome
from ..rules.position import Position
from .transposition_table import SharedTranspositionTable

logger = logging.getLogger(__name__)


class Solver:
    """Request-scoped minimax search with memoisation.

    Args:
        table: Shared table consulted before searching and updated with each
            top-level result. ``None`` searches with the private memo only.
    """

    def __init__(self, table: SharedTranspositionTable | None = None) -> None:
        self.table = table
        self.memo: dict[int, Outcome] = {}
        self.nodes_expanded = 0

    def solve(self, position: Position) -> Outcome:
        """Return the outcome of ``position`` under optimal play."""
        nodes_before = self.nodes_expanded
        result = self._search(position)
        if self.table is not None:
            self.table.put(position.encode(), result)
        expanded = self.nodes_expanded - nodes_before
        if expanded:
            SOLVER_NODES.inc(expanded)
            logger.debug(
                "Solved %r -> %s (%d nodes, memo=%d)",
                position,
                result.value,
                expanded,
                len(self.memo),
            )
        return result

    def publish(self) -> int:
        """Copy every memoised outcome into the shared table.

        Returns:
            Number of entries the table did not hold yet
        """
        if self.table is None or not self.memo:
            return 0
        added = self.table.put_many(self.memo)
        logger.debug("Published %d of %d memo entries", added, len(self.memo))
        return added

    def _lookup(self, key: int) -> Outcome | None:
        cached = self.memo.get(key)
        if cached is not None:
            return cached
        if self.table is not None:
            cached = self.table.get(key)
            if cached is not None:
                self.memo[key] = cached
        return cached

    def _search(self, position: Position) -> Outcome:
        key = position.encode()
        cached = self._lookup(key)
        if cached is not None:
            return cached
        self.nodes_expanded += 1

        result = evaluate_outcome(position)
        if result is not Outcome.DRAW:
            self.memo[key] = result
            return result

        moves = position.legal_moves()
        if not moves:
            self.memo[key] = Outcome.DRAW
            return Outcome.DRAW

        win = Outcome.win(position.current_player)
        pending: list[Position] = []
        for move in moves:
            successor = position.copy()
            successor.apply_move(move)
            immediate = evaluate_outcome(successor)
            if immediate is Outcome.DRAW:
                pending.append(successor)
            elif immediate is win:
                self.memo[key] = win
                return win

        # Assume the worst until a successor proves otherwise.
        result = Outcome.win(position.opponent)
        for successor in pending:
            value = self._search(successor)
            if value is win:
                result = win
                break
            if value is Outcome.DRAW:
                result = Outcome.DRAW

        self.memo[key] = result
        return result


def solve_position(
    position: Position,
    table: SharedTranspositionTable | None = None,
) -> Outcome:
    """Solve ``position`` with a fresh solver."""
    return Solver(table).solve(position)
