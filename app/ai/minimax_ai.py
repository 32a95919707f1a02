"""Minimax AI implementation for Gobblet.

This agent plays perfectly: every legal move is classified by solving the
position it leads to with the exhaustive :class:`~app.ai.solver.Solver`,
then a move is drawn uniformly at random from the best non-empty class
(winning, then drawing, then losing).

Each instance owns one solver, so its memo is scoped to the request that
created the instance. Whatever the solver learned is published to the shared
transposition table (when given) so later requests skip those subtrees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..models import AIConfig
from ..rules.outcome import Outcome
from ..rules.position import Move, Position
from .base import BaseAI
from .solver import Solver
from .transposition_table import SharedTranspositionTable

logger = logging.getLogger(__name__)


@dataclass
class MoveClassification:
    """Legal moves split by the solved outcome of their resulting position."""

    winning: list[Move] = field(default_factory=list)
    drawing: list[Move] = field(default_factory=list)
    losing: list[Move] = field(default_factory=list)

    def best(self) -> list[Move]:
        """Return the most favourable non-empty class (possibly empty)."""
        return self.winning or self.drawing or self.losing


class MinimaxAI(BaseAI):
    """AI that solves every successor and never gives away a better result."""

    def __init__(
        self,
        config: AIConfig,
        table: SharedTranspositionTable | None = None,
    ) -> None:
        super().__init__(config)
        self.solver = Solver(table)

    def evaluate_position(self, position: Position) -> Outcome:
        """Return the outcome of ``position`` under optimal play."""
        result = self.solver.solve(position)
        self.solver.publish()
        return result

    def classify_moves(
        self,
        position: Position,
        moves: list[Move] | None = None,
    ) -> MoveClassification:
        """Partition ``moves`` into winning, drawing and losing for the mover."""
        mover = position.current_player
        if moves is None:
            moves = self.get_valid_moves(position)
        classification = MoveClassification()
        for move in moves:
            successor = position.copy()
            successor.apply_move(move)
            result = self.solver.solve(successor)
            if result is Outcome.DRAW:
                classification.drawing.append(move)
            elif result.winner == mover:
                classification.winning.append(move)
            else:
                classification.losing.append(move)
        self.solver.publish()
        return classification

    def select_move(
        self,
        position: Position,
        moves: list[Move] | None = None,
    ) -> Move | None:
        """Pick a random move among the best-classified legal moves.

        Args:
            position: Current position (not modified).
            moves: Candidate moves; defaults to all legal moves.

        Returns:
            The selected :class:`Move`, or ``None`` if there are no moves.
        """
        classification = self.classify_moves(position, moves)
        logger.debug(
            "Player %d: %d winning, %d drawing, %d losing moves",
            position.current_player,
            len(classification.winning),
            len(classification.drawing),
            len(classification.losing),
        )
        selected = self.get_random_element(classification.best())
        if selected is not None:
            self.move_count += 1
        return selected
