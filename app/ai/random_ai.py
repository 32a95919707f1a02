"""Random AI implementation for Gobblet.

This agent selects uniformly random legal moves using the per-instance RNG on
the :class:`BaseAI`, without any lookahead. It backs the ``"random"``
strategy and is useful as a baseline opponent.
"""

from __future__ import annotations

from ..rules.position import Move, Position
from .base import BaseAI


class RandomAI(BaseAI):
    """AI that selects random valid moves."""

    def select_move(
        self,
        position: Position,
        moves: list[Move] | None = None,
    ) -> Move | None:
        """Select a random valid move for ``position``.

        Args:
            position: Current position.
            moves: Candidate moves; defaults to all legal moves.

        Returns:
            A random :class:`Move` or ``None`` if no legal moves exist.
        """
        valid_moves = moves if moves is not None else self.get_valid_moves(position)

        if not valid_moves:
            return None

        selected = self.get_random_element(valid_moves)

        self.move_count += 1
        return selected
