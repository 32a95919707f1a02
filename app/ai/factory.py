"""AI factory for Gobblet.

All strategy instances are created here so the HTTP layer and tests build
them the same way.

Usage:
    from app.ai.factory import create_ai, select_move

    ai = create_ai("optimal", table=transposition_table, rng_seed=7)
    move = ai.select_move(position)

    # One-shot helper
    move = select_move(position, position.legal_moves(), "random")
"""

from __future__ import annotations

import logging

from app.ai.base import BaseAI
from app.ai.transposition_table import SharedTranspositionTable
from app.models import AIConfig
from app.rules.position import Move, Position

logger = logging.getLogger(__name__)

RANDOM_STRATEGY = "random"


def create_ai(
    strategy: str,
    table: SharedTranspositionTable | None = None,
    rng_seed: int | None = None,
) -> BaseAI:
    """Create the AI for ``strategy``.

    ``"random"`` gives a :class:`RandomAI`; every other value gives a
    :class:`MinimaxAI` backed by ``table``.
    """
    config = AIConfig(strategy=strategy, rng_seed=rng_seed)
    if strategy == RANDOM_STRATEGY:
        from app.ai.random_ai import RandomAI

        return RandomAI(config)

    from app.ai.minimax_ai import MinimaxAI

    return MinimaxAI(config, table)


def select_move(
    position: Position,
    moves: list[Move],
    strategy: str,
    table: SharedTranspositionTable | None = None,
    rng_seed: int | None = None,
) -> Move | None:
    """Choose one of ``moves`` for the player to move in ``position``."""
    ai = create_ai(strategy, table=table, rng_seed=rng_seed)
    return ai.select_move(position, moves)
