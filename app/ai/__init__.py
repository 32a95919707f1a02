"""AI implementations for Gobblet.

Use the factory to build a strategy:

    from app.ai import create_ai

    ai = create_ai("optimal", table=transposition_table)
    move = ai.select_move(position)

Architecture:
- base.py: BaseAI abstract base class
- factory.py: create_ai / select_move
- random_ai.py: uniform random legal move
- minimax_ai.py: perfect play by solving every successor
- solver.py: exhaustive minimax with memoisation
- transposition_table.py: process-wide fingerprint -> outcome table
- precompute.py: opening warm-up of the table
"""

from app.ai.base import BaseAI
from app.ai.factory import RANDOM_STRATEGY, create_ai, select_move
from app.ai.minimax_ai import MinimaxAI, MoveClassification
from app.ai.precompute import warm_up
from app.ai.random_ai import RandomAI
from app.ai.solver import Solver, solve_position
from app.ai.transposition_table import SharedTranspositionTable

__all__ = [
    "RANDOM_STRATEGY",
    "BaseAI",
    "MinimaxAI",
    "MoveClassification",
    "RandomAI",
    "SharedTranspositionTable",
    "Solver",
    "create_ai",
    "select_move",
    "solve_position",
    "warm_up",
]
