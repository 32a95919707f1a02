"""Gobblet rules: chips, positions, moves and line outcomes."""

from app.rules.chip import (
    BOARD_SIZE,
    EMPTY_CHIP,
    MAX_CHIP_SIZE,
    NUM_PLAYERS,
    SAME_CHIP_COUNT,
    Chip,
)
from app.rules.outcome import WIN_LINES, Outcome, board_outcome, evaluate_outcome
from app.rules.position import FINGERPRINT_BITS, Move, Position

__all__ = [
    "BOARD_SIZE",
    "EMPTY_CHIP",
    "FINGERPRINT_BITS",
    "MAX_CHIP_SIZE",
    "NUM_PLAYERS",
    "SAME_CHIP_COUNT",
    "WIN_LINES",
    "Chip",
    "Move",
    "Outcome",
    "Position",
    "board_outcome",
    "evaluate_outcome",
]
