"""Line-completion outcome of a board.

``evaluate_outcome`` only looks at board geometry: the 3 rows, the 3
columns, then both diagonals. A line belongs to a player when all of its
cells are occupied by that player's chips, whatever their sizes. It returns
``Outcome.DRAW`` both for finished draws and for games that are still
running; telling them apart needs the legal move list.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Sequence

from .chip import BOARD_SIZE, Chip

if TYPE_CHECKING:
    from .position import Position


class Outcome(str, Enum):
    """Game result: a draw or a win for one player."""

    DRAW = "draw"
    WIN1 = "win1"
    WIN2 = "win2"

    @classmethod
    def win(cls, player: int) -> "Outcome":
        return cls.WIN1 if player == 1 else cls.WIN2

    @property
    def winner(self) -> int | None:
        if self is Outcome.WIN1:
            return 1
        if self is Outcome.WIN2:
            return 2
        return None


def _build_lines() -> tuple[tuple[tuple[int, int], ...], ...]:
    rows = [tuple((r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)]
    cols = [tuple((r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)]
    diag = tuple((i, i) for i in range(BOARD_SIZE))
    anti = tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE))
    return tuple(rows + cols + [diag, anti])


# Check order matters: rows, columns, main diagonal, anti-diagonal.
WIN_LINES = _build_lines()


def board_outcome(board: Sequence[Sequence[Chip]]) -> Outcome:
    """Return the outcome of a raw 3x3 chip grid."""
    for line in WIN_LINES:
        r0, c0 = line[0]
        owner = board[r0][c0].player
        if owner == 0:
            continue
        if all(board[r][c].player == owner for r, c in line[1:]):
            return Outcome.win(owner)
    return Outcome.DRAW


def evaluate_outcome(position: "Position") -> Outcome:
    """Return the line-completion outcome of ``position``."""
    return board_outcome(position.board)
