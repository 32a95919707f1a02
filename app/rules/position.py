"""Game position, moves and the fingerprint codec.

A :class:`Position` is the full game state: remaining chip supply per player
and size, the top chip of every cell, and the player to move. It is the
search-side state: plain lists, mutated in place by :meth:`apply_move`.
Wire conversion lives in :mod:`app.models`.

Fingerprint layout (low to high bits):

- 1 bit: ``current_player - 1``
- 12 bits: remaining counts, 2 bits each, player 1 sizes 1..3 then player 2
- 27 bits: chip codes of the 9 cells, 3 bits each, row-major

The fingerprint is a bijection over reachable positions and doubles as the
transposition table key.
"""

from __future__ import annotations

from typing import NamedTuple

from ..errors import InvalidStateError, RulesViolationError
from .chip import (
    BOARD_SIZE,
    CHIP_CODE_BITS,
    EMPTY_CHIP,
    MAX_CHIP_SIZE,
    NUM_PLAYERS,
    SAME_CHIP_COUNT,
    Chip,
)
from .outcome import Outcome, evaluate_outcome

COUNT_BITS = 2
FINGERPRINT_BITS = (
    1
    + NUM_PLAYERS * MAX_CHIP_SIZE * COUNT_BITS
    + BOARD_SIZE * BOARD_SIZE * CHIP_CODE_BITS
)
_COUNT_MASK = (1 << COUNT_BITS) - 1
_CHIP_MASK = (1 << CHIP_CODE_BITS) - 1


class Move(NamedTuple):
    """Placement of ``chip`` on cell ``(row, col)``."""

    row: int
    col: int
    chip: Chip


class Position:
    """Mutable game state used by the engine and the solver."""

    __slots__ = ("chips", "board", "current_player")

    def __init__(
        self,
        chips: list[list[int]] | None = None,
        board: list[list[Chip]] | None = None,
        current_player: int = 1,
    ) -> None:
        if chips is None:
            chips = [[SAME_CHIP_COUNT] * MAX_CHIP_SIZE for _ in range(NUM_PLAYERS)]
        if board is None:
            board = [[EMPTY_CHIP] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.chips = chips
        self.board = board
        self.current_player = current_player

    @classmethod
    def initial(cls) -> "Position":
        """Starting position: 2 chips of every size each, player 1 to move."""
        return cls()

    def copy(self) -> "Position":
        return Position(
            [list(counts) for counts in self.chips],
            [list(row) for row in self.board],
            self.current_player,
        )

    @property
    def opponent(self) -> int:
        return NUM_PLAYERS + 1 - self.current_player

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.current_player == other.current_player
            and self.chips == other.chips
            and self.board == other.board
        )

    __hash__ = None  # mutable; use encode() as a key

    def __repr__(self) -> str:
        rows = " / ".join(
            " ".join(f"{c.player}{c.size}" if c.size else ".." for c in row)
            for row in self.board
        )
        return (
            f"Position(player={self.current_player}, chips={self.chips}, "
            f"board=[{rows}])"
        )

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def legal_moves(self) -> list[Move]:
        """Return the current player's legal moves.

        Ordered by increasing chip size, then row-major cell order. A cell
        accepts a chip when its top chip is strictly smaller (empty is 0).
        """
        player = self.current_player
        supply = self.chips[player - 1]
        moves: list[Move] = []
        for size in range(1, MAX_CHIP_SIZE + 1):
            if supply[size - 1] == 0:
                continue
            chip = Chip(player, size)
            for row in range(BOARD_SIZE):
                for col in range(BOARD_SIZE):
                    if self.board[row][col].size < size:
                        moves.append(Move(row, col, chip))
        return moves

    def apply_move(self, move: Move) -> None:
        """Place ``move.chip`` and pass the turn.

        Raises:
            RulesViolationError: the chip is not the mover's, the mover has
                no chip of that size left, or the target cell is occupied by
                an equal or larger chip. The position is left untouched.
        """
        chip = move.chip
        if chip.player != self.current_player:
            raise RulesViolationError(
                "Chip does not belong to the player to move",
                context={"chip_player": chip.player, "current_player": self.current_player},
            )
        if not 1 <= chip.size <= MAX_CHIP_SIZE:
            raise RulesViolationError(
                "Chip size out of range", context={"size": chip.size}
            )
        if self.chips[chip.player - 1][chip.size - 1] <= 0:
            raise RulesViolationError(
                "No chips of this size left",
                context={"player": chip.player, "size": chip.size},
            )
        if not (0 <= move.row < BOARD_SIZE and 0 <= move.col < BOARD_SIZE):
            raise RulesViolationError(
                "Cell is off the board", context={"row": move.row, "col": move.col}
            )
        covered = self.board[move.row][move.col]
        if covered.size >= chip.size:
            raise RulesViolationError(
                "Chip must be larger than the chip it covers",
                context={"size": chip.size, "covered_size": covered.size},
            )
        self.board[move.row][move.col] = chip
        self.chips[chip.player - 1][chip.size - 1] -= 1
        self.current_player = self.opponent

    def outcome(self) -> Outcome:
        return evaluate_outcome(self)

    def is_terminal(self) -> bool:
        """True when a line is complete or the player to move is stuck."""
        return self.outcome() is not Outcome.DRAW or not self.legal_moves()

    # ------------------------------------------------------------------
    # Fingerprint codec
    # ------------------------------------------------------------------

    def encode(self) -> int:
        """Pack this position into its integer fingerprint."""
        value = self.current_player - 1
        shift = 1
        for counts in self.chips:
            for count in counts:
                value |= count << shift
                shift += COUNT_BITS
        for row in self.board:
            for chip in row:
                value |= chip.encode() << shift
                shift += CHIP_CODE_BITS
        return value

    @classmethod
    def decode(cls, value: int) -> "Position":
        """Unpack a fingerprint produced by :meth:`encode`.

        Raises:
            InvalidStateError: ``value`` does not fit the fingerprint width
                or encodes more than two chips of a size.
        """
        if value < 0 or value >> FINGERPRINT_BITS:
            raise InvalidStateError(
                "Fingerprint out of range",
                context={"fingerprint": value, "bits": FINGERPRINT_BITS},
            )
        current_player = (value & 1) + 1
        value >>= 1
        chips = []
        for _ in range(NUM_PLAYERS):
            counts = []
            for _ in range(MAX_CHIP_SIZE):
                count = value & _COUNT_MASK
                if count > SAME_CHIP_COUNT:
                    raise InvalidStateError(
                        "Fingerprint holds an impossible chip count",
                        context={"count": count},
                    )
                counts.append(count)
                value >>= COUNT_BITS
            chips.append(counts)
        board = []
        for _ in range(BOARD_SIZE):
            row = []
            for _ in range(BOARD_SIZE):
                row.append(Chip.decode(value & _CHIP_MASK))
                value >>= CHIP_CODE_BITS
            board.append(row)
        return cls(chips, board, current_player)
