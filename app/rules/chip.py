"""Chip value type and its 3-bit code.

A chip is an ``(player, size)`` pair. Player ``0`` with size ``0`` is the
empty sentinel used for unoccupied cells; every real chip has a player in
``{1, 2}`` and a size in ``{1, 2, 3}``.

Code layout (3 bits):
    bits 0-1: size (0 means empty)
    bit 2:    player - 1, only read when size != 0
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 3
MAX_CHIP_SIZE = 3
SAME_CHIP_COUNT = 2
NUM_PLAYERS = 2

CHIP_CODE_BITS = 3
_SIZE_MASK = 0b011
_PLAYER_SHIFT = 2


class Chip(NamedTuple):
    """A placed (or empty) chip."""

    player: int
    size: int

    @property
    def is_empty(self) -> bool:
        return self.player == 0

    def encode(self) -> int:
        """Return the 3-bit code of this chip."""
        code = self.size
        if self.size != 0:
            code |= (self.player - 1) << _PLAYER_SHIFT
        return code

    @classmethod
    def decode(cls, code: int) -> "Chip":
        """Rebuild a chip from its 3-bit code."""
        size = code & _SIZE_MASK
        if size == 0:
            return EMPTY_CHIP
        return cls(((code >> _PLAYER_SHIFT) & 1) + 1, size)


EMPTY_CHIP = Chip(0, 0)
