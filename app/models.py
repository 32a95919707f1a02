"""
Pydantic Models for the Gobblet AI Service
Wire shapes of chips, moves and game states, plus request/response bodies.

The search engine works on the plain-Python types in ``app.rules``; the
models here only exist at the HTTP boundary and convert to and from them.
"""

from pydantic import BaseModel, Field
from typing import Annotated, List, Optional, Tuple

from .errors import InvalidStateError
from .rules.chip import (
    BOARD_SIZE,
    EMPTY_CHIP,
    MAX_CHIP_SIZE,
    NUM_PLAYERS,
    SAME_CHIP_COUNT,
    Chip,
)
from .rules.outcome import Outcome
from .rules.position import Move, Position

Coordinate = Annotated[int, Field(ge=0, lt=BOARD_SIZE)]
ChipCount = Annotated[int, Field(ge=0, le=SAME_CHIP_COUNT)]


class ChipModel(BaseModel):
    """Chip on the wire: player 0 with size 0 is an empty cell"""
    player: int = Field(ge=0, le=NUM_PLAYERS)
    size: int = Field(ge=0, le=MAX_CHIP_SIZE)

    class Config:
        frozen = True

    def to_chip(self) -> Chip:
        if (self.player == 0) != (self.size == 0):
            raise InvalidStateError(
                "Chip must have both an owner and a size, or neither",
                context={"player": self.player, "size": self.size},
            )
        if self.size == 0:
            return EMPTY_CHIP
        return Chip(self.player, self.size)

    @classmethod
    def from_chip(cls, chip: Chip) -> "ChipModel":
        return cls(player=chip.player, size=chip.size)


class MoveModel(BaseModel):
    """Placement of a chip on a (row, col) cell"""
    position: Tuple[Coordinate, Coordinate]
    chip: ChipModel

    class Config:
        frozen = True

    def to_move(self) -> Move:
        row, col = self.position
        return Move(row, col, self.chip.to_chip())

    @classmethod
    def from_move(cls, move: Move) -> "MoveModel":
        return cls(position=(move.row, move.col), chip=ChipModel.from_chip(move.chip))


class GameState(BaseModel):
    """Full game state.

    ``chips[p][s]`` is the number of unplaced chips of size ``s + 1`` left to
    player ``p + 1``; ``board`` holds the top chip of each cell.
    """
    chips: Annotated[
        List[Annotated[List[ChipCount], Field(min_length=MAX_CHIP_SIZE, max_length=MAX_CHIP_SIZE)]],
        Field(min_length=NUM_PLAYERS, max_length=NUM_PLAYERS),
    ]
    board: Annotated[
        List[Annotated[List[ChipModel], Field(min_length=BOARD_SIZE, max_length=BOARD_SIZE)]],
        Field(min_length=BOARD_SIZE, max_length=BOARD_SIZE),
    ]
    current_player: int = Field(ge=1, le=NUM_PLAYERS)

    def to_position(self) -> Position:
        """Build the engine position; raises InvalidStateError on bad chips."""
        return Position(
            [list(counts) for counts in self.chips],
            [[chip.to_chip() for chip in row] for row in self.board],
            self.current_player,
        )

    @classmethod
    def from_position(cls, position: Position) -> "GameState":
        return cls(
            chips=[list(counts) for counts in position.chips],
            board=[[ChipModel.from_chip(chip) for chip in row] for row in position.board],
            current_player=position.current_player,
        )


class AIConfig(BaseModel):
    """AI configuration"""
    strategy: str = "optimal"
    rng_seed: Optional[int] = Field(None, alias="rngSeed")

    class Config:
        populate_by_name = True


class MoveRequest(BaseModel):
    """Request model for AI move selection"""
    state: GameState
    strategy: str
    seed: Optional[int] = Field(
        None,
        ge=0,
        le=0x7FFFFFFF,
        description="Optional RNG seed for deterministic tie-breaking"
    )


class MoveResponse(BaseModel):
    """Response model for AI move selection.

    ``move`` is absent when the submitted state was already over. ``result``
    is present whenever the game is over, before or after the move.
    """
    move: Optional[MoveModel] = None
    result: Optional[Outcome] = None
    strategy: Optional[str] = None
    thinking_time_ms: Optional[int] = None


class EvaluationRequest(BaseModel):
    """Request model for position evaluation"""
    state: GameState


class EvaluationResponse(BaseModel):
    """Solved outcome of a position under optimal play"""
    result: Outcome
    immediate_result: Outcome
    terminal: bool
    legal_move_count: int
    fingerprint: int


class RulesEvalRequest(BaseModel):
    """Request model for rules evaluation of a single move"""
    state: GameState
    move: MoveModel


class RulesEvalResponse(BaseModel):
    """Response model for rules evaluation"""
    valid: bool
    validation_error: Optional[str] = None
    next_state: Optional[GameState] = None
    result: Optional[Outcome] = None
    terminal: Optional[bool] = None
    fingerprint: Optional[int] = None
