"""
Shared pytest fixtures for Gobblet AI service tests.

Position fixtures are function-scoped so tests can mutate them freely.
Test positions come from late in a scripted game so exhaustive solving stays
fast.
"""

import os
from pathlib import Path
import sys
from typing import Callable, List, Tuple

import pytest


# =============================================================================
# PROMETHEUS REGISTRY FIX
# =============================================================================
# Re-importing app.metrics through different paths would otherwise raise
# "Duplicated timeseries in CollectorRegistry" during collection.


def _patch_prometheus_registry():
    """Make re-registration of identical metrics a no-op instead of an error."""
    try:
        from prometheus_client.registry import CollectorRegistry

        _original_register = CollectorRegistry.register

        def _safe_register(self, collector):
            """Register collector, ignoring duplicates."""
            try:
                return _original_register(self, collector)
            except ValueError as e:
                if "Duplicated timeseries" not in str(e):
                    raise

        # Only patch once
        if not getattr(CollectorRegistry, '_patched_for_tests', False):
            CollectorRegistry.register = _safe_register
            CollectorRegistry._patched_for_tests = True

    except ImportError:
        # prometheus_client not installed, no patching needed
        pass


_patch_prometheus_registry()

# Never run the opening warm-up in the test process.
os.environ["GOBBLET_PRECOMPUTE_PLIES"] = "0"

# Ensure the repository root is on sys.path so `import app` works when
# running pytest from any directory.
SERVICE_ROOT = Path(__file__).resolve().parents[1]
if str(SERVICE_ROOT) not in sys.path:
    sys.path.insert(0, str(SERVICE_ROOT))

from app.ai.transposition_table import SharedTranspositionTable  # noqa: E402
from app.rules.chip import Chip  # noqa: E402
from app.rules.position import Move, Position  # noqa: E402


# (row, col, player, size) for each ply. Player 1 completes column 1 on the
# last ply.
SCRIPTED_GAME: List[Tuple[int, int, int, int]] = [
    (1, 1, 1, 1),
    (1, 1, 2, 2),
    (2, 2, 1, 1),
    (2, 2, 2, 3),
    (1, 1, 1, 3),
    (0, 2, 2, 2),
    (1, 2, 1, 3),
    (1, 0, 2, 3),
    (2, 1, 1, 2),
    (0, 1, 2, 1),
    (0, 1, 1, 2),
]


def play_scripted(plies: int) -> Position:
    """Return the position after the first ``plies`` plies of SCRIPTED_GAME."""
    position = Position.initial()
    for row, col, player, size in SCRIPTED_GAME[:plies]:
        position.apply_move(Move(row, col, Chip(player, size)))
    return position


# =============================================================================
# POSITION FIXTURES
# =============================================================================


@pytest.fixture
def initial_position() -> Position:
    """Empty board, 2 chips of every size each, player 1 to move."""
    return Position.initial()


@pytest.fixture
def position_after() -> Callable[[int], Position]:
    """Factory for positions along the scripted game."""
    return play_scripted


@pytest.fixture
def endgame_position() -> Position:
    """Player 1 to move with a single size-2 chip left.

    Board (player/size, ``..`` empty)::

        ..  21  22
        23  13  13
        ..  12  23

    Player 2 has one size-1 chip left. (0, 1) wins at once, (0, 0) leads
    to a draw and (2, 0) lets player 2 complete row 0.
    """
    return play_scripted(10)


@pytest.fixture
def table() -> SharedTranspositionTable:
    """Fresh, empty transposition table."""
    return SharedTranspositionTable()
