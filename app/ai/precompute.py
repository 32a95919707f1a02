"""Opening warm-up for the shared transposition table.

Solves every position reachable within the first few plies and stores those
results together with every deeper position the search went through, so
requests answer from the table instead of searching the same subtrees
again. Outcomes are the same with or without the warm-up; only latency
changes.
"""

from __future__ import annotations

import logging
import time

from ..errors import ConfigurationError
from ..rules.position import Position
from .solver import Solver
from .transposition_table import SharedTranspositionTable

logger = logging.getLogger(__name__)

DEFAULT_PRECOMPUTE_PLIES = 3


def parse_precompute_plies(raw: str | None) -> int:
    """Parse the warm-up depth from an environment value.

    Raises:
        ConfigurationError: the value is not a non-negative integer.
    """
    if raw is None or raw.strip() == "":
        return DEFAULT_PRECOMPUTE_PLIES
    try:
        plies = int(raw)
    except ValueError:
        raise ConfigurationError(
            "Warm-up depth must be an integer",
            context={"value": raw},
        ) from None
    if plies < 0:
        raise ConfigurationError(
            "Warm-up depth must not be negative",
            context={"value": plies},
        )
    return plies


def warm_up(
    table: SharedTranspositionTable,
    plies: int = DEFAULT_PRECOMPUTE_PLIES,
    root: Position | None = None,
) -> int:
    """Breadth-first expand ``root`` for ``plies`` plies and solve each node.

    One solver memo is shared across the whole expansion, and the whole memo
    is inserted in ``table`` at the end: every position reached at ply
    1..``plies`` plus every deeper position solved along the way.

    Args:
        table: Table to populate
        plies: Number of plies to expand (0 does nothing)
        root: Starting position, the initial position by default

    Returns:
        Number of new entries inserted in ``table``
    """
    start = time.time()
    solver = Solver()
    current = [root.copy() if root is not None else Position.initial()]
    seen: set[int] = set()
    for ply in range(plies):
        frontier: list[Position] = []
        for position in current:
            for move in position.legal_moves():
                successor = position.copy()
                successor.apply_move(move)
                key = successor.encode()
                if key in seen:
                    continue
                seen.add(key)
                solver.solve(successor)
                frontier.append(successor)
        logger.debug("Warm-up ply %d: %d positions", ply + 1, len(frontier))
        current = frontier

    added = table.put_many(solver.memo)
    logger.info(
        "Transposition table ready, size: %d (warm-up %d plies, %d opening positions, %.1fs)",
        len(table),
        plies,
        len(seen),
        time.time() - start,
    )
    return added
