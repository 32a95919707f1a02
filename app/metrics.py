"""Prometheus metrics for the Gobblet AI service.

This module centralises counters, gauges and histograms so that /ai/move
and the solver can record lightweight telemetry without each caller
managing its own metric instances.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Gauge, Histogram


AI_MOVE_REQUESTS: Final[Counter] = Counter(
    "gobblet_ai_move_requests_total",
    "Total number of /ai/move requests, labeled by strategy and outcome.",
    labelnames=("strategy", "outcome"),
)

AI_MOVE_LATENCY: Final[Histogram] = Histogram(
    "gobblet_ai_move_latency_seconds",
    "Latency of /ai/move requests in seconds, labeled by strategy.",
    labelnames=("strategy",),
    # Cached positions answer in well under a millisecond; cold early-game
    # positions can take seconds of exhaustive search.
    buckets=(
        0.001,
        0.01,
        0.05,
        0.1,
        0.5,
        1.0,
        5.0,
        30.0,
    ),
)

TRANSPOSITION_TABLE_SIZE: Final[Gauge] = Gauge(
    "gobblet_transposition_table_entries",
    "Current number of entries in the shared transposition table.",
)

TRANSPOSITION_TABLE_LOOKUPS: Final[Counter] = Counter(
    "gobblet_transposition_table_lookups_total",
    "Shared transposition table lookups, labeled by outcome (hit/miss).",
    labelnames=("outcome",),
)

SOLVER_NODES: Final[Counter] = Counter(
    "gobblet_solver_nodes_total",
    "Positions expanded by the minimax solver (memo and table misses).",
)


def normalise_strategy_label(strategy: str) -> str:
    """Map free-form strategy strings onto a bounded label set."""
    return "random" if strategy == "random" else "optimal"
