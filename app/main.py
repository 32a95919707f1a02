"""
Gobblet AI Service - FastAPI Application
Provides perfect-play move selection and position evaluation endpoints
"""

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .ai.factory import create_ai
from .ai.minimax_ai import MinimaxAI
from .ai.precompute import parse_precompute_plies, warm_up
from .ai.transposition_table import SharedTranspositionTable
from .errors import GobbletError, InvalidStateError, RulesViolationError
from .metrics import (
    AI_MOVE_LATENCY,
    AI_MOVE_REQUESTS,
    normalise_strategy_label,
)
from .models import (
    AIConfig,
    EvaluationRequest,
    EvaluationResponse,
    GameState,
    MoveModel,
    MoveRequest,
    MoveResponse,
    RulesEvalRequest,
    RulesEvalResponse,
)
from .rules.position import Position

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Gobblet AI Service"
SERVICE_VERSION = "1.0.0"

# Shared for the life of the process: every request reads and extends it.
transposition_table = SharedTranspositionTable()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm up the transposition table before serving requests."""
    plies = parse_precompute_plies(os.getenv("GOBBLET_PRECOMPUTE_PLIES"))
    logger.info("Starting %s (warm-up plies=%d)...", SERVICE_NAME, plies)
    if plies > 0:
        warm_up(transposition_table, plies)
    yield
    logger.info("Shutting down %s...", SERVICE_NAME)


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Perfect-play move selection service for Gobblet tic-tac-toe",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _to_position(state: GameState) -> Position:
    try:
        return state.to_position()
    except InvalidStateError as e:
        logger.warning("Rejected malformed state: %s", e)
        raise HTTPException(status_code=400, detail=e.to_dict())


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "service": SERVICE_NAME,
        "status": "running",
        "version": SERVICE_VERSION,
    }


@app.get("/health")
async def health_check():
    """Health check for container orchestration"""
    return {"status": "healthy"}


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


# Solving is blocking CPU work, so the handlers below are plain ``def`` and
# run in Starlette's worker thread pool, one thread per request.


@app.post(
    "/ai/move",
    response_model=MoveResponse,
    response_model_exclude_none=True,
)
def get_ai_move(request: MoveRequest):
    """
    Choose a move for the player to move in ``request.state``.

    If the submitted state is already over, only ``result`` is returned.
    Otherwise the chosen move is returned, with ``result`` added when the
    move ends the game.
    """
    start_time = time.time()
    strategy_label = normalise_strategy_label(request.strategy)
    position = _to_position(request.state)

    if position.is_terminal():
        AI_MOVE_REQUESTS.labels(strategy_label, "finished").inc()
        return MoveResponse(result=position.outcome())

    try:
        ai = create_ai(
            request.strategy,
            table=transposition_table,
            rng_seed=request.seed,
        )
        best_move = ai.select_move(position, position.legal_moves())
        position.apply_move(best_move)
        result = position.outcome() if position.is_terminal() else None

        duration_seconds = time.time() - start_time
        AI_MOVE_REQUESTS.labels(strategy_label, "success").inc()
        AI_MOVE_LATENCY.labels(strategy_label).observe(duration_seconds)

        thinking_time = int(duration_seconds * 1000)
        logger.info(
            "AI move: strategy=%s, move=%s, time=%dms, result=%s",
            request.strategy,
            best_move,
            thinking_time,
            result.value if result is not None else "ongoing",
        )
        return MoveResponse(
            move=MoveModel.from_move(best_move),
            result=result,
            strategy=request.strategy,
            thinking_time_ms=thinking_time,
        )

    except Exception as e:
        AI_MOVE_REQUESTS.labels(strategy_label, "error").inc()
        AI_MOVE_LATENCY.labels(strategy_label).observe(time.time() - start_time)
        logger.error("Error generating AI move: %s", str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/ai/evaluate", response_model=EvaluationResponse)
def evaluate_position(request: EvaluationRequest):
    """Solve ``request.state`` under optimal play by both sides."""
    position = _to_position(request.state)
    try:
        ai = MinimaxAI(AIConfig(), transposition_table)
        moves = position.legal_moves()
        return EvaluationResponse(
            result=ai.evaluate_position(position),
            immediate_result=position.outcome(),
            terminal=position.is_terminal(),
            legal_move_count=len(moves),
            fingerprint=position.encode(),
        )
    except Exception as e:
        logger.error("Error evaluating position: %s", str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    "/rules/evaluate_move",
    response_model=RulesEvalResponse,
    response_model_exclude_none=True,
)
def evaluate_move(request: RulesEvalRequest):
    """Validate and apply a single move, returning the next state."""
    position = _to_position(request.state)
    try:
        move = request.move.to_move()
        position.apply_move(move)
    except (RulesViolationError, InvalidStateError) as e:
        return RulesEvalResponse(valid=False, validation_error=e.message)

    return RulesEvalResponse(
        valid=True,
        next_state=GameState.from_position(position),
        result=position.outcome(),
        terminal=position.is_terminal(),
        fingerprint=position.encode(),
    )


@app.get("/state/{fingerprint}", response_model=GameState)
async def decode_state(fingerprint: int):
    """Decode a position fingerprint into its game state."""
    try:
        position = Position.decode(fingerprint)
    except GobbletError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    return GameState.from_position(position)


@app.get("/ai/cache/stats")
async def ai_cache_stats():
    """Return stats about the shared transposition table."""
    return transposition_table.stats()


if __name__ == "__main__":
    import uvicorn

    # Bind to 0.0.0.0 and respect AI_SERVICE_PORT so local runs and
    # containers share the same configuration surface.
    port_str = os.getenv("AI_SERVICE_PORT", "8001")
    try:
        port = int(port_str)
    except ValueError:
        port = 8001

    uvicorn.run(app, host="0.0.0.0", port=port)
