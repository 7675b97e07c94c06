"""Slotspin FastAPI application: host binding for the reel and grid engines."""
import logging
import uuid

from fastapi import FastAPI

from slotspin.config import settings
from slotspin.config_hash import get_config_hash
from slotspin.errors import GameError
from slotspin.logic.grid import GridEngine
from slotspin.logic.payout import credit as apply_credit
from slotspin.logic.payout import effective_bet
from slotspin.logic.reel import ReelEngine
from slotspin.middleware import ErrorHandlerMiddleware
from slotspin.protocol import (
    CreditRequest,
    CreditResponse,
    EngineKind,
    GridSpinResponse,
    InitResponse,
    ReelSpinResponse,
    SpinRequest,
)
from slotspin.telemetry import (
    CreditAppliedEvent,
    SpinProcessedEvent,
    SpinRejectedEvent,
    telemetry_service,
)
from slotspin.validators import validate_spin_request


logger = logging.getLogger(__name__)
logging.getLogger("slotspin").setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title="Slotspin",
    version="0.1.0",
    description="Spin resolution server for the 3-reel and 10x10 grid slot engines",
)

app.add_middleware(ErrorHandlerMiddleware)

# Engine instances; both are stateless apart from their random source
reel_engine = ReelEngine()
grid_engine = GridEngine()


def _validate_or_reject(engine: EngineKind, body: SpinRequest) -> None:
    """Validate a spin request, emitting spin_rejected on failure."""
    try:
        validate_spin_request(body)
    except GameError as e:
        telemetry_service.emit_spin_rejected(
            SpinRejectedEvent(
                engine=engine.value,
                reason=e.code.value,
                balance=body.balance,
                bet=body.bet,
            )
        )
        raise


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/init")
async def init() -> dict:
    """Return protocol version and game configuration."""
    return InitResponse().model_dump()


@app.post("/spin/reel")
async def spin_reel(body: SpinRequest) -> dict:
    """Resolve one 3-reel spin."""
    _validate_or_reject(EngineKind.REEL, body)

    result = reel_engine.spin(balance=body.balance, bet=body.bet)
    round_id = str(uuid.uuid4())
    logger.debug("reel round %s: %s", round_id, result.band.value)

    response = ReelSpinResponse(
        roundId=round_id,
        symbols=result.symbols,
        delta=result.delta,
        balance=result.balance,
        outcome=result.outcome,
    )

    telemetry_service.emit_spin_processed(
        SpinProcessedEvent(
            round_id=round_id,
            engine=EngineKind.REEL.value,
            bet=effective_bet(body.bet),
            delta=result.delta,
            balance=result.balance,
            outcome=result.outcome.value,
            lines_won=None,
            config_hash=get_config_hash(),
        )
    )
    return response.model_dump()


@app.post("/spin/grid")
async def spin_grid(body: SpinRequest) -> dict:
    """Resolve one 10x10 grid spin."""
    _validate_or_reject(EngineKind.GRID, body)

    result = grid_engine.spin(balance=body.balance, bet=body.bet)
    round_id = str(uuid.uuid4())
    logger.debug(
        "grid round %s: %d lines, %.1fx", round_id, result.lines_won, result.total_multiplier
    )

    response = GridSpinResponse(
        roundId=round_id,
        symbols=result.symbols,
        delta=result.delta,
        balance=result.balance,
        outcome=result.outcome,
        winningCells=result.winning_cells,
        linesWon=result.lines_won,
        totalMultiplier=result.total_multiplier,
    )

    telemetry_service.emit_spin_processed(
        SpinProcessedEvent(
            round_id=round_id,
            engine=EngineKind.GRID.value,
            bet=effective_bet(body.bet),
            delta=result.delta,
            balance=result.balance,
            outcome=result.outcome.value,
            lines_won=result.lines_won,
            config_hash=get_config_hash(),
        )
    )
    return response.model_dump()


@app.post("/credit")
async def credit(body: CreditRequest) -> dict:
    """Top up the supplied balance by the configured credit amount."""
    balance = apply_credit(body.balance, settings.credit_amount)
    telemetry_service.emit_credit_applied(
        CreditAppliedEvent(amount=settings.credit_amount, balance=balance)
    )
    return CreditResponse(balance=balance, credited=settings.credit_amount).model_dump()
