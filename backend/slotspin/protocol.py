"""Wire models for the HTTP host binding."""
from enum import Enum

from pydantic import BaseModel, Field

from slotspin.config import settings
from slotspin.logic.lines import RUN_MULTIPLIER_TENTHS
from slotspin.logic.models import SYMBOL_COUNT, Outcome
from slotspin.logic.payout import MULTIPLIER_SCALE
from slotspin.logic.reel import BAND_TABLE


class EngineKind(str, Enum):
    """Engine variant served by a spin endpoint."""

    REEL = "reel"
    GRID = "grid"


# === Request Models ===


class SpinRequest(BaseModel):
    """POST /spin/{engine} request body."""

    balance: int = Field(..., description="Current balance, supplied by the host")
    bet: int = Field(..., description="Wager; values below 1 play as 1")


class CreditRequest(BaseModel):
    """POST /credit request body."""

    balance: int


# === Response Models ===


class Configuration(BaseModel):
    """Configuration object in /init response."""

    startingBalance: int = Field(default_factory=lambda: settings.starting_balance)
    creditAmount: int = Field(default_factory=lambda: settings.credit_amount)
    enforceSufficientFunds: bool = Field(
        default_factory=lambda: settings.enforce_sufficient_funds
    )
    symbolCount: int = SYMBOL_COUNT
    reelPaytable: dict[str, int] = Field(
        default_factory=lambda: {rule.outcome.value: rule.payout_x for rule in BAND_TABLE}
    )
    gridRunMultipliers: dict[int, float] = Field(
        default_factory=lambda: {
            length: tenths / MULTIPLIER_SCALE
            for length, tenths in RUN_MULTIPLIER_TENTHS.items()
        }
    )


class InitResponse(BaseModel):
    """GET /init response."""

    protocolVersion: str = settings.protocol_version
    configuration: Configuration = Field(default_factory=Configuration)


class ReelSpinResponse(BaseModel):
    """POST /spin/reel response."""

    protocolVersion: str = settings.protocol_version
    roundId: str
    engine: EngineKind = EngineKind.REEL
    symbols: list[int]
    delta: int
    balance: int
    outcome: Outcome


class GridSpinResponse(BaseModel):
    """POST /spin/grid response."""

    protocolVersion: str = settings.protocol_version
    roundId: str
    engine: EngineKind = EngineKind.GRID
    symbols: list[int]
    delta: int
    balance: int
    outcome: Outcome
    winningCells: list[int] = Field(default_factory=list)
    linesWon: int = 0
    totalMultiplier: float = 0.0


class CreditResponse(BaseModel):
    """POST /credit response."""

    protocolVersion: str = settings.protocol_version
    balance: int
    credited: int
