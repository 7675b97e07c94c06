"""Spin result models shared by the reel and grid engines."""
from enum import Enum

from pydantic import BaseModel, Field


class Symbol(int, Enum):
    """Reel/grid symbols. Only equality matters."""
    CIRCLE = 0
    SQUARE = 1
    TRIANGLE = 2


SYMBOL_COUNT = len(Symbol)


class Outcome(str, Enum):
    """Outcome label reported to the host."""
    WIN_JACKPOT = "WIN_JACKPOT"
    WIN = "WIN"
    WIN_SMALL = "WIN_SMALL"
    LOSE = "LOSE"


class OutcomeBand(str, Enum):
    """Weighted result category of the reel engine."""
    JACKPOT = "JACKPOT"
    BIG_WIN = "BIG_WIN"
    SMALL_WIN = "SMALL_WIN"
    LOSE = "LOSE"


class ReelSpinResult(BaseModel):
    """Result of a 3-reel spin."""
    symbols: list[int] = Field(default_factory=list)  # exactly 3
    delta: int = 0
    balance: int = 0
    outcome: Outcome = Outcome.LOSE
    band: OutcomeBand = OutcomeBand.LOSE


class GridSpinResult(BaseModel):
    """Result of a 10x10 grid spin."""
    symbols: list[int] = Field(default_factory=list)  # 100 cells, row-major
    delta: int = 0
    balance: int = 0
    outcome: Outcome = Outcome.LOSE
    winning_cells: list[int] = Field(default_factory=list)
    lines_won: int = 0
    total_multiplier: float = 0.0
