"""3-reel engine: weighted outcome bands with synthesized symbol layouts."""
from dataclasses import dataclass
from itertools import permutations

from slotspin.logic.models import (
    SYMBOL_COUNT,
    Outcome,
    OutcomeBand,
    ReelSpinResult,
)
from slotspin.logic.payout import effective_bet, settle_balance
from slotspin.logic.rng import ProductionRNG, RNGBase


REELS = 3


@dataclass(frozen=True)
class BandRule:
    """One row of the reel paytable."""

    band: OutcomeBand
    upper: int  # exclusive cumulative threshold, percent
    payout_x: int  # signed bet multiple credited as delta
    outcome: Outcome


# Expected delta per unit bet: 0.02*12 + 0.10*2 + 0.20*1 - 0.68*1 = -0.04
BAND_TABLE: tuple[BandRule, ...] = (
    BandRule(OutcomeBand.JACKPOT, 2, 12, Outcome.WIN_JACKPOT),
    BandRule(OutcomeBand.BIG_WIN, 12, 2, Outcome.WIN),
    BandRule(OutcomeBand.SMALL_WIN, 32, 1, Outcome.WIN_SMALL),
    BandRule(OutcomeBand.LOSE, 100, -1, Outcome.LOSE),
)

ALL_DIFFERENT_LAYOUTS: tuple[tuple[int, ...], ...] = tuple(
    permutations(range(SYMBOL_COUNT))
)


def select_band(roll: float) -> BandRule:
    """
    Select the band for a percent roll in [0, 100).

    Rolls at or past the last threshold fall into the last band.
    """
    for rule in BAND_TABLE:
        if roll < rule.upper:
            return rule
    return BAND_TABLE[-1]


def expected_delta_per_bet() -> float:
    """Theoretical mean delta per unit bet over the band table."""
    lower = 0
    total = 0.0
    for rule in BAND_TABLE:
        total += (rule.upper - lower) / 100 * rule.payout_x
        lower = rule.upper
    return total


class ReelEngine:
    """
    Three-reel engine.

    One percent roll picks the band, then the symbols are built to match it:
    - JACKPOT: three identical symbols
    - BIG_WIN / SMALL_WIN: exactly two matching symbols
    - LOSE: a permutation of all three symbols
    """

    def __init__(self, rng: RNGBase | None = None):
        self.rng = rng or ProductionRNG()

    def spin(self, balance: int, bet: int) -> ReelSpinResult:
        bet = effective_bet(bet)
        rule = select_band(self.rng.random() * 100)

        if rule.band == OutcomeBand.JACKPOT:
            symbols = self.jackpot_layout()
        elif rule.band == OutcomeBand.LOSE:
            symbols = self.all_different_layout()
        else:
            symbols = self.two_match_layout()

        delta = bet * rule.payout_x
        return ReelSpinResult(
            symbols=symbols,
            delta=delta,
            balance=settle_balance(balance, delta),
            outcome=rule.outcome,
            band=rule.band,
        )

    def _random_symbol(self) -> int:
        return self.rng.randint(0, SYMBOL_COUNT - 1)

    def jackpot_layout(self) -> list[int]:
        symbol = self._random_symbol()
        return [symbol] * REELS

    def two_match_layout(self) -> list[int]:
        """Two matching symbols plus one different one at a random position."""
        matching = self._random_symbol()
        different = (matching + 1 + self.rng.randint(0, SYMBOL_COUNT - 2)) % SYMBOL_COUNT
        position = self.rng.randint(0, REELS - 1)

        symbols = [matching] * REELS
        symbols[position] = different
        return symbols

    def all_different_layout(self) -> list[int]:
        index = self.rng.randint(0, len(ALL_DIFFERENT_LAYOUTS) - 1)
        return list(ALL_DIFFERENT_LAYOUTS[index])
