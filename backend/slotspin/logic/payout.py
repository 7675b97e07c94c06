"""Payout helpers shared by both engines.

Every function here is total over Python integers: bets are coerced, balances
are clamped, nothing raises.
"""
from slotspin.logic.models import Outcome


MIN_BET = 1

# Grid multipliers are carried in tenths of a bet so sums stay exact
MULTIPLIER_SCALE = 10

# Grid outcome thresholds (total multiplier, in tenths)
GRID_JACKPOT_TENTHS = 100  # 10.0x
GRID_WIN_TENTHS = 20  # 2.0x


def effective_bet(bet: int) -> int:
    """Non-positive bets are played as the minimum bet."""
    return max(bet, MIN_BET)


def settle_balance(balance: int, delta: int) -> int:
    """Apply delta and clamp at zero."""
    return max(balance + delta, 0)


def grid_delta(bet: int, total_tenths: int) -> int:
    """
    Net balance change for a grid spin.

    The bet is always forfeited; floor(bet * multiplier) is credited back,
    so 1.0x is break-even and anything below it is a net loss.
    """
    winnings = bet * total_tenths // MULTIPLIER_SCALE
    return winnings - bet


def classify_grid_outcome(lines_won: int, total_tenths: int) -> Outcome:
    """Map a grid scan to its outcome label."""
    if lines_won == 0:
        return Outcome.LOSE
    if total_tenths >= GRID_JACKPOT_TENTHS:
        return Outcome.WIN_JACKPOT
    if total_tenths >= GRID_WIN_TENTHS:
        return Outcome.WIN
    return Outcome.WIN_SMALL


def credit(balance: int, amount: int) -> int:
    """Top up a balance; the result is never negative."""
    return settle_balance(balance, amount)
