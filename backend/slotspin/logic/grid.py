"""10x10 grid engine: uniform symbols, paid on row runs."""
from slotspin.logic.lines import GRID_COLS, scan_rows
from slotspin.logic.models import SYMBOL_COUNT, GridSpinResult
from slotspin.logic.payout import (
    classify_grid_outcome,
    effective_bet,
    grid_delta,
    settle_balance,
)
from slotspin.logic.rng import ProductionRNG, RNGBase


GRID_ROWS = 10
GRID_SIZE = GRID_ROWS * GRID_COLS


class GridEngine:
    """
    Grid engine.

    The grid itself is unweighted; all payout structure comes from the run
    multiplier table in lines.py.
    """

    def __init__(self, rng: RNGBase | None = None):
        self.rng = rng or ProductionRNG()

    def spin(self, balance: int, bet: int) -> GridSpinResult:
        bet = effective_bet(bet)
        grid = self.generate_grid()
        scan = scan_rows(grid, cols=GRID_COLS)

        delta = grid_delta(bet, scan.total_tenths)
        return GridSpinResult(
            symbols=grid,
            delta=delta,
            balance=settle_balance(balance, delta),
            outcome=classify_grid_outcome(scan.lines_won, scan.total_tenths),
            winning_cells=scan.winning_cells,
            lines_won=scan.lines_won,
            total_multiplier=scan.total_multiplier,
        )

    def generate_grid(self) -> list[int]:
        """Generate 100 independent uniform cells, row-major."""
        return [self.rng.randint(0, SYMBOL_COUNT - 1) for _ in range(GRID_SIZE)]
