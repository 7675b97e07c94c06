"""Row run scanning for the grid engine."""
from dataclasses import dataclass, field
from typing import Sequence

from slotspin.logic.payout import MULTIPLIER_SCALE


GRID_COLS = 10
MIN_RUN_LENGTH = 3

# Run length -> multiplier in tenths of a bet (3 -> 0.2x ... 10 -> 50x)
RUN_MULTIPLIER_TENTHS: dict[int, int] = {
    3: 2,
    4: 5,
    5: 10,
    6: 20,
    7: 40,
    8: 80,
    9: 160,
    10: 500,
}
MAX_PAID_RUN = max(RUN_MULTIPLIER_TENTHS)


@dataclass(frozen=True)
class RunWin:
    """A maximal same-symbol run of qualifying length within one row."""

    row: int
    start: int  # grid index of the first cell
    length: int
    symbol: int
    multiplier_tenths: int

    @property
    def cells(self) -> range:
        return range(self.start, self.start + self.length)

    @property
    def multiplier(self) -> float:
        return self.multiplier_tenths / MULTIPLIER_SCALE


@dataclass
class LineScan:
    """Aggregate of all qualifying runs in a grid."""

    runs: list[RunWin] = field(default_factory=list)
    winning_cells: list[int] = field(default_factory=list)
    total_tenths: int = 0

    @property
    def lines_won(self) -> int:
        return len(self.runs)

    @property
    def total_multiplier(self) -> float:
        return self.total_tenths / MULTIPLIER_SCALE


def run_multiplier_tenths(length: int) -> int:
    """Multiplier for a run, 0 below the minimum length."""
    if length < MIN_RUN_LENGTH:
        return 0
    return RUN_MULTIPLIER_TENTHS[min(length, MAX_PAID_RUN)]


def find_runs(row: Sequence[int]) -> list[tuple[int, int]]:
    """
    Partition a row into maximal runs of equal adjacent symbols.

    Returns (offset, length) pairs covering every cell exactly once.
    """
    runs: list[tuple[int, int]] = []
    start = 0
    for i in range(1, len(row) + 1):
        if i == len(row) or row[i] != row[start]:
            runs.append((start, i - start))
            start = i
    return runs


def scan_rows(grid: Sequence[int], cols: int = GRID_COLS) -> LineScan:
    """
    Scan every row of a row-major grid for paying runs.

    Only rows are scanned; columns and diagonals never pay.
    """
    scan = LineScan()
    for row_idx, row_start in enumerate(range(0, len(grid), cols)):
        row = grid[row_start:row_start + cols]
        for offset, length in find_runs(row):
            tenths = run_multiplier_tenths(length)
            if not tenths:
                continue
            win = RunWin(
                row=row_idx,
                start=row_start + offset,
                length=length,
                symbol=row[offset],
                multiplier_tenths=tenths,
            )
            scan.runs.append(win)
            scan.winning_cells.extend(win.cells)
            scan.total_tenths += tenths
    return scan
