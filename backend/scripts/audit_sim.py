#!/usr/bin/env python3
"""
Audit simulation script for the reel and grid engines.

Runs a seeded headless simulation and writes a one-row audit CSV.

Usage:
    python -m scripts.audit_sim --engine reel --rounds 100000 --seed AUDIT_2025 --out out/audit_reel.csv
    python -m scripts.audit_sim --engine grid --rounds 100000 --seed AUDIT_2025 --out out/audit_grid.csv
"""
import argparse
import csv
import hashlib
import subprocess
import sys
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from slotspin.config_hash import get_config_hash
from slotspin.logic.grid import GridEngine
from slotspin.logic.models import Outcome, OutcomeBand
from slotspin.logic.payout import effective_bet
from slotspin.logic.reel import ReelEngine, expected_delta_per_bet
from slotspin.logic.rng import SeededRNG


ENGINES = ("reel", "grid")


@dataclass
class SimulationStats:
    """Statistics accumulated during simulation."""
    engine: str = "reel"
    bet: int = 1
    rounds: int = 0
    total_wagered: int = 0
    total_delta: int = 0
    wins: int = 0
    lines_won: int = 0
    max_delta_x: float = 0.0
    outcome_counts: Counter = field(default_factory=Counter)
    band_counts: Counter = field(default_factory=Counter)

    @property
    def total_returned(self) -> int:
        return self.total_wagered + self.total_delta

    @property
    def rtp(self) -> float:
        """Return-to-player in percent."""
        return (self.total_returned / self.total_wagered * 100) if self.total_wagered > 0 else 0.0

    @property
    def mean_delta_x(self) -> float:
        """Mean delta per unit bet."""
        return (self.total_delta / self.total_wagered) if self.total_wagered > 0 else 0.0

    @property
    def hit_freq(self) -> float:
        return (self.wins / self.rounds * 100) if self.rounds > 0 else 0.0

    def outcome_rate(self, outcome: Outcome) -> float:
        return self.outcome_counts[outcome.value] / self.rounds if self.rounds > 0 else 0.0

    def band_rate(self, band: OutcomeBand) -> float:
        return self.band_counts[band.value] / self.rounds if self.rounds > 0 else 0.0


def get_git_commit() -> str:
    """Get current git commit hash (short)."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).parent.parent.parent,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass
    return "unknown"


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically."""
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def check_cached_result(output_path: str, config_hash: str, rounds: int, seed: str, engine: str) -> bool:
    """
    Check if valid cached result exists.

    Returns True if cache is valid (same config_hash, rounds, seed, engine).
    """
    path = Path(output_path)
    if not path.exists():
        return False

    try:
        with open(path, "r") as f:
            reader = csv.DictReader(f)
            row = next(reader, None)
            if row is None:
                return False

            if row.get("config_hash") != config_hash:
                return False
            if int(row.get("rounds", 0)) != rounds:
                return False
            if row.get("seed") != seed:
                return False
            if row.get("engine") != engine:
                return False

            return True
    except (OSError, csv.Error, ValueError):
        return False


def run_simulation(
    engine: str,
    rounds: int,
    seed_str: str,
    bet: int = 1,
    verbose: bool = False,
) -> SimulationStats:
    """
    Run headless simulation.

    Args:
        engine: 'reel' or 'grid'
        rounds: Number of rounds to simulate
        seed_str: Seed string for reproducibility
        bet: Wager per round
        verbose: Print progress

    Returns:
        SimulationStats with aggregated results
    """
    if engine not in ENGINES:
        raise ValueError(f"Unknown engine: {engine}")

    # Non-positive bets play as the minimum bet, same as the engines
    bet = effective_bet(bet)

    rng = SeededRNG(seed=seed_to_int(seed_str))
    spinner = ReelEngine(rng=rng) if engine == "reel" else GridEngine(rng=rng)

    stats = SimulationStats(engine=engine, bet=bet)
    progress_interval = max(1, rounds // 100)

    for round_count in range(rounds):
        if verbose and round_count % progress_interval == 0:
            pct = (round_count / rounds) * 100
            print(f"\rProgress: {pct:.1f}%", end="", flush=True)

        # Balance does not affect delta; a zero balance keeps the totals clean
        result = spinner.spin(balance=0, bet=bet)

        stats.rounds += 1
        stats.total_wagered += bet
        stats.total_delta += result.delta
        stats.outcome_counts[result.outcome.value] += 1
        if result.outcome != Outcome.LOSE:
            stats.wins += 1

        if engine == "reel":
            stats.band_counts[result.band.value] += 1
        else:
            stats.lines_won += result.lines_won

        delta_x = result.delta / bet
        if delta_x > stats.max_delta_x:
            stats.max_delta_x = delta_x

    if verbose:
        print("\rProgress: 100.0%")

    return stats


def generate_csv(
    seed_str: str,
    stats: SimulationStats,
    output_path: str,
) -> None:
    """Write a one-row audit CSV."""
    row = {
        "timestamp": get_timestamp_iso(),
        "git_commit": get_git_commit(),
        "config_hash": get_config_hash(),
        "engine": stats.engine,
        "rounds": stats.rounds,
        "seed": seed_str,
        "bet": stats.bet,
        "rtp": f"{stats.rtp:.4f}",
        "hit_freq": f"{stats.hit_freq:.4f}",
        "mean_delta_x": f"{stats.mean_delta_x:.6f}",
        "max_delta_x": f"{stats.max_delta_x:.2f}",
        "avg_lines_won": f"{(stats.lines_won / stats.rounds) if stats.rounds else 0:.4f}",
    }
    for outcome in Outcome:
        row[f"rate_{outcome.value.lower()}"] = f"{stats.outcome_rate(outcome):.6f}"
    if stats.engine == "reel":
        for band in OutcomeBand:
            row[f"rate_band_{band.value.lower()}"] = f"{stats.band_rate(band):.6f}"

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        writer.writeheader()
        writer.writerow(row)

    print(f"CSV written to: {output_path}")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seeded RTP audit simulation")
    parser.add_argument(
        "--engine",
        choices=ENGINES,
        required=True,
        help="Engine to simulate: 'reel' or 'grid'",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        required=True,
        help="Number of rounds to simulate",
    )
    parser.add_argument(
        "--seed",
        type=str,
        required=True,
        help="Seed string for reproducibility",
    )
    parser.add_argument(
        "--bet",
        type=int,
        default=1,
        help="Wager per round",
    )
    parser.add_argument(
        "--out",
        type=str,
        required=True,
        help="Output CSV path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show progress",
    )
    parser.add_argument(
        "--skip-if-cached",
        action="store_true",
        help="Skip simulation if valid cached result exists",
    )

    args = parser.parse_args()

    config_hash = get_config_hash()
    print(f"Running simulation: engine={args.engine}, rounds={args.rounds}, seed={args.seed}")
    print(f"Config hash: {config_hash}")

    if args.skip_if_cached:
        if check_cached_result(args.out, config_hash, args.rounds, args.seed, args.engine):
            print(f"Using cached result: {args.out}")
            return 0

    stats = run_simulation(
        engine=args.engine,
        rounds=args.rounds,
        seed_str=args.seed,
        bet=args.bet,
        verbose=args.verbose,
    )
    generate_csv(seed_str=args.seed, stats=stats, output_path=args.out)

    print("\nSummary:")
    print(f"  Rounds: {stats.rounds}")
    print(f"  Total wagered: {stats.total_wagered}")
    print(f"  Total returned: {stats.total_returned}")
    print(f"  RTP: {stats.rtp:.4f}%")
    if args.engine == "reel":
        print(f"  Theoretical RTP: {(1 + expected_delta_per_bet()) * 100:.4f}%")
    print(f"  Hit frequency: {stats.hit_freq:.4f}%")
    print(f"  Max delta_x observed: {stats.max_delta_x:.2f}x")
    for outcome in Outcome:
        print(f"  {outcome.value}: {stats.outcome_rate(outcome) * 100:.4f}%")
    if args.engine == "reel":
        for band in OutcomeBand:
            print(f"  band {band.value}: {stats.band_rate(band) * 100:.4f}%")

    return 0


if __name__ == "__main__":
    sys.exit(main())
