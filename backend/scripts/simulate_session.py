#!/usr/bin/env python3
"""
Headless session simulation.

Drives a machine frame by frame on a manual clock and records, per spin,
when each reel stopped and what the balance was. Useful for checking stop
timings and the debit ledger without a rendering surface.

Usage:
    python -m scripts.simulate_session --spins 20 --bet 100 --out out/session.csv
    python -m scripts.simulate_session --spins 5 --columns 3 --fps 30 --balance 250
"""
import argparse
import csv
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from reelspin.balance_store import InMemoryBalanceStore
from reelspin.config import settings
from reelspin.config_hash import get_config_hash
from reelspin.errors import GameError, InsufficientFunds
from reelspin.events import EventBus
from reelspin.logic.clock import ManualClock
from reelspin.logic.machine import SlotMachine


# Frames allowed per spin before the run is declared stuck
MAX_FRAMES_PER_SPIN_FACTOR = 4


class StopRecorder:
    """Event sink that timestamps reel_stopped events."""

    def __init__(self, clock: ManualClock):
        self._clock = clock
        self.stops: list[tuple[int, float]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        if event_name == "reel_stopped":
            self.stops.append((data["reel_index"], self._clock.now()))


@dataclass
class SpinRecord:
    """One simulated spin."""
    spin: int
    bet: int
    balance_after: int
    columns: int
    started_at: float
    stop_times: list[float] = field(default_factory=list)
    frames: int = 0

    @property
    def duration(self) -> float:
        return self.stop_times[-1] - self.started_at if self.stop_times else 0.0


@dataclass
class SimulationStats:
    """Totals accumulated during simulation."""
    spins: int = 0
    total_debited: int = 0
    start_balance: int = 0
    end_balance: int = 0
    rejected_insufficient_funds: bool = False
    records: list[SpinRecord] = field(default_factory=list)


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def run_simulation(
    spins: int,
    bet: int,
    columns: int,
    rows: int,
    fps: int,
    balance: int,
    verbose: bool = False,
) -> SimulationStats:
    """
    Run spins back to back, ticking at fps until each session closes.

    Stops early when the wallet can no longer cover the bet.
    """
    clock = ManualClock()
    recorder = StopRecorder(clock)
    machine = SlotMachine.from_settings(
        store=InMemoryBalanceStore(balance),
        events=EventBus(recorder),
        clock=clock,
    )
    machine.set_columns(columns)
    machine.set_rows(rows)
    machine.set_bet(bet)

    frame = 1.0 / fps
    max_frames = int(
        MAX_FRAMES_PER_SPIN_FACTOR * machine.config.spin_duration_seconds * fps
    ) + fps
    stats = SimulationStats(start_balance=machine.wallet.get_balance())
    machine.tick()

    for i in range(spins):
        recorder.stops.clear()
        try:
            session = machine.spin()
        except InsufficientFunds as e:
            if verbose:
                print(f"spin {i + 1}: {e.message}")
            stats.rejected_insufficient_funds = True
            break
        if session is None:
            raise RuntimeError("previous spin still active")

        record = SpinRecord(
            spin=i + 1,
            bet=session.bet_amount_charged,
            balance_after=machine.wallet.get_balance(),
            columns=machine.controller.columns,
            started_at=session.started_at,
        )
        while machine.controller.active or not all(
            reel.stopped for reel in machine.controller.reels
        ):
            if record.frames >= max_frames:
                raise RuntimeError(f"spin {record.spin} did not settle in {max_frames} frames")
            clock.advance(frame)
            machine.tick()
            record.frames += 1

        record.stop_times = [t for _, t in sorted(recorder.stops)]
        stats.records.append(record)
        stats.spins += 1
        stats.total_debited += record.bet
        if verbose:
            print(
                f"spin {record.spin}: balance={record.balance_after} "
                f"duration={record.duration:.3f}s frames={record.frames}"
            )

    stats.end_balance = machine.wallet.get_balance()
    return stats


def generate_csv(stats: SimulationStats, output_path: str, fps: int) -> None:
    """Write one row per spin."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    config_hash = get_config_hash()
    timestamp = get_timestamp_iso()

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "spin",
            "bet",
            "balance_after",
            "columns",
            "started_at",
            "stop_times",
            "duration",
            "frames",
            "fps",
            "config_hash",
            "timestamp",
        ])
        for record in stats.records:
            writer.writerow([
                record.spin,
                record.bet,
                record.balance_after,
                record.columns,
                f"{record.started_at:.6f}",
                ";".join(f"{t:.6f}" for t in record.stop_times),
                f"{record.duration:.6f}",
                record.frames,
                fps,
                config_hash,
                timestamp,
            ])


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Headless reel session simulation")
    parser.add_argument("--spins", type=int, default=10, help="Number of spins")
    parser.add_argument(
        "--bet",
        type=int,
        default=settings.available_amounts[0],
        help=f"Bet per spin, one of {settings.available_amounts}",
    )
    parser.add_argument("--columns", type=int, default=settings.default_columns)
    parser.add_argument("--rows", type=int, default=settings.default_rows)
    parser.add_argument("--fps", type=int, default=settings.frame_rate)
    parser.add_argument(
        "--balance", type=int, default=settings.default_balance, help="Starting balance"
    )
    parser.add_argument("--out", default=None, help="Output CSV path")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.fps <= 0:
        parser.error("--fps must be positive")

    try:
        stats = run_simulation(
            spins=args.spins,
            bet=args.bet,
            columns=args.columns,
            rows=args.rows,
            fps=args.fps,
            balance=args.balance,
            verbose=args.verbose,
        )
    except GameError as e:
        parser.error(f"{e.code.value}: {e.message}")

    if args.out:
        generate_csv(stats, args.out, args.fps)
        print(f"Wrote {len(stats.records)} spins to {args.out}")

    print("\nSummary:")
    print(f"  Spins: {stats.spins}")
    print(f"  Start balance: {stats.start_balance}")
    print(f"  Total debited: {stats.total_debited}")
    print(f"  End balance: {stats.end_balance}")
    if stats.rejected_insufficient_funds:
        print("  Stopped early: insufficient funds")

    if stats.start_balance - stats.total_debited != stats.end_balance:
        print("ASSERTION FAILED: balance ledger does not add up")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
