#!/usr/bin/env python3
"""Run a simulated signal session on a virtual clock and print a summary."""

import argparse
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sigsim_app.engine import SignalSimulationEngine
from sigsim_app.logging.config import configure_logging


class VirtualClock:
    """Clock advanced manually so a session runs instantly."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def main():
    parser = argparse.ArgumentParser(description="Simulate a signal session")
    parser.add_argument("--minutes", type=int, default=30, help="Session length in minutes")
    parser.add_argument("--strategy", default="quantumfusion")
    parser.add_argument("--risk", default="balanced")
    parser.add_argument("--market", default="forex")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config-dir", default=None)
    parser.add_argument("--json", action="store_true", help="Print signal history as JSON")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    configure_logging(level=args.log_level)

    clock = VirtualClock(datetime.now(timezone.utc))
    engine = SignalSimulationEngine(config_dir=args.config_dir, clock=clock, seed=args.seed)
    engine.set_strategy(args.strategy)
    engine.set_risk_profile(args.risk)
    engine.set_market_type(args.market)

    engine.start_auto()
    for _ in range(args.minutes * 60):
        clock.advance(1)
        engine.tick()
    engine.stop_auto()

    # Let the last signals settle
    clock.advance(engine.config.simulation.resolution_delay_seconds)
    engine.tick()
    engine.shutdown()

    if args.json:
        print(engine.history.to_json(indent=True).decode())
        return

    stats = engine.stats
    print(f"Signals:        {len(engine.history)}")
    print(f"Wins / Losses:  {stats.wins} / {stats.losses}")
    print(f"Win rate:       {stats.win_rate}%")
    print(f"Avg confidence: {stats.average_confidence:.2f}%")
    print(f"Status:         {stats.system_status}")
    print("\nRecent activity:")
    for entry in engine.activity.entries[:10]:
        print(f"  {entry}")


if __name__ == "__main__":
    main()
