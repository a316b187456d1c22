#!/usr/bin/env python3
"""
Basic Usage Example - SigSim Signal Engine

Demonstrates:
- Scoring a hand-built indicator snapshot
- Resolving the resulting signal against an ambient condition
- Running a short engine session with a sure-shot attempt

Run: python examples/basic_usage.py
"""

from datetime import datetime, timedelta, timezone

from sigsim_app.config.knowledge import MARKET_CONDITIONS
from sigsim_app.engine import SignalSimulationEngine
from sigsim_app.errors import CooldownActiveError
from sigsim_app.models.indicators import IndicatorSnapshot
from sigsim_app.models.signal import Signal
from sigsim_app.resolution.resolver import compute_win_probability, resolve_signal
from sigsim_app.scoring.scorer import generate_signal


def score_single_snapshot() -> None:
    snapshot = IndicatorSnapshot.from_dict({
        "rsi": 25,
        "stoch": 15,
        "macdHistogram": 0.0005,
        "candlestickPattern": {"name": "Bullish Engulfing"},
        "marketStructure": {"type": "Support", "level": 1.085},
        "marketSentiment": "Greed",
        "newsEvent": {"name": "None", "impact": "Low"},
    })

    result = generate_signal(snapshot, "quantumfusion", "balanced")
    print(f"Direction:  {result.direction.value}")
    print(f"Confidence: {result.confidence:.2f}%")
    for line in result.reasoning_text:
        print(f"  - {line}")

    signal = Signal.from_analysis(
        result, id=1, time="12:01:00", pair="EURUSD", strategy="QUANTUMFUSION", expiry="M1"
    )
    condition = MARKET_CONDITIONS[1]
    print(f"Win probability under '{condition.name}': "
          f"{compute_win_probability(signal, condition):.3f}")
    print(f"Outcome: {resolve_signal(signal, condition).value}")


def run_session() -> None:
    now = [datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)]
    engine = SignalSimulationEngine(clock=lambda: now[0], seed=7)

    for _ in range(5):
        now[0] += timedelta(seconds=3)
        engine.tick()
        try:
            signal = engine.generate_signal(sure_shot=True)
        except CooldownActiveError:
            continue
        print("Sure shot:", signal if signal else "conditions not met")

    now[0] += timedelta(seconds=61)
    engine.tick()
    print(f"Win rate {engine.stats.win_rate}%, status {engine.stats.system_status}")
    for entry in engine.activity.entries:
        print(entry)


if __name__ == "__main__":
    score_single_snapshot()
    run_session()
