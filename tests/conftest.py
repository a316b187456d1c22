"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from sigsim_app.models.indicators import (
    CandlestickPattern,
    Direction,
    IndicatorSnapshot,
    MarketStructure,
    NewsEvent,
)
from sigsim_app.models.signal import Signal


_DEFAULT = object()


def build_snapshot(
    rsi: float = 50.0,
    stoch: float = 50.0,
    macd_histogram: float = 0.0,
    pattern: str = "None",
    structure: str = "None",
    level: float = 1.085,
    sentiment: str = "Neutral",
    news: str = "None",
    impact: str = "Low",
) -> IndicatorSnapshot:
    """Snapshot with quiet defaults: no pattern, no structure, no oscillator signal."""
    return IndicatorSnapshot(
        rsi=rsi,
        stoch=stoch,
        macd_histogram=macd_histogram,
        candlestick_pattern=CandlestickPattern(name=pattern),
        market_structure=MarketStructure(type=structure, level=level),
        market_sentiment=sentiment,
        news_event=NewsEvent(name=news, impact=impact),
    )


@pytest.fixture
def make_snapshot() -> Callable[..., IndicatorSnapshot]:
    return build_snapshot


@pytest.fixture
def neutral_snapshot() -> IndicatorSnapshot:
    """Snapshot where every scoring term contributes zero."""
    return build_snapshot()


@pytest.fixture
def bullish_snapshot() -> IndicatorSnapshot:
    """Bullish Engulfing at support with oversold oscillators and Greed sentiment."""
    return build_snapshot(
        rsi=25.0,
        stoch=15.0,
        macd_histogram=0.0005,
        pattern="Bullish Engulfing",
        structure="Support",
        level=1.085,
        sentiment="Greed",
    )


@pytest.fixture
def bullish_snapshot_dict() -> Dict[str, Any]:
    """Same snapshot as bullish_snapshot, in camelCase record form."""
    return {
        "rsi": 25,
        "stoch": 15,
        "macdHistogram": 0.0005,
        "candlestickPattern": {"name": "Bullish Engulfing"},
        "marketStructure": {"type": "Support", "level": 1.085},
        "marketSentiment": "Greed",
        "newsEvent": {"name": "None", "impact": "Low"},
    }


@pytest.fixture
def make_signal() -> Callable[..., Signal]:
    def _make(
        direction: Direction = Direction.CALL,
        confidence: float = 90.0,
        structure: str = "None",
        impact: str = "Low",
        snapshot: Any = _DEFAULT,
        signal_id: int = 1,
    ) -> Signal:
        if snapshot is _DEFAULT:
            snapshot = build_snapshot(structure=structure, impact=impact,
                                      news="CPI Report (USA)" if impact == "High" else "None")
        return Signal(
            id=signal_id,
            time="12:01:00",
            pair="EURUSD",
            strategy="QUANTUMFUSION",
            expiry="M1",
            direction=direction,
            confidence=confidence,
            indicators_at_signal=snapshot,
        )
    return _make


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 1, 1, 12, 0, 30, tzinfo=timezone.utc)
