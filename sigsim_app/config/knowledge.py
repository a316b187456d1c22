"""
Static knowledge-base tables consulted by the scorer and the simulator.

The tables are read-only lookups keyed by name: candlestick patterns,
sentiment biases, strategy base win rates, and the catalogues the market
simulator samples from.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional

from ..errors import UnknownStrategyError
from ..models.indicators import AmbientMarketCondition, NewsEvent


@dataclass(frozen=True)
class PatternInfo:
    """Candlestick pattern classification and score."""
    name: str
    type: str           # One of PatternType values
    score: int


@dataclass(frozen=True)
class SentimentBias:
    """Signed score adjustments for a market sentiment."""
    call_bias: int
    put_bias: int


@dataclass(frozen=True)
class StrategyDetail:
    """Display name and description of a strategy."""
    name: str
    description: str


CANDLESTICK_PATTERNS = {
    "None": PatternInfo("None", "NEUTRAL", 0),
    "Doji": PatternInfo("Doji", "NEUTRAL", 5),
    "Hammer": PatternInfo("Hammer", "BULLISH", 30),
    "Inverted Hammer": PatternInfo("Inverted Hammer", "BULLISH", 25),
    "Shooting Star": PatternInfo("Shooting Star", "BEARISH", 30),
    "Hanging Man": PatternInfo("Hanging Man", "BEARISH", 25),
    "Bullish Engulfing": PatternInfo("Bullish Engulfing", "BULLISH", 40),
    "Bearish Engulfing": PatternInfo("Bearish Engulfing", "BEARISH", 40),
    "Morning Star": PatternInfo("Morning Star", "BULLISH", 35),
    "Evening Star": PatternInfo("Evening Star", "BEARISH", 35),
    "Three White Soldiers": PatternInfo("Three White Soldiers", "BULLISH", 45),
    "Three Black Crows": PatternInfo("Three Black Crows", "BEARISH", 45),
}

MARKET_STRUCTURE_TYPES = {
    "None": "No clear structure",
    "Support": "Key support level",
    "Resistance": "Key resistance level",
    "Breakout": "Breakout of resistance",
    "Breakdown": "Breakdown of support",
}

NEWS_EVENTS = {
    "None": NewsEvent("None", "Low"),
    "CPI Report": NewsEvent("CPI Report (USA)", "High"),
    "FOMC Statement": NewsEvent("FOMC Statement", "High"),
    "Non-Farm Payroll": NewsEvent("Non-Farm Payroll (USA)", "High"),
    "Retail Sales": NewsEvent("Retail Sales", "Medium"),
    "Bank Holiday": NewsEvent("Bank Holiday", "Low"),
}

MARKET_SENTIMENTS = {
    "Extreme Fear": SentimentBias(call_bias=15, put_bias=-10),
    "Fear": SentimentBias(call_bias=10, put_bias=-5),
    "Neutral": SentimentBias(call_bias=0, put_bias=0),
    "Greed": SentimentBias(call_bias=-5, put_bias=10),
    "Extreme Greed": SentimentBias(call_bias=-10, put_bias=15),
}

STRATEGY_WIN_RATES = {
    "quantumfusion": {"conservative": 0.78, "balanced": 0.82, "aggressive": 0.85},
    "neuralmatrix": {"conservative": 0.76, "balanced": 0.80, "aggressive": 0.84},
    "vortex": {"conservative": 0.75, "balanced": 0.79, "aggressive": 0.82},
    "atomic": {"conservative": 0.77, "balanced": 0.81, "aggressive": 0.86},
    "sureshot": {"conservative": 0.80, "balanced": 0.85, "aggressive": 0.90},
}

STRATEGY_DETAILS = {
    "quantumfusion": StrategyDetail(
        "QUANTUM FUSION",
        "Multi-indicator confirmation strategy using RSI, MACD, and Bollinger Bands."
    ),
    "neuralmatrix": StrategyDetail(
        "NEURAL MATRIX",
        "Momentum-based strategy focusing on Stochastic and MACD crossovers."
    ),
    "vortex": StrategyDetail(
        "VORTEX PREDICTOR",
        "Trend-following system that prioritizes market direction over reversal patterns."
    ),
    "atomic": StrategyDetail(
        "ATOMIC SIGNALS",
        "High-precision reversal strategy based on extreme RSI and Stochastic levels."
    ),
    "sureshot": StrategyDetail(
        "SURE SHOT ELITE",
        "High-conviction signals requiring confluence of market structure, patterns, and indicators."
    ),
}

MARKET_CONDITIONS = (
    AmbientMarketCondition("Strong Trend", "Strong trending market detected", 1.05),
    AmbientMarketCondition("Ranging", "Ranging market conditions", 1.0),
    AmbientMarketCondition("High Volatility", "High volatility detected", 0.95),
    AmbientMarketCondition("Reversal Pattern", "Potential reversal pattern identified", 1.02),
)

PAIRS_BY_MARKET_TYPE = {
    "forex": (
        "EURUSD", "GBPUSD", "USDJPY", "AUDUSD", "USDCAD", "EURGBP", "EURJPY", "GBPJPY",
        "USDMXN", "USDCHF", "NZDUSD", "EURAUD", "EURNZD", "EURCAD", "GBPCHF",
    ),
    "crypto": ("BTCUSDT", "ETHUSDT", "SOLUSDT", "XRPUSDT", "DOGEUSDT", "ADAUSDT"),
    "commodities": ("XAUUSD", "XAGUSD", "USOIL", "UKOIL"),
    "indices": ("US30", "NAS100", "SPX500", "DE30", "UK100"),
}


@dataclass(frozen=True)
class KnowledgeBase:
    """Read-only lookup tables keyed by name."""

    patterns: Mapping[str, PatternInfo]
    sentiments: Mapping[str, SentimentBias]
    win_rates: Mapping[str, Mapping[str, float]]
    strategies: Mapping[str, StrategyDetail]
    structures: Mapping[str, str]
    news_events: Mapping[str, NewsEvent]
    conditions: tuple[AmbientMarketCondition, ...]
    pairs: Mapping[str, tuple[str, ...]]

    def pattern(self, name: str) -> Optional[PatternInfo]:
        """Pattern entry, or None for unknown names."""
        return self.patterns.get(name)

    def sentiment(self, name: str) -> Optional[SentimentBias]:
        """Sentiment entry, or None for unknown names."""
        return self.sentiments.get(name)

    def base_win_rate(self, strategy: str, risk_profile: str) -> float:
        """
        Static win rate in (0, 1) for a strategy and risk profile.

        Raises:
            UnknownStrategyError: the combination has no entry
        """
        rates = self.win_rates.get(strategy)
        if rates is None or risk_profile not in rates:
            raise UnknownStrategyError(
                f"No base win rate for strategy '{strategy}' with risk profile '{risk_profile}'",
                strategy=strategy,
                risk_profile=risk_profile
            )
        return rates[risk_profile]

    def pairs_for(self, market_type: str) -> tuple[str, ...]:
        return self.pairs.get(market_type, ())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KnowledgeBase":
        """Build from plain tables as found in knowledge.yaml."""
        return cls(
            patterns=MappingProxyType({
                name: PatternInfo(name=entry.get("name", name), type=entry["type"], score=entry["score"])
                for name, entry in data["patterns"].items()
            }),
            sentiments=MappingProxyType({
                name: SentimentBias(call_bias=entry["call_bias"], put_bias=entry["put_bias"])
                for name, entry in data["sentiments"].items()
            }),
            win_rates=MappingProxyType({
                strategy: MappingProxyType(dict(rates))
                for strategy, rates in data["win_rates"].items()
            }),
            strategies=MappingProxyType({
                key: StrategyDetail(name=entry["name"], description=entry["description"])
                for key, entry in data["strategies"].items()
            }),
            structures=MappingProxyType(dict(data["structures"])),
            news_events=MappingProxyType({
                key: NewsEvent(name=entry["name"], impact=entry["impact"])
                for key, entry in data["news_events"].items()
            }),
            conditions=tuple(
                AmbientMarketCondition(
                    name=entry["name"],
                    description=entry["description"],
                    factor=entry["factor"],
                )
                for entry in data["conditions"]
            ),
            pairs=MappingProxyType({
                market_type: tuple(pairs) for market_type, pairs in data["pairs"].items()
            }),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-table form, the shape knowledge.yaml overrides merge into."""
        return {
            "patterns": {
                name: {"name": info.name, "type": info.type, "score": info.score}
                for name, info in self.patterns.items()
            },
            "sentiments": {
                name: {"call_bias": bias.call_bias, "put_bias": bias.put_bias}
                for name, bias in self.sentiments.items()
            },
            "win_rates": {strategy: dict(rates) for strategy, rates in self.win_rates.items()},
            "strategies": {
                key: {"name": detail.name, "description": detail.description}
                for key, detail in self.strategies.items()
            },
            "structures": dict(self.structures),
            "news_events": {
                key: {"name": event.name, "impact": event.impact}
                for key, event in self.news_events.items()
            },
            "conditions": [
                {"name": c.name, "description": c.description, "factor": c.factor}
                for c in self.conditions
            ],
            "pairs": {market_type: list(pairs) for market_type, pairs in self.pairs.items()},
        }


def get_default_knowledge_base() -> KnowledgeBase:
    """Get the built-in knowledge base."""
    return KnowledgeBase(
        patterns=MappingProxyType(dict(CANDLESTICK_PATTERNS)),
        sentiments=MappingProxyType(dict(MARKET_SENTIMENTS)),
        win_rates=MappingProxyType({
            strategy: MappingProxyType(dict(rates))
            for strategy, rates in STRATEGY_WIN_RATES.items()
        }),
        strategies=MappingProxyType(dict(STRATEGY_DETAILS)),
        structures=MappingProxyType(dict(MARKET_STRUCTURE_TYPES)),
        news_events=MappingProxyType(dict(NEWS_EVENTS)),
        conditions=MARKET_CONDITIONS,
        pairs=MappingProxyType(dict(PAIRS_BY_MARKET_TYPE)),
    )
