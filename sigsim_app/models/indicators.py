"""
Indicator snapshot models.

A snapshot is a single immutable set of synthetic technical-indicator values
at one point in time. Scoring reads one snapshot; resolution reads the copy
frozen into the signal at scoring time.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import MalformedDataError, MissingDataError


class Direction(str, Enum):
    """Signal direction."""
    CALL = "CALL"
    PUT = "PUT"


class RiskProfile(str, Enum):
    """Trader risk profile selecting base win rate and confidence multiplier."""
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class PatternType(str, Enum):
    """Candlestick pattern classification."""
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class StructureType(str, Enum):
    """Market structure zone types."""
    NONE = "None"
    SUPPORT = "Support"
    RESISTANCE = "Resistance"
    BREAKOUT = "Breakout"
    BREAKDOWN = "Breakdown"


class NewsImpact(str, Enum):
    """Expected impact of a scheduled news event."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class MarketType(str, Enum):
    """Market categories offering tradable pairs."""
    FOREX = "forex"
    CRYPTO = "crypto"
    COMMODITIES = "commodities"
    INDICES = "indices"


# Structures a prospective signal direction is trading against
BEARISH_STRUCTURES = frozenset({StructureType.RESISTANCE.value, StructureType.BREAKDOWN.value})
BULLISH_STRUCTURES = frozenset({StructureType.SUPPORT.value, StructureType.BREAKOUT.value})


@dataclass(frozen=True)
class CandlestickPattern:
    """Detected candlestick pattern, keyed into the pattern knowledge base."""
    name: str


@dataclass(frozen=True)
class MarketStructure:
    """Structure zone the price is interacting with."""
    type: str           # One of StructureType values
    level: float        # Price level of the zone

    def __post_init__(self) -> None:
        # Store enum members by value
        if isinstance(self.type, Enum):
            object.__setattr__(self, "type", self.type.value)


@dataclass(frozen=True)
class NewsEvent:
    """Upcoming news event and its expected impact."""
    name: str
    impact: str         # One of NewsImpact values

    def __post_init__(self) -> None:
        if isinstance(self.impact, Enum):
            object.__setattr__(self, "impact", self.impact.value)

    @property
    def is_high_impact(self) -> bool:
        return self.impact == NewsImpact.HIGH


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Synthetic indicator values at one point in time."""
    rsi: float                              # Oscillator, [0, 100] by convention
    stoch: float                            # Stochastic, [0, 100] by convention
    macd_histogram: float                   # Signed, small magnitude
    candlestick_pattern: CandlestickPattern
    market_structure: MarketStructure
    market_sentiment: str                   # Key of the sentiment table
    news_event: NewsEvent

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the signal record format."""
        return {
            "rsi": self.rsi,
            "stoch": self.stoch,
            "macdHistogram": self.macd_histogram,
            "candlestickPattern": {"name": self.candlestick_pattern.name},
            "marketStructure": {
                "type": self.market_structure.type,
                "level": self.market_structure.level,
            },
            "marketSentiment": self.market_sentiment,
            "newsEvent": {
                "name": self.news_event.name,
                "impact": self.news_event.impact,
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IndicatorSnapshot":
        """
        Build a snapshot from a camelCase or snake_case mapping.

        Raises:
            MalformedDataError: data or one of its nested sections is not a mapping
            MissingDataError: a required field is absent
        """
        if not isinstance(data, Mapping):
            raise MalformedDataError(
                "Indicator snapshot must be a mapping",
                raw_data=data,
                expected_format="mapping"
            )

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            raise MissingDataError(
                f"Indicator snapshot is missing '{keys[0]}'",
                data_type="indicator_snapshot",
                context={"available_fields": sorted(data)}
            )

        def section(*keys: str) -> Mapping[str, Any]:
            value = pick(*keys)
            if not isinstance(value, Mapping):
                raise MalformedDataError(
                    f"Indicator snapshot field '{keys[0]}' must be a mapping",
                    raw_data=value,
                    expected_format="mapping"
                )
            return value

        pattern = section("candlestickPattern", "candlestick_pattern")
        structure = section("marketStructure", "market_structure")
        news = section("newsEvent", "news_event")

        try:
            return cls(
                rsi=float(pick("rsi")),
                stoch=float(pick("stoch")),
                macd_histogram=float(pick("macdHistogram", "macd_histogram")),
                candlestick_pattern=CandlestickPattern(name=str(pattern["name"])),
                market_structure=MarketStructure(
                    type=str(structure["type"]),
                    level=float(structure["level"]),
                ),
                market_sentiment=str(pick("marketSentiment", "market_sentiment")),
                news_event=NewsEvent(name=str(news["name"]), impact=str(news["impact"])),
            )
        except KeyError as e:
            raise MissingDataError(
                f"Indicator snapshot section is missing {e}",
                data_type="indicator_snapshot"
            ) from e
        except (TypeError, ValueError) as e:
            raise MalformedDataError(
                f"Indicator snapshot has a non-numeric value: {e}",
                raw_data=dict(data),
                expected_format="number"
            ) from e


@dataclass(frozen=True)
class AmbientMarketCondition:
    """Broad market favorability, sampled independently of any snapshot."""
    name: str
    description: str
    factor: float       # Win probability multiplier in (0, 1.1]
