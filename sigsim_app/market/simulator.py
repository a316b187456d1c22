"""Synthetic market state generator."""

import random
from typing import Optional

import structlog

from ..config.knowledge import KnowledgeBase, get_default_knowledge_base
from ..models.indicators import (
    AmbientMarketCondition,
    CandlestickPattern,
    IndicatorSnapshot,
    MarketStructure,
    NewsEvent,
)

logger = structlog.get_logger(__name__)

# Sampling ranges for the synthetic oscillators
RSI_RANGE = (20.0, 80.0)
STOCH_RANGE = (10.0, 90.0)
MACD_RANGE = (-0.001, 0.001)
STRUCTURE_LEVEL_RANGE = (1.0850, 1.0950)


def initial_snapshot() -> IndicatorSnapshot:
    """Quiet market state shown before the first update."""
    return IndicatorSnapshot(
        rsi=55.0,
        stoch=65.0,
        macd_histogram=0.0001,
        candlestick_pattern=CandlestickPattern(name="None"),
        market_structure=MarketStructure(type="None", level=0.0),
        market_sentiment="Neutral",
        news_event=NewsEvent(name="None", impact="Low"),
    )


class MarketSimulator:
    """Produces random snapshots drawn from the knowledge-base catalogues."""

    def __init__(
        self,
        knowledge: Optional[KnowledgeBase] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None
    ) -> None:
        self.knowledge = knowledge or get_default_knowledge_base()
        self.rng = rng or random.Random(seed)
        self.logger = logger

        self.current_snapshot = initial_snapshot()
        self.current_condition = self.knowledge.conditions[0]
        self.update_count = 0

    def _uniform(self, bounds: tuple[float, float]) -> float:
        low, high = bounds
        return low + self.rng.random() * (high - low)

    def next_snapshot(self) -> IndicatorSnapshot:
        """Draw a fresh snapshot without changing the current state."""
        pattern = self.rng.choice(list(self.knowledge.patterns))
        structure = self.rng.choice(list(self.knowledge.structures))
        news_key = self.rng.choice(list(self.knowledge.news_events))
        sentiment = self.rng.choice(list(self.knowledge.sentiments))

        return IndicatorSnapshot(
            rsi=self._uniform(RSI_RANGE),
            stoch=self._uniform(STOCH_RANGE),
            macd_histogram=self._uniform(MACD_RANGE),
            candlestick_pattern=CandlestickPattern(name=pattern),
            market_structure=MarketStructure(
                type=structure,
                level=self._uniform(STRUCTURE_LEVEL_RANGE),
            ),
            market_sentiment=sentiment,
            news_event=self.knowledge.news_events[news_key],
        )

    def next_condition(self) -> AmbientMarketCondition:
        """Draw an ambient condition without changing the current state."""
        return self.rng.choice(self.knowledge.conditions)

    def tick(self) -> IndicatorSnapshot:
        """Replace the current condition and snapshot with fresh draws."""
        self.current_condition = self.next_condition()
        self.current_snapshot = self.next_snapshot()
        self.update_count += 1

        self.logger.debug(
            "Market state updated",
            update=self.update_count,
            condition=self.current_condition.name,
            pattern=self.current_snapshot.candlestick_pattern.name,
            structure=self.current_snapshot.market_structure.type,
            sentiment=self.current_snapshot.market_sentiment,
            news=self.current_snapshot.news_event.name
        )
        return self.current_snapshot
