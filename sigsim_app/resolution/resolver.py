"""
Weighted random outcome resolution.

Resolution reads the signal's confidence and the snapshot frozen into it at
scoring time, never the live market state, together with the ambient market
condition current at resolution time.
"""

import random
from typing import Optional

import structlog

from ..config.defaults import ResolutionParams
from ..errors import MissingDataError
from ..logging.config import get_resolution_logger, log_signal_resolution
from ..models.indicators import (
    BEARISH_STRUCTURES,
    BULLISH_STRUCTURES,
    AmbientMarketCondition,
    Direction,
)
from ..models.signal import Signal, SignalResult

logger = structlog.get_logger(__name__)
resolution_logger = get_resolution_logger(__name__)


def compute_win_probability(
    signal: Signal,
    ambient_condition: AmbientMarketCondition,
    params: Optional[ResolutionParams] = None
) -> float:
    """
    Win probability for a signal under an ambient condition.

    The value is deliberately left unclamped: above 1 always wins, at or
    below 0 always loses.

    Raises:
        MissingDataError: the signal carries no frozen snapshot
    """
    params = params or ResolutionParams()
    indicators = signal.indicators_at_signal
    if indicators is None:
        raise MissingDataError(
            f"Signal {signal.id} has no indicator snapshot to resolve against",
            data_type="indicators_at_signal",
            context={"signal_id": signal.id}
        )

    win_probability = (signal.confidence / 100) * ambient_condition.factor

    structure_type = indicators.market_structure.type
    if signal.direction == Direction.CALL and structure_type in BEARISH_STRUCTURES:
        win_probability *= params.against_structure_factor
    if signal.direction == Direction.PUT and structure_type in BULLISH_STRUCTURES:
        win_probability *= params.against_structure_factor

    if indicators.news_event.is_high_impact:
        win_probability *= params.high_impact_news_factor

    return win_probability


class OutcomeResolver:
    """Draws WIN/LOSS outcomes for pending signals."""

    def __init__(
        self,
        params: Optional[ResolutionParams] = None,
        rng: Optional[random.Random] = None
    ) -> None:
        self.params = params or ResolutionParams()
        self.rng = rng or random.Random()
        self.logger = logger
        self.resolution_logger = resolution_logger

    def resolve(self, signal: Signal, ambient_condition: AmbientMarketCondition) -> SignalResult:
        """Draw an outcome for a signal without modifying it."""
        return self._draw(signal, ambient_condition)[0]

    def _draw(
        self,
        signal: Signal,
        ambient_condition: AmbientMarketCondition
    ) -> tuple[SignalResult, float]:
        win_probability = compute_win_probability(signal, ambient_condition, self.params)
        draw = self.rng.random()
        result = SignalResult.WIN if draw < win_probability else SignalResult.LOSS

        self.logger.debug(
            "Outcome drawn",
            signal_id=signal.id,
            win_probability=win_probability,
            draw=draw,
            result=result.value
        )
        return result, win_probability

    def settle(self, signal: Signal, ambient_condition: AmbientMarketCondition) -> SignalResult:
        """
        Resolve a pending signal and record its result.

        Raises:
            StateTransitionError: the signal was already settled
        """
        result, win_probability = self._draw(signal, ambient_condition)
        signal.settle(result)

        log_signal_resolution(
            self.resolution_logger,
            signal_id=signal.id,
            from_state=SignalResult.PENDING.value,
            to_state=result.value,
            win_probability=win_probability,
            context={
                "pair": signal.pair,
                "direction": signal.direction.value,
                "confidence": signal.confidence,
                "condition": ambient_condition.name,
            }
        )
        return result


outcome_resolver = OutcomeResolver()


def resolve_signal(signal: Signal, ambient_condition: AmbientMarketCondition) -> SignalResult:
    """Draw an outcome for a signal with the default resolver."""
    return outcome_resolver.resolve(signal, ambient_condition)
