"""
Weighted additive signal scoring.

Converts an indicator snapshot into a CALL/PUT direction, a confidence in
[50, 98] and up to four plain-text reasoning lines. Scoring is a pure
function of its arguments; the scorer holds no state between calls.
"""

from enum import Enum
from types import MappingProxyType
from typing import Optional, Union

import structlog

from ..config.defaults import ScoringParams
from ..config.knowledge import KnowledgeBase, get_default_knowledge_base
from ..errors import MissingDataError
from ..models.indicators import (
    BEARISH_STRUCTURES,
    BULLISH_STRUCTURES,
    Direction,
    IndicatorSnapshot,
    PatternType,
    RiskProfile,
    StructureType,
)
from ..models.signal import AnalysisResult, ReasoningKind, ReasoningLine

logger = structlog.get_logger(__name__)


def _key(value: Union[str, Enum]) -> str:
    return value.value if isinstance(value, Enum) else value


class SignalScorer:
    """Scores indicator snapshots against the knowledge base."""

    def __init__(
        self,
        knowledge: Optional[KnowledgeBase] = None,
        params: Optional[ScoringParams] = None
    ) -> None:
        self.knowledge = knowledge or get_default_knowledge_base()
        self.params = params or ScoringParams()
        self.logger = logger

    def score(
        self,
        snapshot: IndicatorSnapshot,
        strategy: Union[str, Enum],
        risk: Union[str, RiskProfile]
    ) -> AnalysisResult:
        """
        Score a snapshot for a strategy and risk profile.

        Args:
            snapshot: Indicator values to score
            strategy: Strategy identifier selecting the base win rate
            risk: Risk profile selecting base win rate and multiplier

        Returns:
            AnalysisResult carrying the snapshot it was computed from

        Raises:
            MissingDataError: snapshot is None
            UnknownStrategyError: strategy/risk combination has no base win rate
        """
        if snapshot is None:
            raise MissingDataError("Indicator snapshot is required for scoring",
                                   data_type="indicator_snapshot")

        strategy_key = _key(strategy)
        risk_key = _key(risk)
        base_win_rate = self.knowledge.base_win_rate(strategy_key, risk_key)

        call_score = 0.0
        put_score = 0.0
        reasoning: list[ReasoningLine] = []

        # 1. Candlestick pattern
        call_add, put_add, line = self._score_pattern(snapshot)
        call_score += call_add
        put_score += put_add
        if line:
            reasoning.append(line)

        # 2. Market structure
        call_add, put_add, line = self._score_structure(snapshot)
        call_score += call_add
        put_score += put_add
        if line:
            reasoning.append(line)

        # 3. Oscillator confluence
        call_add, put_add, line = self._score_oscillators(snapshot)
        call_score += call_add
        put_score += put_add
        reasoning.append(line)

        # 4. Market sentiment
        call_add, put_add, line = self._score_sentiment(snapshot)
        call_score += call_add
        put_score += put_add
        reasoning.append(line)

        # 5. Risk factors, judged against the prospective direction
        risk_factors = self._detect_risk_factors(snapshot, call_score, put_score)

        # 6. Ties go to PUT
        direction = Direction.CALL if call_score > put_score else Direction.PUT

        confidence = self._confidence(
            call_score, put_score, len(risk_factors), risk_key, base_win_rate
        )

        lines = tuple((reasoning + risk_factors)[:self.params.max_reasoning_lines])

        self.logger.debug(
            "Signal scored",
            strategy=strategy_key,
            risk_profile=risk_key,
            call_score=call_score,
            put_score=put_score,
            risk_factors=len(risk_factors),
            direction=direction.value,
            confidence=confidence
        )

        return AnalysisResult(
            direction=direction,
            confidence=confidence,
            reasoning=lines,
            indicators_at_signal=snapshot,
            risk_factors=tuple(risk_factors),
        )

    def _score_pattern(self, snapshot: IndicatorSnapshot) -> tuple[float, float, Optional[ReasoningLine]]:
        name = snapshot.candlestick_pattern.name
        info = self.knowledge.pattern(name)

        if info is None:
            self.logger.warning("Unknown candlestick pattern, no contribution", pattern=name)
            return 0.0, 0.0, None

        metadata = MappingProxyType({"pattern": info.name, "score": info.score})
        if info.type == PatternType.BULLISH:
            return info.score, 0.0, ReasoningLine(
                f"Bullish signal from '{info.name}' pattern.", ReasoningKind.PATTERN, metadata
            )
        if info.type == PatternType.BEARISH:
            return 0.0, info.score, ReasoningLine(
                f"Bearish signal from '{info.name}' pattern.", ReasoningKind.PATTERN, metadata
            )
        return 0.0, 0.0, None

    def _score_structure(self, snapshot: IndicatorSnapshot) -> tuple[float, float, Optional[ReasoningLine]]:
        structure = snapshot.market_structure
        p = self.params
        bonuses = {
            StructureType.SUPPORT.value: (p.support_bonus, 0),
            StructureType.RESISTANCE.value: (0, p.resistance_bonus),
            StructureType.BREAKOUT.value: (p.breakout_bonus, 0),
            StructureType.BREAKDOWN.value: (0, p.breakdown_bonus),
        }
        call_add, put_add = bonuses.get(structure.type, (0, 0))

        if structure.type == StructureType.NONE:
            return call_add, put_add, None

        return call_add, put_add, ReasoningLine(
            f"Price is interacting with a {structure.type} zone at {structure.level:.4f}.",
            ReasoningKind.STRUCTURE,
            MappingProxyType({"structure": structure.type, "level": structure.level})
        )

    def _score_oscillators(self, snapshot: IndicatorSnapshot) -> tuple[float, float, ReasoningLine]:
        p = self.params
        call_add = 0.0
        put_add = 0.0

        if snapshot.rsi < p.rsi_oversold:
            call_add += p.rsi_bonus
        if snapshot.rsi > p.rsi_overbought:
            put_add += p.rsi_bonus
        if snapshot.stoch < p.stoch_oversold:
            call_add += p.stoch_bonus
        if snapshot.stoch > p.stoch_overbought:
            put_add += p.stoch_bonus
        if snapshot.macd_histogram > 0:
            call_add += p.macd_bonus
        if snapshot.macd_histogram < 0:
            put_add += p.macd_bonus

        line = ReasoningLine(
            f"Indicators Analyzed: RSI({snapshot.rsi:.1f}), STOCH({snapshot.stoch:.1f}), "
            f"MACD Hist({snapshot.macd_histogram:.4f})",
            ReasoningKind.INDICATORS,
            MappingProxyType({
                "rsi": snapshot.rsi,
                "stoch": snapshot.stoch,
                "macd_histogram": snapshot.macd_histogram,
            })
        )
        return call_add, put_add, line

    def _score_sentiment(self, snapshot: IndicatorSnapshot) -> tuple[float, float, ReasoningLine]:
        sentiment = snapshot.market_sentiment
        bias = self.knowledge.sentiment(sentiment)

        if bias is None:
            self.logger.warning("Unknown market sentiment, no contribution", sentiment=sentiment)
            call_add, put_add = 0, 0
        else:
            call_add, put_add = bias.call_bias, bias.put_bias

        return call_add, put_add, ReasoningLine(
            f"Market sentiment is {sentiment}.",
            ReasoningKind.SENTIMENT,
            MappingProxyType({"sentiment": sentiment})
        )

    def _detect_risk_factors(
        self,
        snapshot: IndicatorSnapshot,
        call_score: float,
        put_score: float
    ) -> list[ReasoningLine]:
        risk_factors = []
        news = snapshot.news_event
        structure_type = snapshot.market_structure.type

        if news.is_high_impact:
            risk_factors.append(ReasoningLine(
                f"High-impact news event '{news.name}' approaching.",
                ReasoningKind.RISK,
                MappingProxyType({"risk": "news", "event": news.name})
            ))
        if call_score > put_score and structure_type in BEARISH_STRUCTURES:
            risk_factors.append(ReasoningLine(
                "Potential CALL signal is against a bearish market structure.",
                ReasoningKind.RISK,
                MappingProxyType({"risk": "against_structure", "structure": structure_type})
            ))
        if put_score > call_score and structure_type in BULLISH_STRUCTURES:
            risk_factors.append(ReasoningLine(
                "Potential PUT signal is against a bullish market structure.",
                ReasoningKind.RISK,
                MappingProxyType({"risk": "against_structure", "structure": structure_type})
            ))

        return risk_factors

    def _confidence(
        self,
        call_score: float,
        put_score: float,
        risk_factor_count: int,
        risk_profile: str,
        base_win_rate: float
    ) -> float:
        p = self.params
        total = call_score + put_score
        if total > 0:
            confidence = max(call_score, put_score) * 100 / total
        else:
            confidence = p.neutral_confidence

        confidence -= risk_factor_count * p.risk_factor_penalty

        multipliers = {
            RiskProfile.AGGRESSIVE.value: p.aggressive_multiplier,
            RiskProfile.CONSERVATIVE.value: p.conservative_multiplier,
            RiskProfile.BALANCED.value: p.balanced_multiplier,
        }
        confidence *= multipliers.get(risk_profile, p.balanced_multiplier)

        # Blend with the strategy's static base rate
        final_confidence = (confidence + base_win_rate * 100) / 2

        return max(p.min_confidence, min(final_confidence, p.max_confidence))


signal_scorer = SignalScorer()


def generate_signal(
    snapshot: IndicatorSnapshot,
    strategy_id: Union[str, Enum],
    risk_profile: Union[str, RiskProfile]
) -> AnalysisResult:
    """Score a snapshot with the default knowledge base and parameters."""
    return signal_scorer.score(snapshot, strategy_id, risk_profile)
