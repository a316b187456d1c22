"""
Signal data models.

An AnalysisResult is what the scorer returns. A Signal is the record the
engine emits from it: its direction, confidence and frozen snapshot are
write-once, and its result moves from PENDING to WIN or LOSS exactly once.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..errors import StateTransitionError
from .indicators import Direction, IndicatorSnapshot


class SignalResult(str, Enum):
    """Signal outcome lifecycle."""
    PENDING = "PENDING"
    WIN = "WIN"
    LOSS = "LOSS"


class ReasoningKind(str, Enum):
    """Which scoring step produced a reasoning line."""
    PATTERN = "pattern"
    STRUCTURE = "structure"
    INDICATORS = "indicators"
    SENTIMENT = "sentiment"
    RISK = "risk"


@dataclass(frozen=True)
class ReasoningLine:
    """Plain-text explanation of one scoring step, with optional metadata."""
    text: str
    kind: ReasoningKind
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_risk(self) -> bool:
        return self.kind == ReasoningKind.RISK

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class AnalysisResult:
    """Scorer output for one snapshot."""
    direction: Direction
    confidence: float
    reasoning: tuple[ReasoningLine, ...]
    indicators_at_signal: IndicatorSnapshot
    risk_factors: tuple[ReasoningLine, ...] = ()         # Untruncated risk lines

    @property
    def reasoning_text(self) -> list[str]:
        return [line.text for line in self.reasoning]

    @property
    def has_risk_factors(self) -> bool:
        return bool(self.risk_factors)


class Signal:
    """
    Emitted trading signal awaiting or carrying its outcome.

    Identity and context fields (id, time, pair, strategy, expiry) are opaque
    to scoring and resolution. Direction, confidence and the frozen snapshot
    are set once at construction and exposed read-only.
    """

    def __init__(
        self,
        id: int,
        time: str,
        pair: str,
        strategy: str,
        expiry: str,
        direction: Direction,
        confidence: float,
        indicators_at_signal: Optional[IndicatorSnapshot],
        reasoning: tuple[ReasoningLine, ...] = (),
    ) -> None:
        self.id = id
        self.time = time
        self.pair = pair
        self.strategy = strategy
        self.expiry = expiry
        self.reasoning = tuple(reasoning)
        self._direction = Direction(direction)
        self._confidence = float(confidence)
        self._indicators_at_signal = indicators_at_signal
        self._result = SignalResult.PENDING
        self._lock = threading.Lock()

    @classmethod
    def from_analysis(
        cls,
        analysis: AnalysisResult,
        id: int,
        time: str,
        pair: str,
        strategy: str,
        expiry: str,
    ) -> "Signal":
        """Create a pending signal from a scorer result."""
        return cls(
            id=id,
            time=time,
            pair=pair,
            strategy=strategy,
            expiry=expiry,
            direction=analysis.direction,
            confidence=analysis.confidence,
            indicators_at_signal=analysis.indicators_at_signal,
            reasoning=analysis.reasoning,
        )

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def confidence(self) -> float:
        return self._confidence

    @property
    def indicators_at_signal(self) -> Optional[IndicatorSnapshot]:
        return self._indicators_at_signal

    @property
    def result(self) -> SignalResult:
        return self._result

    @property
    def is_pending(self) -> bool:
        return self._result == SignalResult.PENDING

    def settle(self, result: SignalResult) -> None:
        """
        Move the result from PENDING to WIN or LOSS.

        Raises:
            StateTransitionError: target is PENDING or the signal is already settled
        """
        result = SignalResult(result)
        if result == SignalResult.PENDING:
            raise StateTransitionError(
                "Signal cannot be settled back to PENDING",
                current_state=self._result.value,
                attempted_transition=result.value
            )

        with self._lock:
            if self._result != SignalResult.PENDING:
                raise StateTransitionError(
                    f"Signal {self.id} already settled as {self._result.value}",
                    current_state=self._result.value,
                    attempted_transition=result.value
                )
            self._result = result

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the signal record format."""
        return {
            "id": self.id,
            "time": self.time,
            "pair": self.pair,
            "strategy": self.strategy,
            "signal": self._direction.value,
            "expiry": self.expiry,
            "result": self._result.value,
            "confidence": self._confidence,
            "reasoning": [line.text for line in self.reasoning],
            "indicatorsAtSignal": (
                self._indicators_at_signal.to_dict()
                if self._indicators_at_signal is not None else None
            ),
        }

    def __repr__(self) -> str:
        return (
            f"Signal(id={self.id}, pair={self.pair!r}, direction={self._direction.value}, "
            f"confidence={self._confidence:.2f}, result={self._result.value})"
        )
