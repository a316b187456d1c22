"""Running session statistics."""

import math
from dataclasses import dataclass

from ..models.signal import SignalResult

PEAK_PERFORMANCE = "PEAK PERFORMANCE"
STABLE = "STABLE"
UNDERPERFORMING = "UNDERPERFORMING"
ONLINE = "ONLINE"


@dataclass
class SessionStats:
    """Win/loss counters and derived session metrics."""
    wins: int = 0
    losses: int = 0
    win_streak: int = 0
    active_signals: int = 0
    emitted_signals: int = 0
    total_confidence: float = 0.0

    def record_started(self) -> None:
        """A generation attempt began; count it as active until it ends."""
        self.active_signals += 1

    def record_aborted(self) -> None:
        """A generation attempt ended without emitting a signal."""
        self.active_signals = max(0, self.active_signals - 1)

    def record_emitted(self, confidence: float) -> None:
        self.emitted_signals += 1
        self.total_confidence += confidence

    def record_result(self, result: SignalResult) -> None:
        """Count a settled outcome."""
        if result == SignalResult.WIN:
            self.wins += 1
            self.win_streak += 1
        elif result == SignalResult.LOSS:
            self.losses += 1
            self.win_streak = 0
        else:
            raise ValueError(f"Cannot record unsettled result {result!r}")
        self.active_signals = max(0, self.active_signals - 1)

    @property
    def resolved_signals(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> int:
        """Whole-number win percentage over resolved signals."""
        if self.resolved_signals == 0:
            return 0
        return math.floor(self.wins / self.resolved_signals * 100 + 0.5)

    @property
    def average_confidence(self) -> float:
        """Mean confidence of emitted signals."""
        if self.emitted_signals == 0:
            return 0.0
        return self.total_confidence / self.emitted_signals

    @property
    def system_status(self) -> str:
        win_rate = self.win_rate
        if win_rate >= 85:
            return PEAK_PERFORMANCE
        if win_rate >= 75:
            return STABLE
        if self.resolved_signals > 5 and win_rate < 60:
            return UNDERPERFORMING
        return ONLINE
