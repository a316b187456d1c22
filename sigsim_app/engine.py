"""
Main simulation engine coordinator.

Orchestrates one signal session: synthetic market updates, signal scoring
and sure-shot gating, deferred outcome resolution, auto mode, and the
session history, statistics and activity feed.
"""

import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Union

import structlog

from .config.defaults import DefaultConfig
from .config.knowledge import KnowledgeBase
from .config.loader import ConfigLoader
from .errors import CooldownActiveError, MissingDataError, UnknownStrategyError
from .market.simulator import MarketSimulator
from .models.indicators import AmbientMarketCondition, IndicatorSnapshot, RiskProfile
from .models.signal import Signal
from .resolution.resolver import OutcomeResolver
from .scoring.gating import SureShotGate
from .scoring.scorer import SignalScorer
from .session.history import ActivityLog, SignalHistory
from .session.stats import SessionStats
from .utils.time import (
    Clock,
    epoch_millis,
    format_clock_time,
    next_candle_time,
    time_elapsed_seconds,
    utc_now,
)

logger = structlog.get_logger(__name__)


class SignalSimulationEngine:
    """
    Coordinator for a single simulation session.

    Time only advances through the injected clock; call tick() to let the
    market update, due signals resolve and auto mode fire.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        config: Optional[DefaultConfig] = None,
        knowledge: Optional[KnowledgeBase] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None
    ) -> None:
        """Initialize the simulation engine."""
        self.logger = logger

        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.config = config or loader.build_config()
        self.knowledge = knowledge or loader.load_knowledge_base()
        self.clock = clock or utc_now
        rng = rng or random.Random(seed)

        # Components
        self.simulator = MarketSimulator(self.knowledge, rng=rng)
        self.scorer = SignalScorer(self.knowledge, self.config.scoring)
        self.resolver = OutcomeResolver(self.config.resolution, rng=rng)
        self.gate = SureShotGate(self.config.gating)

        # Session state
        self.history = SignalHistory()
        self.stats = SessionStats()
        self.activity = ActivityLog(self.config.simulation.activity_log_size, self.clock)

        # Selections
        self.strategy = "quantumfusion"
        self.market_type = "forex"
        self.pair = self.knowledge.pairs_for(self.market_type)[0]
        self.risk_profile = RiskProfile.AGGRESSIVE.value
        self.timeframe = 1

        self.auto_mode = False
        self._last_signal_at: Optional[datetime] = None
        self._last_market_update = self.clock()
        self._next_auto_at: Optional[datetime] = None
        self._due: dict[int, datetime] = {}
        self._last_id = 0

        self.activity.add("Signal engine initialized")

    # Selection -----------------------------------------------------------

    def set_strategy(self, strategy: str) -> None:
        if strategy not in self.knowledge.win_rates:
            raise UnknownStrategyError(f"Unknown strategy '{strategy}'", strategy=strategy)
        self.strategy = strategy

    def set_risk_profile(self, risk_profile: Union[str, RiskProfile]) -> None:
        self.risk_profile = RiskProfile(risk_profile).value

    def set_market_type(self, market_type: str) -> None:
        """Switch market type; the pair resets to its first pair."""
        pairs = self.knowledge.pairs_for(market_type)
        if not pairs:
            raise MissingDataError(f"No pairs for market type '{market_type}'", data_type="pairs")
        self.market_type = market_type
        self.pair = pairs[0]

    def set_pair(self, pair: str) -> None:
        if pair not in self.knowledge.pairs_for(self.market_type):
            raise MissingDataError(
                f"Pair '{pair}' is not offered for market type '{self.market_type}'",
                data_type="pairs"
            )
        self.pair = pair

    def set_timeframe(self, minutes: int) -> None:
        if minutes <= 0:
            raise ValueError("Timeframe must be a positive number of minutes")
        self.timeframe = minutes

    # Market state --------------------------------------------------------

    @property
    def current_snapshot(self) -> IndicatorSnapshot:
        return self.simulator.current_snapshot

    @property
    def current_condition(self) -> AmbientMarketCondition:
        return self.simulator.current_condition

    @property
    def pending_count(self) -> int:
        return len(self._due)

    # Signal lifecycle ----------------------------------------------------

    def generate_signal(self, sure_shot: bool = False) -> Optional[Signal]:
        """
        Score the current snapshot and emit a pending signal.

        Returns:
            The emitted signal, or None when the sure-shot gate rejects it

        Raises:
            CooldownActiveError: the previous signal was emitted too recently
            UnknownStrategyError: the selected strategy/risk pair is unknown
        """
        now = self.clock()
        cooldown = self.config.simulation.cooldown_seconds

        if self._last_signal_at is not None:
            elapsed = time_elapsed_seconds(self._last_signal_at, now)
            if elapsed < cooldown:
                self.activity.add("Signal generation blocked - in cooldown",
                                  retry_after_seconds=cooldown - elapsed)
                raise CooldownActiveError(
                    "Analysis cooldown active",
                    retry_after_seconds=cooldown - elapsed
                )

        gating = self.config.gating
        strategy = gating.strategy if sure_shot else self.strategy
        risk_profile = gating.risk_profile if sure_shot else self.risk_profile

        self.stats.record_started()
        self.activity.add(
            f"Generating {'Sure Shot ' if sure_shot else ''}signal for {self.pair}",
            strategy=strategy,
            risk_profile=risk_profile
        )

        try:
            analysis = self.scorer.score(self.simulator.current_snapshot, strategy, risk_profile)
        except Exception:
            self.stats.record_aborted()
            raise

        if sure_shot and not self.gate.evaluate(analysis, self.pair).passed:
            self.stats.record_aborted()
            self.activity.add("Sure Shot conditions not met. Signal aborted.", pair=self.pair)
            return None

        signal = Signal.from_analysis(
            analysis,
            id=self._next_id(now),
            time=format_clock_time(next_candle_time(now)),
            pair=self.pair,
            strategy=strategy.upper(),
            expiry=f"M{self.timeframe}",
        )

        self.history.add(signal)
        self.stats.record_emitted(signal.confidence)
        self._last_signal_at = now
        self._due[signal.id] = now + timedelta(
            seconds=self.config.simulation.resolution_delay_seconds
        )

        self.activity.add(
            f"{signal.direction.value} signal on {signal.pair} "
            f"(Confidence: {signal.confidence:.2f}%)",
            signal_id=signal.id,
            reasoning=[line.text for line in signal.reasoning]
        )
        return signal

    def _next_id(self, now: datetime) -> int:
        self._last_id = max(epoch_millis(now), self._last_id + 1)
        return self._last_id

    def resolve_due(self) -> list[Signal]:
        """Resolve every pending signal whose resolution time has passed."""
        now = self.clock()
        resolved = []

        for signal_id, due_at in sorted(self._due.items(), key=lambda item: item[1]):
            if due_at > now:
                break
            del self._due[signal_id]

            signal = self.history.get(signal_id)
            result = self.resolver.settle(signal, self.simulator.current_condition)
            self.stats.record_result(result)
            self.activity.add(
                f"Trade Result: {result.value} on {signal.pair} "
                f"(Confidence: {signal.confidence:.1f}%)",
                signal_id=signal.id
            )
            resolved.append(signal)

        return resolved

    def tick(self) -> list[Signal]:
        """
        Advance the session to the clock's current time.

        Returns:
            Signals resolved during this tick
        """
        now = self.clock()

        if time_elapsed_seconds(self._last_market_update, now) >= \
                self.config.simulation.market_update_seconds:
            self.simulator.tick()
            self._last_market_update = now

        resolved = self.resolve_due()

        if self.auto_mode and self._next_auto_at is not None and now >= self._next_auto_at:
            self._next_auto_at = now + timedelta(seconds=self.config.simulation.auto_interval_seconds)
            self._auto_generate()

        return resolved

    def _auto_generate(self) -> None:
        try:
            self.generate_signal()
        except CooldownActiveError as e:
            self.logger.debug("Auto generation skipped", retry_after_seconds=e.retry_after_seconds)

    def start_auto(self) -> None:
        """Engage auto mode; one signal is generated immediately."""
        if self.auto_mode:
            return
        self.auto_mode = True
        self.activity.add("Auto-Trading Protocol ENGAGED.")
        self._next_auto_at = self.clock() + timedelta(
            seconds=self.config.simulation.auto_interval_seconds
        )
        self._auto_generate()

    def stop_auto(self) -> None:
        if not self.auto_mode:
            return
        self.auto_mode = False
        self._next_auto_at = None
        self.activity.add("Auto-Trading Protocol DISENGAGED.")

    def shutdown(self) -> list[Signal]:
        """
        Stop auto mode and drop scheduled resolutions.

        Returns:
            Signals discarded while still PENDING
        """
        self.stop_auto()
        discarded = [self.history.get(signal_id) for signal_id in self._due]
        self._due.clear()

        self.logger.info("Simulation engine shut down", discarded_pending=len(discarded))
        return discarded
