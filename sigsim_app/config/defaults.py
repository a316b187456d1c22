"""Default configuration parameters for the signal engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringParams:
    """Weighted additive scoring parameters."""
    # Market structure bonuses
    support_bonus: int = 25                          # Added to call score
    resistance_bonus: int = 25                       # Added to put score
    breakout_bonus: int = 35                         # Added to call score
    breakdown_bonus: int = 35                        # Added to put score

    # Oscillator confluence
    rsi_oversold: float = 30.0                       # rsi below -> call
    rsi_overbought: float = 70.0                     # rsi above -> put
    rsi_bonus: int = 15
    stoch_oversold: float = 20.0                     # stoch below -> call
    stoch_overbought: float = 80.0                   # stoch above -> put
    stoch_bonus: int = 15
    macd_bonus: int = 10                             # Sign of histogram picks side

    # Confidence shaping
    neutral_confidence: float = 50.0                 # Used when both scores are zero
    risk_factor_penalty: float = 10.0                # Subtracted per risk factor
    aggressive_multiplier: float = 1.05
    balanced_multiplier: float = 1.0
    conservative_multiplier: float = 0.95
    min_confidence: float = 50.0
    max_confidence: float = 98.0

    # Output
    max_reasoning_lines: int = 4


@dataclass(frozen=True)
class ResolutionParams:
    """Outcome resolution penalties."""
    against_structure_factor: float = 0.4            # Trading against frozen structure
    high_impact_news_factor: float = 0.6             # High-impact news at signal time


@dataclass(frozen=True)
class GatingParams:
    """High-conviction (sure-shot) gate parameters."""
    min_confidence: float = 85.0
    reject_on_risk_factors: bool = True
    strategy: str = "sureshot"
    risk_profile: str = "aggressive"


@dataclass(frozen=True)
class SimulationParams:
    """Orchestration timing parameters."""
    market_update_seconds: float = 3.0               # Snapshot regeneration period
    resolution_delay_seconds: float = 60.0           # Signal -> outcome delay
    cooldown_seconds: float = 5.0                    # Min gap between emitted signals
    auto_interval_seconds: float = 61.0              # Auto mode generation period
    activity_log_size: int = 50


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    scoring: ScoringParams
    resolution: ResolutionParams
    gating: GatingParams
    simulation: SimulationParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        scoring=ScoringParams(),
        resolution=ResolutionParams(),
        gating=GatingParams(),
        simulation=SimulationParams(),
    )
