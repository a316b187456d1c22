"""
Error classification for signal scoring, resolution and simulation.

Data quality errors describe bad or missing inputs, system failures describe
invalid configuration or state, and recovery errors describe conditions the
caller can simply retry later.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    UnknownStrategyError,
    StateTransitionError,
)
from .recovery import (
    RecoverableError,
    CooldownActiveError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "UnknownStrategyError",
    "StateTransitionError",
    # Recovery Categories
    "RecoverableError",
    "CooldownActiveError",
]
