"""
Centralized logging configuration for the SigSim signal engine.

Every module logs through structlog. Signal audit events (gate decisions
and outcome resolutions) go through the helpers at the bottom of this
module so they carry the same field names in console and JSON output.
"""
import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

import structlog
from structlog.types import EventDict, FilteringBoundLogger, Processor, WrappedLogger


def enum_values(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Render Direction, SignalResult and other enums by value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def build_processors(
    include_timestamp: bool = True,
    include_caller: bool = False,
    format_json: bool = False,
    extra_processors: Optional[list[Processor]] = None
) -> list[Processor]:
    """
    Assemble the structlog processor chain.

    The renderer is always last; extra processors run just before it.
    """
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        enum_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    processors.extend(extra_processors or [])

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    return processors


def configure_logging(
    level: Union[str, int] = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list[Processor]] = None
) -> None:
    """
    Configure structlog and the stdlib root logger for the engine.

    Args:
        level: Level name (DEBUG, INFO, ...) or logging constant
        format_json: Emit one JSON object per line instead of console output
        include_timestamp: Add an ISO timestamp to every event
        include_caller: Add filename and line number
        extra_processors: Processors inserted before the renderer
    """
    log_level = getattr(logging, level.upper()) if isinstance(level, str) else level

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=build_processors(
            include_timestamp=include_timestamp,
            include_caller=include_caller,
            format_json=format_json,
            extra_processors=extra_processors,
        ),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def get_subsystem_logger(name: str, subsystem: str) -> FilteringBoundLogger:
    """Get a logger whose events are tagged as audit records of a subsystem."""
    return get_logger(name).bind(subsystem=subsystem, audit_trail=True)


def get_gating_logger(name: str) -> FilteringBoundLogger:
    return get_subsystem_logger(name, "gating")


def get_resolution_logger(name: str) -> FilteringBoundLogger:
    return get_subsystem_logger(name, "resolution")


def _audit(
    logger: FilteringBoundLogger,
    context: Optional[dict[str, Any]],
    **fields: Any
) -> FilteringBoundLogger:
    bound_logger = logger.bind(**fields)
    if context:
        bound_logger = bound_logger.bind(context=context)
    return bound_logger


def log_gate_decision(
    logger: FilteringBoundLogger,
    gate_name: str,
    passed: bool,
    pair: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a sure-shot style gate decision.

    Passing candidates log at info, rejected ones at warning.

    Args:
        logger: Gating logger
        gate_name: Name of the gate
        passed: Whether the candidate passed
        pair: Trading pair the candidate signal was scored for
        reason: Why the gate decided as it did
        context: Candidate details (confidence, direction, risk factors)
    """
    bound_logger = _audit(
        logger,
        context,
        gate_name=gate_name,
        gate_result="PASS" if passed else "FAIL",
        pair=pair,
        reason=reason,
    )

    if passed:
        bound_logger.info("Gate passed")
    else:
        bound_logger.warning("Gate failed")


def log_signal_resolution(
    logger: FilteringBoundLogger,
    signal_id: int,
    from_state: str,
    to_state: str,
    win_probability: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a signal settling from PENDING to its outcome.

    Args:
        logger: Resolution logger
        signal_id: ID of the settled signal
        from_state: Result before settlement
        to_state: Settled result
        win_probability: Probability the draw was compared against
        context: Signal details (pair, direction, confidence, condition)
    """
    _audit(
        logger,
        context,
        signal_id=signal_id,
        from_state=from_state,
        to_state=to_state,
        win_probability=win_probability,
    ).info("Signal resolution")
