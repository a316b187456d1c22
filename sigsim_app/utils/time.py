"""
Clock and candle-time helpers.

The engine never calls datetime.now() directly; it reads an injected clock
so that cooldowns, resolution delays and auto mode can be driven
deterministically.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default wall clock."""
    return datetime.now(timezone.utc)


def next_candle_time(now: datetime, timeframe_minutes: int = 1) -> datetime:
    """
    Start of the next candle after now.

    Args:
        now: Current time
        timeframe_minutes: Candle length in minutes

    Returns:
        now truncated to the minute, plus one timeframe
    """
    floored = now.replace(second=0, microsecond=0)
    return floored + timedelta(minutes=timeframe_minutes)


def format_clock_time(ts: datetime) -> str:
    """Format as a 24-hour HH:MM:SS string."""
    return ts.strftime("%H:%M:%S")


def epoch_millis(ts: datetime) -> int:
    """Milliseconds since the Unix epoch."""
    return int(ts.timestamp() * 1000)


def time_elapsed_seconds(start_time: datetime, end_time: Optional[datetime] = None) -> float:
    """
    Calculate elapsed time in seconds between two timestamps.

    Args:
        start_time: Start timestamp
        end_time: End timestamp, defaults to current wall-clock time

    Returns:
        Elapsed time in seconds
    """
    if end_time is None:
        end_time = utc_now()

    return (end_time - start_time).total_seconds()
