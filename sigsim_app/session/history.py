"""Signal history and activity feed for a session."""

from collections import deque
from typing import Any, Iterator, Optional

import orjson
import structlog

from ..models.signal import Signal
from ..utils.time import Clock, format_clock_time, utc_now

logger = structlog.get_logger(__name__)


class SignalHistory:
    """Newest-first record of emitted signals."""

    def __init__(self) -> None:
        self._signals: list[Signal] = []
        self._by_id: dict[int, Signal] = {}

    def add(self, signal: Signal) -> None:
        if signal.id in self._by_id:
            raise ValueError(f"Signal {signal.id} already recorded")
        self._signals.insert(0, signal)
        self._by_id[signal.id] = signal

    def get(self, signal_id: int) -> Optional[Signal]:
        return self._by_id.get(signal_id)

    def pending(self) -> list[Signal]:
        return [s for s in self._signals if s.is_pending]

    def __len__(self) -> int:
        return len(self._signals)

    def __iter__(self) -> Iterator[Signal]:
        return iter(self._signals)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [signal.to_dict() for signal in self._signals]

    def to_json(self, indent: bool = False) -> bytes:
        """Serialize the history, newest first."""
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dicts(), option=option)


class ActivityLog:
    """Bounded newest-first feed of timestamped activity messages."""

    def __init__(self, max_entries: int = 50, clock: Optional[Clock] = None) -> None:
        self.clock = clock or utc_now
        self._entries: deque[str] = deque(maxlen=max_entries)
        self.logger = logger

    def add(self, message: str, **context: Any) -> str:
        """Record a message; it is also emitted as a structured log event."""
        entry = f"[{format_clock_time(self.clock())}] {message}"
        self._entries.appendleft(entry)
        self.logger.info(message, **context)
        return entry

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
