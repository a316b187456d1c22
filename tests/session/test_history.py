"""Tests for signal history and the activity feed."""

from datetime import timedelta
from unittest.mock import Mock

import orjson
import pytest

from sigsim_app.models.signal import SignalResult
from sigsim_app.session.history import ActivityLog, SignalHistory


class TestSignalHistory:

    def test_newest_first(self, make_signal):
        history = SignalHistory()
        history.add(make_signal(signal_id=1))
        history.add(make_signal(signal_id=2))

        assert [s.id for s in history] == [2, 1]
        assert len(history) == 2
        assert history.get(1).id == 1
        assert history.get(3) is None

    def test_duplicate_id_rejected(self, make_signal):
        history = SignalHistory()
        history.add(make_signal(signal_id=1))
        with pytest.raises(ValueError):
            history.add(make_signal(signal_id=1))

    def test_pending(self, make_signal):
        history = SignalHistory()
        settled = make_signal(signal_id=1)
        history.add(settled)
        history.add(make_signal(signal_id=2))
        settled.settle(SignalResult.WIN)

        assert [s.id for s in history.pending()] == [2]

    def test_to_json(self, make_signal):
        history = SignalHistory()
        history.add(make_signal(signal_id=7, confidence=88.5))

        records = orjson.loads(history.to_json())
        assert records[0]["id"] == 7
        assert records[0]["confidence"] == 88.5
        assert records[0]["result"] == "PENDING"
        assert records[0]["indicatorsAtSignal"]["rsi"] == 50.0

    def test_to_json_indent(self, make_signal):
        history = SignalHistory()
        history.add(make_signal())
        assert b"\n  " in history.to_json(indent=True)
        assert orjson.loads(history.to_json(indent=True)) == history.to_dicts()


class TestActivityLog:

    def test_entry_format(self, fixed_time):
        log = ActivityLog(clock=lambda: fixed_time)
        entry = log.add("Signal engine initialized")

        assert entry == "[12:00:30] Signal engine initialized"
        assert log.entries == [entry]

    def test_newest_first_and_bounded(self, fixed_time):
        ticks = iter(fixed_time + timedelta(seconds=i) for i in range(60))
        log = ActivityLog(max_entries=50, clock=lambda: next(ticks))

        for i in range(60):
            log.add(f"event {i}")

        assert len(log) == 50
        assert log.entries[0].endswith("event 59")
        assert log.entries[-1].endswith("event 10")

    def test_emits_log_event(self, fixed_time):
        log = ActivityLog(clock=lambda: fixed_time)
        log.logger = Mock()

        log.add("Trade Result: WIN on EURUSD", signal_id=3)

        log.logger.info.assert_called_once_with("Trade Result: WIN on EURUSD", signal_id=3)

    def test_default_clock(self):
        entry = ActivityLog().add("tick")
        assert entry[0] == "[" and entry[9:] == "] tick"
