"""Tests for signal records."""

import pytest

from sigsim_app.errors import StateTransitionError
from sigsim_app.models.indicators import Direction
from sigsim_app.models.signal import ReasoningKind, ReasoningLine, Signal, SignalResult
from sigsim_app.scoring.scorer import generate_signal


class TestSignal:
    """Write-once fields and the result lifecycle."""

    def test_new_signal_is_pending(self, make_signal):
        signal = make_signal()
        assert signal.result == SignalResult.PENDING
        assert signal.is_pending is True

    def test_settle_once(self, make_signal):
        signal = make_signal()
        signal.settle(SignalResult.WIN)

        assert signal.result == SignalResult.WIN
        assert signal.is_pending is False

    def test_settle_twice_rejected(self, make_signal):
        signal = make_signal()
        signal.settle(SignalResult.LOSS)

        with pytest.raises(StateTransitionError) as exc_info:
            signal.settle(SignalResult.WIN)
        assert exc_info.value.current_state == "LOSS"
        assert signal.result == SignalResult.LOSS

    def test_settle_to_pending_rejected(self, make_signal):
        signal = make_signal()
        with pytest.raises(StateTransitionError):
            signal.settle(SignalResult.PENDING)
        assert signal.is_pending

    def test_settle_accepts_string(self, make_signal):
        signal = make_signal()
        signal.settle("WIN")
        assert signal.result == SignalResult.WIN

    @pytest.mark.parametrize("attribute", [
        "direction", "confidence", "indicators_at_signal", "result"
    ])
    def test_write_once_fields_are_read_only(self, make_signal, attribute):
        signal = make_signal()
        with pytest.raises(AttributeError):
            setattr(signal, attribute, None)

    def test_from_analysis(self, bullish_snapshot):
        analysis = generate_signal(bullish_snapshot, "quantumfusion", "balanced")
        signal = Signal.from_analysis(
            analysis, id=42, time="12:01:00", pair="EURUSD", strategy="QUANTUMFUSION", expiry="M1"
        )

        assert signal.direction == Direction.CALL
        assert signal.confidence == analysis.confidence
        assert signal.indicators_at_signal is bullish_snapshot
        assert len(signal.reasoning) == 4

    def test_to_dict(self, make_signal):
        data = make_signal(Direction.PUT, 77.5, structure="Resistance").to_dict()

        assert data["signal"] == "PUT"
        assert data["result"] == "PENDING"
        assert data["confidence"] == 77.5
        assert data["indicatorsAtSignal"]["marketStructure"]["type"] == "Resistance"

    def test_to_dict_without_snapshot(self, make_signal):
        assert make_signal(snapshot=None).to_dict()["indicatorsAtSignal"] is None


class TestReasoningLine:

    def test_str_is_text(self):
        line = ReasoningLine("Market sentiment is Fear.", ReasoningKind.SENTIMENT)
        assert str(line) == "Market sentiment is Fear."
        assert line.is_risk is False
        assert dict(line.metadata) == {}

    def test_risk_kind(self):
        assert ReasoningLine("x", ReasoningKind.RISK).is_risk is True
