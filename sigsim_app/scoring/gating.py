"""
High-conviction (sure-shot) gate.

A caller-side policy over scorer output: a candidate passes only with
enough confidence and, by default, no detected risk factors. A
rejected candidate produces no signal at all.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import GatingParams
from ..logging.config import get_gating_logger, log_gate_decision
from ..models.signal import AnalysisResult

gating_logger = get_gating_logger(__name__)


@dataclass(frozen=True)
class GateDecision:
    """Outcome of a gate evaluation."""
    passed: bool
    reason: str


class SureShotGate:
    """Rejects scorer output that is not high-conviction."""

    gate_name = "sure_shot"

    def __init__(self, params: Optional[GatingParams] = None) -> None:
        self.params = params or GatingParams()
        self.gating_logger = gating_logger

    def evaluate(self, analysis: AnalysisResult, pair: str = "") -> GateDecision:
        """Evaluate a candidate and log the decision."""
        p = self.params
        risk_lines = [line.text for line in analysis.risk_factors]

        if analysis.confidence < p.min_confidence:
            decision = GateDecision(
                passed=False,
                reason=f"confidence {analysis.confidence:.2f} below {p.min_confidence:.2f}"
            )
        elif p.reject_on_risk_factors and risk_lines:
            decision = GateDecision(
                passed=False,
                reason=f"{len(risk_lines)} risk factor(s) detected"
            )
        else:
            decision = GateDecision(passed=True, reason="high-conviction confluence")

        log_gate_decision(
            self.gating_logger,
            gate_name=self.gate_name,
            passed=decision.passed,
            pair=pair,
            reason=decision.reason,
            context={
                "confidence": analysis.confidence,
                "direction": analysis.direction.value,
                "risk_factors": risk_lines,
            }
        )
        return decision
