"""
Explainability Engine: the single synchronous call chain.

    ExplainInput
        -> normalize_signals      (prior-knowledge text -> SignalProfile)
        -> detect_calibration     (confidence vs. delta -> CalibrationState)
        -> StyleScorer.score      (weighted scores, winner, top signals)
        -> compose                (Decision, reasons, tutor insight)
        -> ExplainResult

Pure and deterministic: no I/O besides a debug log line, no shared mutable
state, safe to call concurrently.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from loguru import logger

from lesson_adapt.adaptive.calibration import detect_calibration
from lesson_adapt.adaptive.explainer import build_decision, build_reasons
from lesson_adapt.adaptive.models import (
    CalibrationState,
    Decision,
    ExplainInput,
    ExplainResult,
    ScoringResult,
    SignalProfile,
)
from lesson_adapt.adaptive.policy import DEFAULT_POLICY, ScoringPolicy
from lesson_adapt.adaptive.signal_normalizer import normalize_signals
from lesson_adapt.adaptive.style_scorer import StyleScorer
from lesson_adapt.adaptive.tutor_insight import compose_tutor_insight


@dataclass(frozen=True)
class Composition:
    decision: Decision
    reasons: tuple[str, ...]
    tutor_insight: str


def compose(
    input: ExplainInput,
    scoring: ScoringResult,
    calibration: CalibrationState,
    signals: SignalProfile,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Composition:
    """Render the decision, its reasons and the tutor narrative."""
    return Composition(
        decision=build_decision(input, scoring, calibration, signals, policy),
        reasons=build_reasons(input, scoring.next_style, calibration, signals, policy),
        tutor_insight=compose_tutor_insight(input, scoring.next_style, calibration, signals, policy),
    )


class ExplainabilityEngine:
    """
    Choose the next lesson style and explain why.

    Usage:
        engine = ExplainabilityEngine()
        result = engine.explain(ExplainInput(...))
        result.to_dict()
    """

    def __init__(self, policy: ScoringPolicy = DEFAULT_POLICY):
        self.policy = policy
        self._scorer = StyleScorer(policy)

    def explain(self, input: Union[ExplainInput, Mapping[str, Any]]) -> ExplainResult:
        """
        Run the full chain for one learner.

        Args:
            input: ExplainInput, or the camelCase record sent by the UI

        Returns:
            ExplainResult ready for rendering
        """
        if not isinstance(input, ExplainInput):
            input = ExplainInput.from_dict(dict(input))

        signals = normalize_signals(input.prior_knowledge)
        calibration = detect_calibration(input.confidence, input.delta, self.policy)
        scoring = self._scorer.score(input, calibration, signals)
        composition = compose(input, scoring, calibration, signals, self.policy)

        logger.debug("Decision trace: {}", composition.decision.decision_trace)

        return ExplainResult(
            decision=composition.decision,
            reasons=composition.reasons,
            tutor_insight=composition.tutor_insight,
            scores=dict(scoring.scores),
            calibration=calibration,
            signals=signals,
        )


_default_engine = ExplainabilityEngine()


def build_explainability(input: Union[ExplainInput, Mapping[str, Any]]) -> dict:
    """decision, nextStyle, reasons and decisionTrace for the UI."""
    return _default_engine.explain(input).explainability()


def build_tutor_insight(input: Union[ExplainInput, Mapping[str, Any]]) -> str:
    """Multi-line tutor narrative for the UI."""
    return _default_engine.explain(input).tutor_insight
