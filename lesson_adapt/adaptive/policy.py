"""
Decision policy: the fixed weight/threshold table behind every decision.

The table is an immutable value created once per process (DEFAULT_POLICY)
and passed explicitly into the scorer and composer. Any change to a weight
or threshold must come with a new ``version`` string, which is stamped on
every decision trace for auditability.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from lesson_adapt.adaptive.models import LessonStyle

DECISION_POLICY_VERSION = "v1.3.0 — confidence-weighted"


@dataclass(frozen=True)
class SignalWeights:
    """Weights of the four named signals. Must sum to 1.0."""
    delta: float = 0.45
    confidence: float = 0.35
    prior_knowledge: float = 0.15
    starting_style: float = 0.05

    @property
    def total(self) -> float:
        return self.delta + self.confidence + self.prior_knowledge + self.starting_style


@dataclass(frozen=True)
class CalibrationAdjustment:
    """Additive per-style nudges applied when confidence and delta disagree."""
    visual: float
    text: float
    quiz: float

    def for_style(self, style: LessonStyle) -> float:
        return getattr(self, style.value)


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Versioned scoring configuration.

    Attributes:
        version: Audit identifier shown in the decision trace
        weights: Signal weights
        confidence_min/max: Clamp bounds for self-reported confidence
        low_confidence_max: Confidence at or below this is "low"
        high_confidence_min: Confidence at or above this is "high"
        small_delta_limit: Delta below this is "small"
        moderate_delta_limit: Delta below this (and not small) is "moderate"
        delta_saturation: Delta at which the delta signal stops growing
        mixed_knowledge_influence: Influence factor for a mixed knowledge label
        overconfident: Adjustment for high confidence + small delta
        underconfident: Adjustment for low confidence + large delta
    """
    version: str = DECISION_POLICY_VERSION
    weights: SignalWeights = field(default_factory=SignalWeights)

    confidence_min: int = 1
    confidence_max: int = 5
    low_confidence_max: int = 2
    high_confidence_min: int = 4

    small_delta_limit: float = 20
    moderate_delta_limit: float = 40
    delta_saturation: float = 60

    mixed_knowledge_influence: float = 0.6

    # High confidence but low delta: move away from quiz toward explanation.
    overconfident: CalibrationAdjustment = field(
        default_factory=lambda: CalibrationAdjustment(visual=0.03, text=0.05, quiz=-0.08)
    )
    # Low confidence but high delta: encourage earlier practice.
    underconfident: CalibrationAdjustment = field(
        default_factory=lambda: CalibrationAdjustment(visual=-0.03, text=-0.04, quiz=0.07)
    )


DEFAULT_POLICY = ScoringPolicy()
