"""
Style Scorer.

Weighted signal scoring (deterministic, explainable). Each candidate style
starts at 0 and accumulates weighted evidence:
- delta: low delta -> guidance (visual/text), high delta -> practice (quiz)
- confidence: low -> guidance, high -> practice, mid -> steady text
- prior knowledge: beginner/unknown -> visual, advanced -> quiz, mixed -> text
- starting style: small bias toward the current format to reduce churn
- calibration: fixed nudges when confidence and delta disagree

The winner is the maximum score, ties broken by STYLE_PRIORITY.
"""
from __future__ import annotations

from typing import Mapping, Optional

from loguru import logger

from lesson_adapt.adaptive.calibration import (
    clamp,
    detect_calibration,
    effective_confidence,
    effective_delta,
)
from lesson_adapt.adaptive.models import (
    SIGNAL_NAMES,
    STYLE_PRIORITY,
    CalibrationState,
    ExplainInput,
    KnowledgeLabel,
    LessonStyle,
    ScoringResult,
    SignalProfile,
)
from lesson_adapt.adaptive.policy import DEFAULT_POLICY, ScoringPolicy
from lesson_adapt.adaptive.signal_normalizer import normalize_signals


def pick_winner(scores: Mapping[LessonStyle, float]) -> LessonStyle:
    """Highest score wins; a later style must be strictly greater to take over."""
    best = STYLE_PRIORITY[0]
    for style in STYLE_PRIORITY:
        if scores[style] > scores[best]:
            best = style
    return best


def rank_signals(influence: Mapping[str, float], limit: int = 2) -> tuple[str, ...]:
    """Top signal names by influence; equal magnitudes keep SIGNAL_NAMES order."""
    ordered = sorted(SIGNAL_NAMES, key=lambda name: -influence[name])
    return tuple(ordered[:limit])


class StyleScorer:
    """
    Score the three lesson styles for one learner.

    The policy is injected once and never mutated, so a single scorer can
    be shared freely across concurrent callers.
    """

    def __init__(self, policy: ScoringPolicy = DEFAULT_POLICY):
        self.policy = policy

    def confidence_norm(self, confidence) -> float:
        """Map confidence 1-5 onto 0-1."""
        low, high = self.policy.confidence_min, self.policy.confidence_max
        return (effective_confidence(confidence, self.policy) - low) / (high - low)

    def delta_norm(self, delta) -> float:
        """Map delta onto 0-1, saturating at the policy's saturation point."""
        return clamp(effective_delta(delta) / self.policy.delta_saturation, 0, 1)

    def delta_terms(self, delta) -> dict[LessonStyle, float]:
        """Weighted delta contribution per style."""
        w = self.policy.weights.delta
        d = self.delta_norm(delta)
        return {
            LessonStyle.VISUAL: w * (1 - d),
            LessonStyle.TEXT: w * (1 - abs(d - 0.5) * 2),  # peaks at mid deltas
            LessonStyle.QUIZ: w * d,
        }

    def confidence_terms(self, confidence) -> dict[LessonStyle, float]:
        """Weighted confidence contribution per style."""
        w = self.policy.weights.confidence
        c = self.confidence_norm(confidence)
        return {
            LessonStyle.VISUAL: w * (1 - c),
            LessonStyle.TEXT: w * (1 - abs(c - 0.5) * 2),
            LessonStyle.QUIZ: w * c,
        }

    @staticmethod
    def knowledge_target(label: KnowledgeLabel) -> LessonStyle:
        """Style that receives the full prior-knowledge weight."""
        if label == KnowledgeLabel.ADVANCED:
            return LessonStyle.QUIZ
        if label in (KnowledgeLabel.BEGINNER, KnowledgeLabel.UNKNOWN):
            return LessonStyle.VISUAL
        return LessonStyle.TEXT

    def influence(self, input: ExplainInput, signals: SignalProfile) -> dict[str, float]:
        """
        Influence magnitudes for display. Stable scalars, not probabilities.
        """
        weights = self.policy.weights
        d = self.delta_norm(input.delta)
        c = self.confidence_norm(input.confidence)
        knowledge_factor = (
            self.policy.mixed_knowledge_influence
            if signals.knowledge_label == KnowledgeLabel.MIXED
            else 1
        )
        return {
            "delta": weights.delta * (abs(d - 0.5) + 0.25),
            "confidence": weights.confidence * (abs(c - 0.5) + 0.25),
            "priorKnowledge": weights.prior_knowledge * knowledge_factor,
            "startingStyle": weights.starting_style,
        }

    def score(
        self,
        input: ExplainInput,
        calibration: Optional[CalibrationState] = None,
        signals: Optional[SignalProfile] = None,
    ) -> ScoringResult:
        """
        Score every style and pick the next one.

        Args:
            input: Learner signals (clamped on use)
            calibration: Precomputed calibration flags (derived if omitted)
            signals: Precomputed prior-knowledge profile (derived if omitted)

        Returns:
            ScoringResult with scores, winner and top-2 influential signals
        """
        if signals is None:
            signals = normalize_signals(input.prior_knowledge)
        if calibration is None:
            calibration = detect_calibration(input.confidence, input.delta, self.policy)

        scores = {style: 0.0 for style in LessonStyle}

        for terms in (self.delta_terms(input.delta), self.confidence_terms(input.confidence)):
            for style, value in terms.items():
                scores[style] += value

        scores[self.knowledge_target(signals.knowledge_label)] += self.policy.weights.prior_knowledge

        starting_style = LessonStyle.coerce(input.starting_style)
        scores[starting_style] += self.policy.weights.starting_style

        adjustment = None
        if calibration.overconfident:
            adjustment = self.policy.overconfident
        elif calibration.underconfident:
            adjustment = self.policy.underconfident
        if adjustment is not None:
            for style in LessonStyle:
                scores[style] += adjustment.for_style(style)

        influence = self.influence(input, signals)
        result = ScoringResult(
            scores=scores,
            next_style=pick_winner(scores),
            influence=influence,
            top_signals=rank_signals(influence),
        )
        logger.debug(
            "Scored styles {} -> {}",
            {style.value: round(value, 4) for style, value in scores.items()},
            result.next_style.value,
        )
        return result


def score_styles(
    input: ExplainInput,
    calibration: Optional[CalibrationState] = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> ScoringResult:
    """Functional shortcut around StyleScorer."""
    return StyleScorer(policy).score(input, calibration)
