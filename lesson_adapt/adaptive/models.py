"""
Data models for the lesson-style adaptation engine.

Everything here is created fresh per call and never persisted:
- ExplainInput: the learner signals handed over by the UI layer
- SignalProfile: normalized prior-knowledge signals
- CalibrationState: confidence vs. learning-delta alignment
- ScoringResult: per-style scores plus the influence ranking
- Decision / ExplainResult: what the UI renders
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LessonStyle(str, Enum):
    """Lesson delivery format the engine chooses between."""
    VISUAL = "visual"
    TEXT = "text"
    QUIZ = "quiz"

    @classmethod
    def coerce(cls, value: Any, default: "LessonStyle | None" = None) -> "LessonStyle":
        """Parse a style name leniently, falling back to ``default`` (text)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.TEXT


class KnowledgeLabel(str, Enum):
    """Coarse prior-knowledge classification."""
    UNKNOWN = "unknown"      # Empty response
    BEGINNER = "beginner"
    ADVANCED = "advanced"
    MIXED = "mixed"          # Both or neither keyword family


class ConfidenceBand(str, Enum):
    LOW = "low"              # <= 2
    MEDIUM = "medium"        # == 3
    HIGH = "high"            # >= 4


class DeltaBand(str, Enum):
    SMALL = "small"          # < 20
    MODERATE = "moderate"    # < 40
    LARGE = "large"          # >= 40


# Deterministic tie-break: earlier wins on equal scores.
STYLE_PRIORITY: tuple[LessonStyle, ...] = (
    LessonStyle.TEXT,
    LessonStyle.VISUAL,
    LessonStyle.QUIZ,
)

# Named weighted contributions, in the order used to break influence ties.
SIGNAL_NAMES: tuple[str, ...] = ("delta", "confidence", "priorKnowledge", "startingStyle")


@dataclass(frozen=True)
class ExplainInput:
    """
    Learner signals for one decision.

    Values are taken as supplied; confidence is clamped to 1-5 and delta
    floored at 0 by every consumer.
    """
    topic: str
    prior_knowledge: str
    confidence: int
    delta: float
    starting_style: LessonStyle = LessonStyle.TEXT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExplainInput":
        """Build from the camelCase record the UI layer sends."""
        return cls(
            topic=data.get("topic") or "",
            prior_knowledge=data.get("priorKnowledge") or "",
            confidence=data.get("confidence"),
            delta=data.get("delta"),
            starting_style=LessonStyle.coerce(data.get("startingStyle")),
        )


@dataclass(frozen=True)
class SignalProfile:
    """Signals extracted from the free-text prior-knowledge answer."""
    prior_knowledge: str
    is_empty: bool
    mentions_advanced: bool = False
    mentions_beginner: bool = False
    mentions_examples: bool = False
    mentions_visual: bool = False
    knowledge_label: KnowledgeLabel = KnowledgeLabel.UNKNOWN


@dataclass(frozen=True)
class CalibrationState:
    """Alignment between self-reported confidence and observed delta."""
    confidence_band: ConfidenceBand
    delta_band: DeltaBand
    overconfident: bool = False
    underconfident: bool = False

    @property
    def is_aligned(self) -> bool:
        return not (self.overconfident or self.underconfident)

    def to_dict(self) -> dict:
        return {
            "confidenceBand": self.confidence_band.value,
            "deltaBand": self.delta_band.value,
            "overconfident": self.overconfident,
            "underconfident": self.underconfident,
        }


@dataclass(frozen=True)
class ScoringResult:
    """
    Output of the style scorer.

    Attributes:
        scores: Accumulated score per style (only relative order matters)
        next_style: Winning style after tie-break
        influence: Presentation magnitude per named signal (not a probability)
        top_signals: The two most influential signal names
    """
    scores: dict[LessonStyle, float]
    next_style: LessonStyle
    influence: dict[str, float] = field(default_factory=dict)
    top_signals: tuple[str, ...] = ()


@dataclass(frozen=True)
class Decision:
    next_style: LessonStyle
    title: str
    decision_trace: str
    top_signals: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExplainResult:
    """
    Output record consumed by the rendering layer.

    ``to_dict`` yields the camelCase contract: decision, nextStyle, reasons,
    decisionTrace and tutorInsight, plus audit details.
    """
    decision: Decision
    reasons: tuple[str, ...]
    tutor_insight: str
    scores: dict[LessonStyle, float]
    calibration: CalibrationState
    signals: SignalProfile

    @property
    def next_style(self) -> LessonStyle:
        return self.decision.next_style

    def explainability(self) -> dict:
        """The decision/reasons/trace part of the contract."""
        return {
            "decision": self.decision.title,
            "nextStyle": self.decision.next_style.value,
            "reasons": list(self.reasons),
            "decisionTrace": self.decision.decision_trace,
        }

    def to_dict(self) -> dict:
        payload = self.explainability()
        payload["tutorInsight"] = self.tutor_insight
        payload["topSignals"] = list(self.decision.top_signals)
        payload["scores"] = {style.value: score for style, score in self.scores.items()}
        payload["calibration"] = self.calibration.to_dict()
        payload["knowledgeLabel"] = self.signals.knowledge_label.value
        return payload
