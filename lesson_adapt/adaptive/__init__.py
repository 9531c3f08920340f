"""
Adaptive Lesson-Style Engine.

Deterministic, explainable choice of the next lesson format.

Components:
- normalize_signals: Prior-knowledge text -> keyword flags + knowledge label
- detect_calibration: Confidence vs. learning delta alignment
- StyleScorer: Weighted per-style scoring with deterministic tie-break
- compose: Decision title, audit trace, reasons and tutor narrative
- ExplainabilityEngine: Main orchestration layer
"""
from lesson_adapt.adaptive.models import (
    CalibrationState,
    ConfidenceBand,
    Decision,
    DeltaBand,
    ExplainInput,
    ExplainResult,
    KnowledgeLabel,
    LessonStyle,
    ScoringResult,
    SignalProfile,
)
from lesson_adapt.adaptive.policy import (
    DECISION_POLICY_VERSION,
    DEFAULT_POLICY,
    ScoringPolicy,
    SignalWeights,
)
from lesson_adapt.adaptive.signal_normalizer import normalize_signals
from lesson_adapt.adaptive.calibration import detect_calibration
from lesson_adapt.adaptive.style_scorer import StyleScorer, score_styles
from lesson_adapt.adaptive.explainer import extract_top_signals
from lesson_adapt.adaptive.engine import (
    ExplainabilityEngine,
    build_explainability,
    build_tutor_insight,
    compose,
)
from lesson_adapt.adaptive.probe import estimate_learning_delta, parse_probe_answers

__all__ = [
    # Main engine
    "ExplainabilityEngine",
    "build_explainability",
    "build_tutor_insight",
    "compose",
    # Components
    "normalize_signals",
    "detect_calibration",
    "StyleScorer",
    "score_styles",
    "extract_top_signals",
    # Upstream probe
    "estimate_learning_delta",
    "parse_probe_answers",
    # Policy
    "DECISION_POLICY_VERSION",
    "DEFAULT_POLICY",
    "ScoringPolicy",
    "SignalWeights",
    # Data models
    "ExplainInput",
    "ExplainResult",
    "SignalProfile",
    "CalibrationState",
    "ScoringResult",
    "Decision",
    # Enums
    "LessonStyle",
    "KnowledgeLabel",
    "ConfidenceBand",
    "DeltaBand",
]
