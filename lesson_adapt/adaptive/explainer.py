"""
Decision composer: title, audit trace and the ordered list of reasons.

The decision trace is a parsed contract. Renderers read the substring
after ``top=`` up to the next bullet, so field order and separators must
not change:

    policy=<version> • start=<style> → next=<style> • conf=<n>/5(<band>) •
    knowledge=<label> • delta=+<n>(<band>) • top=<sig1>,<sig2>
"""
from __future__ import annotations

from lesson_adapt.adaptive.calibration import effective_confidence, effective_delta
from lesson_adapt.adaptive.models import (
    CalibrationState,
    ConfidenceBand,
    Decision,
    ExplainInput,
    KnowledgeLabel,
    LessonStyle,
    ScoringResult,
    SignalProfile,
)
from lesson_adapt.adaptive.policy import DEFAULT_POLICY, ScoringPolicy
from lesson_adapt.adaptive.signal_normalizer import normalize_text

TRACE_SEPARATOR = " • "

DECISION_TITLES = {
    LessonStyle.VISUAL: "Increase guidance with visuals",
    LessonStyle.TEXT: "Keep a steady, structured explanation",
    LessonStyle.QUIZ: "Shift toward practice with quizzes",
}


def format_number(value) -> str:
    """Render a number the way learners see it: 50 not 50.0, 12.5 stays 12.5."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def decision_title(style: LessonStyle) -> str:
    return DECISION_TITLES[style]


def build_decision_trace(
    input: ExplainInput,
    scoring: ScoringResult,
    calibration: CalibrationState,
    signals: SignalProfile,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> str:
    """Single-line audit string; see module docstring for the format."""
    conf = effective_confidence(input.confidence, policy)
    delta = format_number(effective_delta(input.delta))
    start = LessonStyle.coerce(input.starting_style)
    fields = [
        f"policy={policy.version}",
        f"start={start.value} → next={scoring.next_style.value}",
        f"conf={conf}/5({calibration.confidence_band.value})",
        f"knowledge={signals.knowledge_label.value}",
        f"delta=+{delta}({calibration.delta_band.value})",
        f"top={','.join(scoring.top_signals)}",
    ]
    return TRACE_SEPARATOR.join(fields)


def extract_top_signals(decision_trace: str) -> list[str]:
    """
    Parse the most influential signal names back out of a trace.

    Returns an empty list when the trace carries no ``top=`` field.
    """
    if "top=" not in decision_trace:
        return []
    tail = decision_trace.split("top=", 1)[1].split("•", 1)[0].strip()
    return [name for name in tail.split(",") if name]


def build_reasons(
    input: ExplainInput,
    next_style: LessonStyle,
    calibration: CalibrationState,
    signals: SignalProfile,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> tuple[str, ...]:
    """
    Ordered reason clauses; each either fires or not. Yields 3-6 reasons.
    """
    topic = normalize_text(input.topic) or "the topic"
    conf = effective_confidence(input.confidence, policy)
    delta = format_number(effective_delta(input.delta))
    knowledge = signals.prior_knowledge

    reasons = [
        f"Based on your confidence level ({conf}/5, {calibration.confidence_band.value}), "
        f"the system adjusted guidance vs. practice."
    ]

    # Exactly one knowledge clause; "mixed" is the catch-all.
    if signals.knowledge_label == KnowledgeLabel.UNKNOWN:
        reasons.append(
            "Because your prior knowledge response was brief, the system assumed we should "
            "validate foundations before moving fast."
        )
    elif signals.knowledge_label == KnowledgeLabel.ADVANCED:
        reasons.append(
            f"Because your prior knowledge indicates familiarity (“{knowledge}”), "
            f"the system inferred you can handle less repetition."
        )
    elif signals.knowledge_label == KnowledgeLabel.BEGINNER:
        reasons.append(
            f"Because your prior knowledge indicates you’re early in the topic (“{knowledge}”), "
            f"the system inferred you’ll benefit from clearer scaffolding."
        )
    else:
        reasons.append(
            f"Because your prior knowledge indicates mixed familiarity (“{knowledge}”), "
            f"the system inferred we should balance explanation with checks."
        )

    reasons.append(
        f"The system inferred that your learning delta (+{delta}) is "
        f"{calibration.delta_band.value}, which determines how strongly it adapts the format."
    )

    if calibration.overconfident:
        reasons.append(
            "Confidence calibration: your confidence reads as high, but the learning delta is "
            "small. The system treated this as a signal to add explanation before more practice."
        )
    if calibration.underconfident:
        reasons.append(
            "Confidence calibration: your confidence reads as low, but the learning delta is "
            "large. The system treated this as a signal to introduce practice earlier than "
            "your self-report suggests."
        )

    if next_style == LessonStyle.VISUAL and signals.mentions_visual:
        reasons.append(
            f"You mentioned visual learning cues, so the system prioritized diagrams to reduce "
            f"cognitive load for {topic}."
        )

    if next_style == LessonStyle.QUIZ and (
        signals.mentions_examples or calibration.confidence_band == ConfidenceBand.HIGH
    ):
        reasons.append(
            "Because you signaled readiness for practice, the system moved toward "
            "application-focused questions rather than more explanation."
        )

    return tuple(reasons)


def build_decision(
    input: ExplainInput,
    scoring: ScoringResult,
    calibration: CalibrationState,
    signals: SignalProfile,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Decision:
    return Decision(
        next_style=scoring.next_style,
        title=decision_title(scoring.next_style),
        decision_trace=build_decision_trace(input, scoring, calibration, signals, policy),
        top_signals=scoring.top_signals,
    )
