"""
Tutor Insight narrative.

A longer, friendlier rendering of the same decision, built from fixed
segments in a fixed order:

    opener -> profile -> knowledge -> confidence -> calibration ->
    adaptation -> plan lines -> nudge -> next-lesson preview

Every segment is a lookup keyed by one signal (delta band, knowledge tier,
exact confidence value, calibration state or chosen style), so the text is
a pure function of the input.
"""
from __future__ import annotations

from enum import Enum

from lesson_adapt.adaptive.calibration import clamp, effective_confidence, effective_delta
from lesson_adapt.adaptive.explainer import format_number
from lesson_adapt.adaptive.models import (
    CalibrationState,
    DeltaBand,
    ExplainInput,
    KnowledgeLabel,
    LessonStyle,
    SignalProfile,
)
from lesson_adapt.adaptive.policy import DEFAULT_POLICY, ScoringPolicy
from lesson_adapt.adaptive.signal_normalizer import normalize_text


class KnowledgeTier(str, Enum):
    """Learner-facing knowledge tier; the "mixed" label reads as intermediate."""
    UNKNOWN = "unknown"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


KNOWLEDGE_TIERS = {
    KnowledgeLabel.UNKNOWN: KnowledgeTier.UNKNOWN,
    KnowledgeLabel.BEGINNER: KnowledgeTier.BEGINNER,
    KnowledgeLabel.MIXED: KnowledgeTier.INTERMEDIATE,
    KnowledgeLabel.ADVANCED: KnowledgeTier.ADVANCED,
}

STYLE_LABELS = {
    LessonStyle.VISUAL: "visual explanations",
    LessonStyle.TEXT: "step-by-step text explanations",
    LessonStyle.QUIZ: "guided quizzes",
}

OPENERS = {
    DeltaBand.LARGE: "You made a strong jump on {topic}.",
    DeltaBand.MODERATE: "You’re building momentum on {topic}.",
    DeltaBand.SMALL: "You’re getting started on {topic}, and the signals are useful already.",
}

KNOWLEDGE_LINES = {
    KnowledgeTier.UNKNOWN: "Prior knowledge: I didn’t get much detail, so I’ll confirm the basics first.",
    KnowledgeTier.ADVANCED: (
        "Prior knowledge: you seem advanced (“{knowledge}”). "
        "I’ll skip definitions and focus on edge-cases + application."
    ),
    KnowledgeTier.BEGINNER: (
        "Prior knowledge: you seem beginner (“{knowledge}”). "
        "I’ll go step-by-step with simple examples."
    ),
    KnowledgeTier.INTERMEDIATE: (
        "Prior knowledge: you seem mixed (“{knowledge}”). "
        "I’ll keep it concise and use quick checks to locate gaps."
    ),
}

# Keyed by the exact confidence value, not the band.
CONFIDENCE_LINES = {
    1: "Confidence: {conf}/5 (very low). We’ll go slowly, with lots of worked examples and “why” explanations.",
    2: "Confidence: {conf}/5 (low). We’ll use smaller steps and frequent checks so you don’t get stuck.",
    3: "Confidence: {conf}/5 (medium). We’ll keep a steady pace with checkpoints in common confusion spots.",
    4: "Confidence: {conf}/5 (high). We’ll move faster and switch to practice sooner.",
    5: "Confidence: {conf}/5 (very high). Expect challenge questions and fewer hints.",
}

CALIBRATION_OVERCONFIDENT = (
    "Calibration note: your confidence is high, but the learning delta is small. "
    "I’ll slow the ramp and make the model explicit before adding more practice."
)
CALIBRATION_UNDERCONFIDENT = (
    "Calibration note: your confidence is low, but the learning delta is large. "
    "You’re performing stronger than you’re rating yourself—so we’ll introduce practice a bit earlier."
)
CALIBRATION_ALIGNED = "Calibration note: your confidence and learning delta appear aligned."

ADAPTATION_LINES = {
    LessonStyle.VISUAL: (
        "Because your learning delta was +{delta}, the system chose {label} "
        "to make the mental model click before you grind problems."
    ),
    LessonStyle.TEXT: (
        "Because your learning delta was +{delta}, the system chose {label} "
        "so you can build consistency without changing formats mid-stream."
    ),
    LessonStyle.QUIZ: (
        "Because your learning delta was +{delta}, the system chose {label}"
        "—that’s the fastest way to expose what’s solid vs. what needs review."
    ),
}

# (tier) -> (message when the tier's condition holds, message otherwise).
# Advanced checks for high confidence; every other tier checks for low.
PLAN_LINES = {
    KnowledgeTier.BEGINNER: (
        "Plan: start with 2–3 ultra-simple examples, then you do 1 guided example with hints.",
        "Plan: start with 1–2 simple examples, then you do 2 short practice checks.",
    ),
    KnowledgeTier.ADVANCED: (
        "Plan: jump straight to challenge problems and edge-cases; we’ll only revisit basics if a miss repeats.",
        "Plan: do 1 compact refresher, then shift quickly into practice and targeted fixes.",
    ),
    KnowledgeTier.INTERMEDIATE: (
        "Plan: do a quick refresher of the core model, then 2 small checks to rebuild confidence.",
        "Plan: do a quick recap, then practice with short checkpoints to find weak spots.",
    ),
    KnowledgeTier.UNKNOWN: (
        "Plan: I’ll confirm basics with a few quick questions, then we’ll build up slowly.",
        "Plan: I’ll start with a short baseline check, then adapt depth based on what you get right.",
    ),
}

MICRO_TASK_LOW = "Micro-task: after each step, answer “what does this mean?” in 1 sentence (no pressure on speed)."
MICRO_TASK_MEDIUM = "Micro-task: after each section, do 1 quick check question before moving on."
MICRO_TASK_HIGH = "Micro-task: do 3 rapid-fire checks; if you miss one, explain the mistake in 1 sentence and continue."

NUDGES = {
    LessonStyle.QUIZ: "Tip: if you miss a question, don’t push through—pause and explain the “why” in one sentence first.",
    LessonStyle.VISUAL: "Tip: as you watch the diagram, narrate each step out loud once. That’s where understanding becomes durable.",
    LessonStyle.TEXT: "Tip: after each section, write a 1-line summary in your own words. That’s the quickest comprehension check.",
}

NEXT_STEP_PREVIEWS = {
    LessonStyle.VISUAL: "Next up: a visual walkthrough of {topic} using simple diagrams and annotated examples.",
    LessonStyle.TEXT: "Next up: a clear, structured explanation of {topic}, with short checkpoints to confirm understanding.",
    LessonStyle.QUIZ: "Next up: short quiz-style prompts on {topic} so you can apply the idea and spot gaps quickly.",
}


def knowledge_tier(signals: SignalProfile) -> KnowledgeTier:
    return KNOWLEDGE_TIERS[signals.knowledge_label]


def calibration_line(calibration: CalibrationState) -> str:
    if calibration.overconfident:
        return CALIBRATION_OVERCONFIDENT
    if calibration.underconfident:
        return CALIBRATION_UNDERCONFIDENT
    return CALIBRATION_ALIGNED


def plan_lines(tier: KnowledgeTier, conf: int, policy: ScoringPolicy = DEFAULT_POLICY) -> list[str]:
    """Explanation depth from tier x confidence, then a confidence-tuned micro-task."""
    if tier == KnowledgeTier.ADVANCED:
        condition = conf >= policy.high_confidence_min
    else:
        condition = conf <= policy.low_confidence_max
    when_true, when_false = PLAN_LINES[tier]
    lines = [when_true if condition else when_false]

    if conf <= policy.low_confidence_max:
        lines.append(MICRO_TASK_LOW)
    elif conf < policy.high_confidence_min:
        lines.append(MICRO_TASK_MEDIUM)
    else:
        lines.append(MICRO_TASK_HIGH)
    return lines


def next_step_preview(style: LessonStyle, topic: str) -> str:
    return NEXT_STEP_PREVIEWS[style].format(topic=normalize_text(topic) or "this topic")


def tutor_insight_segments(
    input: ExplainInput,
    next_style: LessonStyle,
    calibration: CalibrationState,
    signals: SignalProfile,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> list[str]:
    """Ordered narrative segments for one decision."""
    topic = normalize_text(input.topic) or "this topic"
    conf = effective_confidence(input.confidence, policy)
    delta = format_number(effective_delta(input.delta))
    tier = knowledge_tier(signals)

    profile_line = (
        f"Profile: knowledge={tier.value} • confidence={conf}/5 • "
        f"delta=+{delta} ({calibration.delta_band.value})."
    )

    return [
        OPENERS[calibration.delta_band].format(topic=topic),
        profile_line,
        KNOWLEDGE_LINES[tier].format(knowledge=signals.prior_knowledge),
        CONFIDENCE_LINES[int(clamp(conf, 1, 5))].format(conf=conf),
        calibration_line(calibration),
        ADAPTATION_LINES[next_style].format(delta=delta, label=STYLE_LABELS[next_style]),
        *plan_lines(tier, conf, policy),
        NUDGES[next_style],
        next_step_preview(next_style, topic),
    ]


def compose_tutor_insight(
    input: ExplainInput,
    next_style: LessonStyle,
    calibration: CalibrationState,
    signals: SignalProfile,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> str:
    """Join the narrative segments with line breaks."""
    return "\n".join(tutor_insight_segments(input, next_style, calibration, signals, policy))
