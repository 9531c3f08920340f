"""
Unit tests for the Tutor Insight narrative.
"""

import pytest

from lesson_adapt.adaptive import ExplainInput, LessonStyle, build_tutor_insight
from lesson_adapt.adaptive.tutor_insight import (
    CALIBRATION_OVERCONFIDENT,
    CALIBRATION_UNDERCONFIDENT,
    CONFIDENCE_LINES,
    MICRO_TASK_HIGH,
    MICRO_TASK_LOW,
    MICRO_TASK_MEDIUM,
    KnowledgeTier,
    next_step_preview,
    plan_lines,
)


class TestNarrativeShape:
    def test_always_ten_lines(self, algebra_input, overconfident_input, underconfident_input):
        for explain_input in (algebra_input, overconfident_input, underconfident_input):
            assert len(build_tutor_insight(explain_input).split("\n")) == 10

    def test_algebra_narrative(self, algebra_input):
        assert build_tutor_insight(algebra_input).split("\n") == [
            "You made a strong jump on Algebra basics.",
            "Profile: knowledge=beginner • confidence=3/5 • delta=+50 (large).",
            "Prior knowledge: you seem beginner (“Basic”). I’ll go step-by-step with simple examples.",
            "Confidence: 3/5 (medium). We’ll keep a steady pace with checkpoints in common confusion spots.",
            "Calibration note: your confidence and learning delta appear aligned.",
            "Because your learning delta was +50, the system chose guided quizzes"
            "—that’s the fastest way to expose what’s solid vs. what needs review.",
            "Plan: start with 1–2 simple examples, then you do 2 short practice checks.",
            MICRO_TASK_MEDIUM,
            "Tip: if you miss a question, don’t push through—pause and explain the “why” in one sentence first.",
            "Next up: short quiz-style prompts on Algebra basics so you can apply the idea and spot gaps quickly.",
        ]

    def test_overconfident_narrative(self, overconfident_input):
        lines = build_tutor_insight(overconfident_input).split("\n")
        assert lines[0] == "You’re getting started on Fractions, and the signals are useful already."
        assert lines[1] == "Profile: knowledge=unknown • confidence=5/5 • delta=+5 (small)."
        assert lines[2] == "Prior knowledge: I didn’t get much detail, so I’ll confirm the basics first."
        assert lines[4] == CALIBRATION_OVERCONFIDENT
        assert lines[7] == MICRO_TASK_HIGH
        assert lines[9].startswith("Next up: a visual walkthrough of Fractions")

    def test_underconfident_narrative(self, underconfident_input):
        lines = build_tutor_insight(underconfident_input).split("\n")
        assert lines[2].startswith("Prior knowledge: you seem advanced (“I'm comfortable with this”).")
        assert lines[3].startswith("Confidence: 1/5 (very low).")
        assert lines[4] == CALIBRATION_UNDERCONFIDENT
        assert lines[7] == MICRO_TASK_LOW

    def test_mixed_knowledge_reads_as_intermediate(self):
        explain_input = ExplainInput("Vectors", "Some grounding from school", 3, 30, LessonStyle.TEXT)
        lines = build_tutor_insight(explain_input).split("\n")
        assert lines[0] == "You’re building momentum on Vectors."
        assert "knowledge=intermediate" in lines[1]
        assert lines[2].startswith("Prior knowledge: you seem mixed (“Some grounding from school”).")

    def test_blank_topic(self):
        explain_input = ExplainInput("", "Basic", 3, 30, LessonStyle.TEXT)
        lines = build_tutor_insight(explain_input).split("\n")
        assert lines[0] == "You’re building momentum on this topic."
        assert "this topic" in lines[-1]


class TestConfidenceLines:
    def test_five_distinct_lines(self):
        rendered = {CONFIDENCE_LINES[conf].format(conf=conf) for conf in range(1, 6)}
        assert len(rendered) == 5

    @pytest.mark.parametrize("raw, shown", [(0, "1/5 (very low)"), (2, "2/5 (low)"), (4, "4/5 (high)"), (8, "5/5 (very high)")])
    def test_line_uses_clamped_value(self, raw, shown):
        explain_input = ExplainInput("Algebra", "Basic", raw, 30, LessonStyle.TEXT)
        lines = build_tutor_insight(explain_input).split("\n")
        assert lines[3].startswith(f"Confidence: {shown}.")


class TestPlanLines:
    @pytest.mark.parametrize(
        "tier, conf, prefix",
        [
            (KnowledgeTier.BEGINNER, 2, "Plan: start with 2–3 ultra-simple examples"),
            (KnowledgeTier.BEGINNER, 3, "Plan: start with 1–2 simple examples"),
            (KnowledgeTier.ADVANCED, 4, "Plan: jump straight to challenge problems"),
            (KnowledgeTier.ADVANCED, 3, "Plan: do 1 compact refresher"),
            (KnowledgeTier.INTERMEDIATE, 1, "Plan: do a quick refresher of the core model"),
            (KnowledgeTier.INTERMEDIATE, 5, "Plan: do a quick recap"),
            (KnowledgeTier.UNKNOWN, 2, "Plan: I’ll confirm basics with a few quick questions"),
            (KnowledgeTier.UNKNOWN, 4, "Plan: I’ll start with a short baseline check"),
        ],
    )
    def test_depth_line(self, tier, conf, prefix):
        assert plan_lines(tier, conf)[0].startswith(prefix)

    @pytest.mark.parametrize("conf, micro_task", [(1, MICRO_TASK_LOW), (2, MICRO_TASK_LOW), (3, MICRO_TASK_MEDIUM), (4, MICRO_TASK_HIGH), (5, MICRO_TASK_HIGH)])
    def test_micro_task(self, conf, micro_task):
        assert plan_lines(KnowledgeTier.BEGINNER, conf)[1] == micro_task


class TestStyleConsistency:
    def test_visual_narrative_never_mentions_quizzes(self, overconfident_input):
        insight = build_tutor_insight(overconfident_input).lower()
        assert "quiz" not in insight
        assert "visual explanations" in insight

    def test_quiz_narrative_never_mentions_diagrams(self, algebra_input):
        insight = build_tutor_insight(algebra_input).lower()
        assert "diagram" not in insight
        assert "guided quizzes" in insight

    def test_previews(self):
        assert next_step_preview(LessonStyle.TEXT, "Sets").startswith(
            "Next up: a clear, structured explanation of Sets"
        )
        assert next_step_preview(LessonStyle.VISUAL, "  ") == (
            "Next up: a visual walkthrough of this topic using simple diagrams and annotated examples."
        )
