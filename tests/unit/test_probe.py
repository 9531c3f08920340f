"""
Unit tests for the pre-learning probe and delta estimate.
"""

import pytest

from lesson_adapt.adaptive import estimate_learning_delta, parse_probe_answers
from lesson_adapt.adaptive.probe import estimate_pre_score, probe_questions


class TestDeltaEstimate:
    @pytest.mark.parametrize(
        "knowledge, confidence, pre, delta",
        [
            ("Basic", 3, 38, 32),
            ("Advanced", 5, 70, 0),
            ("advanced", 4, 64, 6),
            ("I've seen advances in this", 1, 46, 24),
            ("Basic", 10, 70, 0),
        ],
    )
    def test_estimate(self, knowledge, confidence, pre, delta):
        estimate = estimate_learning_delta(knowledge, confidence)
        assert estimate.pre_score == pre
        assert estimate.post_score == 70
        assert estimate.delta == delta

    def test_custom_post_score(self):
        assert estimate_learning_delta("Basic", 3, post_score=90).delta == 52

    def test_missing_knowledge(self):
        assert estimate_pre_score(None, 2) == 32


class TestProbeAnswers:
    @pytest.mark.parametrize(
        "knowledge_text, confidence_text, knowledge, confidence",
        [
            ("", "", "Basic", 3),
            (None, None, "Basic", 3),
            ("Some algebra", "abc", "Some algebra", 3),
            ("Some algebra", "0", "Some algebra", 3),
            ("Some algebra", "nan", "Some algebra", 3),
            ("Some algebra", "4", "Some algebra", 4),
            ("Some algebra", "2.5", "Some algebra", 2.5),
            ("Some algebra", "9", "Some algebra", 9),
        ],
    )
    def test_parse(self, knowledge_text, confidence_text, knowledge, confidence):
        answers = parse_probe_answers(knowledge_text, confidence_text)
        assert answers.prior_knowledge == knowledge
        assert answers.confidence == confidence

    def test_integral_confidence_is_int(self):
        assert isinstance(parse_probe_answers("x", "4.0").confidence, int)

    def test_custom_defaults(self):
        answers = parse_probe_answers("", "", default_knowledge="None yet", default_confidence=2)
        assert answers.prior_knowledge == "None yet"
        assert answers.confidence == 2


class TestQuestions:
    def test_mentions_topic(self):
        knowledge_question, confidence_question = probe_questions("Fractions")
        assert "Fractions" in knowledge_question
        assert confidence_question.endswith("(1-5).")
