"""
Unit tests for the prior-knowledge signal normalizer.
"""

import pytest

from lesson_adapt.adaptive import KnowledgeLabel, normalize_signals
from lesson_adapt.adaptive.signal_normalizer import (
    KEYWORD_RULES,
    classify_knowledge,
    match_keyword_rules,
)


class TestKnowledgeLabel:
    def test_beginner_keywords(self):
        profile = normalize_signals("I'm a total beginner, never done this")
        assert profile.mentions_beginner is True
        assert profile.mentions_advanced is False
        assert profile.knowledge_label == KnowledgeLabel.BEGINNER

    def test_both_families_is_mixed(self):
        profile = normalize_signals("I'm pretty advanced but still new to this part")
        assert profile.mentions_advanced is True
        assert profile.mentions_beginner is True
        assert profile.knowledge_label == KnowledgeLabel.MIXED

    def test_neither_family_is_mixed(self):
        profile = normalize_signals("Some grounding from school")
        assert profile.mentions_advanced is False
        assert profile.mentions_beginner is False
        assert profile.knowledge_label == KnowledgeLabel.MIXED

    def test_advanced_only(self):
        profile = normalize_signals("Fairly STRONG, I'm an Expert")
        assert profile.knowledge_label == KnowledgeLabel.ADVANCED

    @pytest.mark.parametrize("raw", ["", "   ", "\n\t", None])
    def test_empty_is_unknown(self, raw):
        profile = normalize_signals(raw)
        assert profile.is_empty is True
        assert profile.knowledge_label == KnowledgeLabel.UNKNOWN
        assert not any([
            profile.mentions_advanced,
            profile.mentions_beginner,
            profile.mentions_examples,
            profile.mentions_visual,
        ])


class TestFlags:
    def test_examples_and_visual_flags(self):
        profile = normalize_signals("I learn from a diagram and a practice problem")
        assert profile.mentions_examples is True
        assert profile.mentions_visual is True

    def test_substring_match(self):
        # "advance" is a substring rule, so "advances" counts too
        assert normalize_signals("recent advances").mentions_advanced is True

    def test_original_case_preserved_for_display(self):
        profile = normalize_signals("  Basic Algebra  ")
        assert profile.prior_knowledge == "Basic Algebra"
        assert profile.mentions_beginner is True

    def test_garbage_never_raises(self):
        profile = normalize_signals("%%%$$$###")
        assert profile.is_empty is False
        assert profile.knowledge_label == KnowledgeLabel.MIXED


class TestRuleTable:
    def test_every_rule_produces_a_flag(self):
        flags = match_keyword_rules("nothing relevant")
        assert set(flags) == {flag for flag, _ in KEYWORD_RULES}
        assert not any(flags.values())

    def test_each_keyword_triggers_its_flag(self):
        for flag, keywords in KEYWORD_RULES:
            for keyword in keywords:
                assert match_keyword_rules(keyword.upper())[flag] is True

    def test_classify_in_isolation(self):
        assert classify_knowledge(True, True, False) == KnowledgeLabel.UNKNOWN
        assert classify_knowledge(False, True, False) == KnowledgeLabel.ADVANCED
        assert classify_knowledge(False, False, True) == KnowledgeLabel.BEGINNER
        assert classify_knowledge(False, True, True) == KnowledgeLabel.MIXED
