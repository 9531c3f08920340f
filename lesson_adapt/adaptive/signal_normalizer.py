"""
Signal Normalizer.

Turns the learner's free-text prior-knowledge answer into labeled signals.
This is a rule-based classifier over a fixed English keyword taxonomy:
each rule maps a keyword family to one boolean flag (case-insensitive
substring match). Extend the taxonomy by editing KEYWORD_RULES.
"""
from __future__ import annotations

from typing import Optional

from lesson_adapt.adaptive.models import KnowledgeLabel, SignalProfile

# Ordered rule table: flag -> keywords. Substring match, so "advance"
# also covers "advanced" and "new" also covers "renewal".
KEYWORD_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("mentions_advanced", ("advanced", "advance", "expert", "comfortable", "strong")),
    ("mentions_beginner", ("beginner", "new", "never", "not much", "basic", "little")),
    ("mentions_examples", ("example", "practice", "exercise", "problem", "quiz")),
    ("mentions_visual", ("diagram", "visual", "chart", "graph", "picture")),
)


def normalize_text(value: Optional[str]) -> str:
    """Trim whitespace; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def match_keyword_rules(text: str) -> dict[str, bool]:
    """Evaluate every rule against already-normalized text."""
    lower = text.lower()
    return {
        flag: any(keyword in lower for keyword in keywords)
        for flag, keywords in KEYWORD_RULES
    }


def classify_knowledge(is_empty: bool, mentions_advanced: bool, mentions_beginner: bool) -> KnowledgeLabel:
    if is_empty:
        return KnowledgeLabel.UNKNOWN
    if mentions_advanced and not mentions_beginner:
        return KnowledgeLabel.ADVANCED
    if mentions_beginner and not mentions_advanced:
        return KnowledgeLabel.BEGINNER
    return KnowledgeLabel.MIXED


def normalize_signals(prior_knowledge_raw: Optional[str]) -> SignalProfile:
    """
    Normalize a prior-knowledge answer into a SignalProfile.

    The original casing is kept for display; matching is done on a
    lower-cased copy. Never raises: empty or garbage input yields an
    "unknown" label with all flags false.

    Args:
        prior_knowledge_raw: Free text as typed by the learner

    Returns:
        SignalProfile with keyword flags and knowledge label
    """
    prior_knowledge = normalize_text(prior_knowledge_raw)
    is_empty = len(prior_knowledge) == 0
    flags = match_keyword_rules(prior_knowledge)

    return SignalProfile(
        prior_knowledge=prior_knowledge,
        is_empty=is_empty,
        knowledge_label=classify_knowledge(
            is_empty,
            flags["mentions_advanced"],
            flags["mentions_beginner"],
        ),
        **flags,
    )
