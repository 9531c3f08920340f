"""
Pre-learning probe and learning-delta estimate.

Runs upstream of the engine when no measured delta exists. Deliberately
simple and kept out of the scoring policy:

    pre  = 20 (+20 if the answer mentions "advance") + confidence * 6, capped at 70
    post = fixed post-lesson score (70 by default)
    delta = post - pre
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from loguru import logger

BASE_PRE_SCORE = 20
ADVANCED_BONUS = 20
CONFIDENCE_MULTIPLIER = 6
PRE_SCORE_CAP = 70
DEFAULT_POST_SCORE = 70

DEFAULT_KNOWLEDGE_ANSWER = "Basic"
DEFAULT_CONFIDENCE_ANSWER = 3


@dataclass(frozen=True)
class ProbeAnswers:
    prior_knowledge: str
    confidence: float


@dataclass(frozen=True)
class DeltaEstimate:
    pre_score: float
    post_score: float

    @property
    def delta(self) -> float:
        return self.post_score - self.pre_score


def probe_questions(topic: str) -> list[str]:
    """The two pre-learning questions shown before a lesson."""
    return [
        f"Briefly describe what you already know about {topic}.",
        f"Rate your confidence with {topic} (1-5).",
    ]


def parse_probe_answers(
    knowledge_text: Optional[str],
    confidence_text: Optional[str],
    default_knowledge: str = DEFAULT_KNOWLEDGE_ANSWER,
    default_confidence: float = DEFAULT_CONFIDENCE_ANSWER,
) -> ProbeAnswers:
    """
    Substitute defaults for blank answers before calling the engine.

    A confidence answer that is not a non-zero number falls back to the
    default; out-of-range numbers pass through for the engine to clamp.
    """
    knowledge = knowledge_text or default_knowledge

    try:
        confidence = float(confidence_text) if confidence_text not in (None, "") else 0.0
    except (TypeError, ValueError):
        logger.debug("Unparseable confidence answer {!r}, using default", confidence_text)
        confidence = 0.0
    if confidence == 0 or math.isnan(confidence):
        confidence = float(default_confidence)
    if confidence.is_integer():
        confidence = int(confidence)

    return ProbeAnswers(prior_knowledge=knowledge, confidence=confidence)


def estimate_pre_score(prior_knowledge: str, confidence: float) -> float:
    pre_score = BASE_PRE_SCORE
    if "advance" in (prior_knowledge or "").lower():
        pre_score += ADVANCED_BONUS
    pre_score += confidence * CONFIDENCE_MULTIPLIER
    return min(pre_score, PRE_SCORE_CAP)


def estimate_learning_delta(
    prior_knowledge: str,
    confidence: float,
    post_score: float = DEFAULT_POST_SCORE,
) -> DeltaEstimate:
    """
    Estimate pre/post scores for a learner with no measured delta.

    Args:
        prior_knowledge: Free-text probe answer
        confidence: Confidence probe answer (not clamped here)
        post_score: Fixed post-lesson score

    Returns:
        DeltaEstimate; ``delta`` is post minus pre
    """
    return DeltaEstimate(
        pre_score=estimate_pre_score(prior_knowledge, confidence),
        post_score=post_score,
    )
