"""
Calibration Detector.

Compares self-reported confidence against the observed learning delta:
- Overconfidence: high confidence but small delta (add guidance and checks)
- Underconfidence: low confidence but large delta (move to practice sooner)

The two flags use disjoint confidence bands, so they can never both fire.
All numeric inputs are clamped on use; nothing here raises.
"""
from __future__ import annotations

import math
from typing import Any

from lesson_adapt.adaptive.models import CalibrationState, ConfidenceBand, DeltaBand
from lesson_adapt.adaptive.policy import DEFAULT_POLICY, ScoringPolicy


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _as_number(value: Any) -> float | None:
    """Coerce to a finite-or-infinite float; None for missing/garbage/NaN."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except OverflowError:
        # Integers beyond float range saturate instead of raising.
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def effective_confidence(confidence: Any, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """
    Confidence as every consumer sees it: an integer within the policy bounds.

    Missing or non-numeric values fall to the lower bound. Fractional values
    are rounded half-up before clamping.
    """
    number = _as_number(confidence)
    if number is None:
        return policy.confidence_min
    number = clamp(number, policy.confidence_min, policy.confidence_max)
    return int(math.floor(number + 0.5))


def effective_delta(delta: Any) -> float | int:
    """Learning delta floored at zero; missing or garbage values read as 0."""
    number = _as_number(delta)
    if number is None or number < 0:
        return 0
    if isinstance(delta, int) and not isinstance(delta, bool) and not math.isinf(number):
        return delta
    return number


def confidence_band(confidence: Any, policy: ScoringPolicy = DEFAULT_POLICY) -> ConfidenceBand:
    conf = effective_confidence(confidence, policy)
    if conf <= policy.low_confidence_max:
        return ConfidenceBand.LOW
    if conf >= policy.high_confidence_min:
        return ConfidenceBand.HIGH
    return ConfidenceBand.MEDIUM


def delta_band(delta: Any, policy: ScoringPolicy = DEFAULT_POLICY) -> DeltaBand:
    value = effective_delta(delta)
    if value < policy.small_delta_limit:
        return DeltaBand.SMALL
    if value < policy.moderate_delta_limit:
        return DeltaBand.MODERATE
    return DeltaBand.LARGE


def detect_calibration(
    confidence: Any,
    delta: Any,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> CalibrationState:
    """
    Classify confidence/delta alignment.

    Args:
        confidence: Self-reported confidence (clamped to the policy bounds)
        delta: Learning delta (floored at 0)
        policy: Thresholds to apply

    Returns:
        CalibrationState with both bands and the mismatch flags
    """
    conf_band = confidence_band(confidence, policy)
    d_band = delta_band(delta, policy)

    return CalibrationState(
        confidence_band=conf_band,
        delta_band=d_band,
        overconfident=conf_band == ConfidenceBand.HIGH and d_band == DeltaBand.SMALL,
        underconfident=conf_band == ConfidenceBand.LOW and d_band == DeltaBand.LARGE,
    )
