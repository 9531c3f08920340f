"""
Explainability API Router.

Endpoints for the lesson-style adaptation engine:
- Explainability (decision, reasons, audit trace)
- Tutor insight narrative
- Full adaptation record (both of the above plus scores and calibration)
- Active decision policy

Requests use the camelCase field names of the UI record. When no delta is
supplied, it is estimated from the probe answers before the engine runs.
"""

from __future__ import annotations

import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config import Settings, get_settings
from lesson_adapt.adaptive import (
    DEFAULT_POLICY,
    ExplainabilityEngine,
    ExplainInput,
    ExplainResult,
    LessonStyle,
    estimate_learning_delta,
)
from lesson_adapt.adaptive.probe import DeltaEstimate

router = APIRouter()

_engine = ExplainabilityEngine(DEFAULT_POLICY)


# ========================================
# Request/Response Models
# ========================================


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExplainRequest(CamelModel):
    """Learner signals collected by the UI."""

    topic: str = Field("", description="Lesson topic")
    prior_knowledge: str = Field("", description="Free-text prior knowledge answer")
    confidence: Optional[float] = Field(None, description="Self-reported confidence (1-5, clamped)")
    delta: Optional[float] = Field(None, description="Learning delta; estimated from the probe when omitted")
    starting_style: LessonStyle = Field(LessonStyle.TEXT, description="Starting lesson style")


class ExplainabilityResponse(CamelModel):
    decision: str
    next_style: LessonStyle
    reasons: list[str]
    decision_trace: str
    top_signals: list[str]


class TutorInsightResponse(CamelModel):
    tutor_insight: str


class CalibrationResponse(CamelModel):
    confidence_band: str
    delta_band: str
    overconfident: bool
    underconfident: bool


class AdaptResponse(ExplainabilityResponse):
    """Full adaptation record for one learner."""

    tutor_insight: str
    knowledge_label: str
    scores: dict[str, float]
    calibration: CalibrationResponse
    pre_score: Optional[float] = Field(None, description="Estimated pre-lesson score, when delta was omitted")
    post_score: Optional[float] = Field(None, description="Post-lesson score, when delta was omitted")


class PolicyResponse(CamelModel):
    version: str
    weights: dict[str, float]
    thresholds: dict[str, float]


# ========================================
# Helpers
# ========================================


def _build_input(
    request: ExplainRequest,
    settings: Settings,
) -> tuple[ExplainInput, Optional[DeltaEstimate]]:
    """Substitute caller-side defaults and build the engine input."""
    confidence = request.confidence
    if confidence is None or math.isnan(confidence):
        confidence = settings.default_confidence
    estimate = None
    delta = request.delta
    if delta is None:
        estimate = estimate_learning_delta(
            request.prior_knowledge or settings.default_prior_knowledge,
            confidence,
            post_score=settings.post_lesson_score,
        )
        delta = estimate.delta

    explain_input = ExplainInput(
        topic=request.topic,
        prior_knowledge=request.prior_knowledge,
        confidence=confidence,
        delta=delta,
        starting_style=request.starting_style,
    )
    return explain_input, estimate


def _run(request: ExplainRequest, settings: Settings) -> tuple[ExplainResult, Optional[DeltaEstimate]]:
    explain_input, estimate = _build_input(request, settings)
    try:
        return _engine.explain(explain_input), estimate
    except Exception as exc:
        logger.exception("Explainability engine failed")
        raise HTTPException(status_code=500, detail=str(exc))


def _explainability_fields(result: ExplainResult) -> dict:
    return {
        "decision": result.decision.title,
        "next_style": result.next_style,
        "reasons": list(result.reasons),
        "decision_trace": result.decision.decision_trace,
        "top_signals": list(result.decision.top_signals),
    }


# ========================================
# Endpoints
# ========================================


@router.post(
    "/explain",
    response_model=ExplainabilityResponse,
    summary="Explain the next lesson style",
)
def explain(
    request: ExplainRequest,
    settings: Settings = Depends(get_settings),
) -> ExplainabilityResponse:
    """
    Choose the next lesson style and return the reasons behind it.

    The decision trace keeps its parsed format:
    ``policy=... • start=... → next=... • conf=... • knowledge=... • delta=... • top=...``
    """
    result, _ = _run(request, settings)
    logger.info(f"Explained {request.topic or 'untitled topic'}: next={result.next_style.value}")
    return ExplainabilityResponse(**_explainability_fields(result))


@router.post(
    "/tutor-insight",
    response_model=TutorInsightResponse,
    summary="Tutor insight narrative",
)
def tutor_insight(
    request: ExplainRequest,
    settings: Settings = Depends(get_settings),
) -> TutorInsightResponse:
    """Multi-line tutor narrative for the same decision."""
    result, _ = _run(request, settings)
    return TutorInsightResponse(tutor_insight=result.tutor_insight)


@router.post(
    "/adapt",
    response_model=AdaptResponse,
    summary="Full adaptation record",
)
def adapt(
    request: ExplainRequest,
    settings: Settings = Depends(get_settings),
) -> AdaptResponse:
    """Explainability, tutor insight, per-style scores and calibration in one call."""
    result, estimate = _run(request, settings)
    return AdaptResponse(
        **_explainability_fields(result),
        tutor_insight=result.tutor_insight,
        knowledge_label=result.signals.knowledge_label.value,
        scores={style.value: score for style, score in result.scores.items()},
        calibration=CalibrationResponse(
            confidence_band=result.calibration.confidence_band.value,
            delta_band=result.calibration.delta_band.value,
            overconfident=result.calibration.overconfident,
            underconfident=result.calibration.underconfident,
        ),
        pre_score=estimate.pre_score if estimate else None,
        post_score=estimate.post_score if estimate else None,
    )


@router.get(
    "/policy",
    response_model=PolicyResponse,
    summary="Active decision policy",
)
def policy() -> PolicyResponse:
    """Weights and thresholds behind every decision, tagged by version."""
    active = _engine.policy
    return PolicyResponse(
        version=active.version,
        weights={
            "delta": active.weights.delta,
            "confidence": active.weights.confidence,
            "priorKnowledge": active.weights.prior_knowledge,
            "startingStyle": active.weights.starting_style,
        },
        thresholds={
            "lowConfidenceMax": active.low_confidence_max,
            "highConfidenceMin": active.high_confidence_min,
            "smallDeltaLimit": active.small_delta_limit,
            "moderateDeltaLimit": active.moderate_delta_limit,
            "deltaSaturation": active.delta_saturation,
        },
    )
