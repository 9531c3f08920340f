"""
FastAPI application for lesson-adapt.

Provides a REST surface over the explainability engine for the UI layer:
- Explainability (decision, reasons, audit trace)
- Tutor insight narrative
- Full adaptation record
- Active decision policy
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config import get_settings
from lesson_adapt import __version__
from lesson_adapt.adaptive import DECISION_POLICY_VERSION
from lesson_adapt.api.routers import explain_router

settings = get_settings()


def configure_logging() -> None:
    """Route loguru to stderr (and the optional log file) at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level=settings.log_level, rotation="10 MB", retention=5)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    configure_logging()
    logger.info(f"Starting lesson-adapt service (policy {DECISION_POLICY_VERSION})")

    yield

    logger.info("Shutting down lesson-adapt service...")


app = FastAPI(
    title="Lesson Adapt",
    description="""
    Deterministic, explainable lesson-style adaptation.

    ## Data Flow

    ```
    Learner signals (topic, prior knowledge, confidence, delta, starting style)
        ↓ normalize + calibrate
    Weighted style scores
        ↓ decide (tie-break: text, visual, quiz)
    Decision + reasons + audit trace + tutor insight
    ```
    """,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========================================
# Health & Status Endpoints
# ========================================


@app.get("/", tags=["Health"])
def root() -> dict[str, str]:
    """Root endpoint returning service info."""
    return {
        "service": "lesson-adapt",
        "version": __version__,
        "status": "ok",
    }


@app.get("/health", tags=["Health"])
def health_check() -> dict[str, str]:
    """The engine has no external dependencies, so health is the policy in force."""
    return {
        "status": "healthy",
        "policy": DECISION_POLICY_VERSION,
    }


# ========================================
# Routers
# ========================================

app.include_router(explain_router, prefix="/api", tags=["Explainability"])
