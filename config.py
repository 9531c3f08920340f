"""
Configuration settings for the lesson-adapt service.

Uses Pydantic Settings for environment variable management with .env file support.
The scoring policy itself is not configurable here: weights and thresholds are
versioned constants (see lesson_adapt.adaptive.policy).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (LESSON_ADAPT_*)."""

    model_config = SettingsConfigDict(
        env_prefix="LESSON_ADAPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # API Server
    # ========================================
    api_host: str = Field(
        default="127.0.0.1",
        description="API server host",
    )
    api_port: int = Field(
        default=8100,
        description="API server port",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins for the UI",
    )

    # ========================================
    # Pre-learning probe (upstream of the engine)
    # ========================================
    post_lesson_score: float = Field(
        default=70,
        description="Fixed post-lesson score used to estimate the learning delta",
    )
    default_confidence: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Confidence substituted when the learner leaves it blank",
    )
    default_prior_knowledge: str = Field(
        default="Basic",
        description="Prior-knowledge answer substituted when left blank",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
