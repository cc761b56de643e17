"""
Runtime configuration for the course auditor.

This module centralizes environment-driven configuration for the gap
analysis engine: rule thresholds, display limits, and the resolution
policy applied when a battery is re-run.

Configuration is read-only at runtime. The same configuration and the
same snapshot MUST always produce the same findings.
"""

from __future__ import annotations

import logging
import os
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ResolutionPolicy(str, Enum):
    """
    What happens to resolved findings when a battery is re-run.

    RESET:          every finding of a fresh run starts unresolved.
    CARRY_FORWARD:  a finding whose fingerprint was resolved in the
                    previous report stays resolved while the gap persists.
    """

    RESET = "reset"
    CARRY_FORWARD = "carry_forward"


class AuditorConfig(BaseModel):
    """
    Runtime configuration for the course auditor.

    Configuration is environment-driven, read-only at runtime, and must
    not introduce non-deterministic behavior into findings or scores.
    """

    # ------------------------------------------------------------------
    # Rule thresholds
    # ------------------------------------------------------------------

    COVERAGE_THRESHOLD: float = Field(
        0.5,
        description=(
            "Minimum fraction of modules that must have at least one "
            "design document for development coverage to be adequate"
        ),
    )

    MIN_MODULES: int = Field(
        3,
        ge=1,
        description="Courses with fewer modules receive an informational finding",
    )

    MIN_LESSONS_PER_MODULE: int = Field(
        2,
        ge=1,
        description="Modules with fewer lessons receive an informational finding",
    )

    # ------------------------------------------------------------------
    # Display / lifecycle
    # ------------------------------------------------------------------

    ACTION_ITEM_LIMIT: int = Field(
        10,
        ge=1,
        description="Maximum number of prioritized action items to display",
    )

    RESOLUTION_POLICY: ResolutionPolicy = Field(
        ResolutionPolicy.RESET,
        description="Whether resolved findings survive a re-run",
    )

    LOG_LEVEL: str = Field(
        "INFO",
        description="Log level applied by the HTTP entrypoint",
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("COVERAGE_THRESHOLD")
    @classmethod
    def validate_coverage_threshold(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError(
                f"COVERAGE_THRESHOLD must be in (0, 1], got {v}"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unsupported LOG_LEVEL '{v}'")
        return level

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "AuditorConfig":
        """
        Load configuration from environment variables.

        All values are parsed once at startup and must remain immutable.
        """
        return cls(
            COVERAGE_THRESHOLD=float(
                os.getenv("COURSE_AUDITOR_COVERAGE_THRESHOLD", "0.5")
            ),
            MIN_MODULES=int(
                os.getenv("COURSE_AUDITOR_MIN_MODULES", "3")
            ),
            MIN_LESSONS_PER_MODULE=int(
                os.getenv("COURSE_AUDITOR_MIN_LESSONS_PER_MODULE", "2")
            ),
            ACTION_ITEM_LIMIT=int(
                os.getenv("COURSE_AUDITOR_ACTION_ITEM_LIMIT", "10")
            ),
            RESOLUTION_POLICY=os.getenv(
                "COURSE_AUDITOR_RESOLUTION_POLICY", ResolutionPolicy.RESET.value
            ),
            LOG_LEVEL=os.getenv(
                "COURSE_AUDITOR_LOG_LEVEL", "INFO"
            ),
        )

    model_config = {
        "frozen": True,
    }
