"""
GapReport schema.

Defines the report produced by a check battery run against a project.

The report captures:
- the 0-100 completeness score and its per-phase breakdown,
- the ordered findings of the most recent run,
- a one-line summary for display.

A report is replaced in full by every run. After creation it changes
only through individual finding resolution.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator
from pydantic import ConfigDict

from course_auditor.app.schemas.findings import AddiePhase
from course_auditor.app.schemas.findings import FindingObject as Finding


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class ScoreBand(str, Enum):
    """
    Coarse display band for a completeness score.
    """

    COMPLETE = "complete"
    PARTIAL = "partial"
    INCOMPLETE = "incomplete"

    @classmethod
    def for_score(cls, score: int) -> "ScoreBand":
        if score >= 80:
            return cls.COMPLETE
        if score >= 50:
            return cls.PARTIAL
        return cls.INCOMPLETE


# ---------------------------------------------------------------------------
# Completeness (INTERNAL CONTRACTS)
# ---------------------------------------------------------------------------


class PhaseCompleteness(BaseModel):
    completed: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    percent: int = Field(
        0,
        ge=0,
        le=100,
        description="Derived from completed / total when not supplied",
    )

    @model_validator(mode="before")
    @classmethod
    def derive_percent(cls, data):
        if isinstance(data, dict) and "percent" not in data:
            completed = int(data.get("completed", 0))
            total = int(data.get("total", 0))
            data = {
                **data,
                "percent": round_half_up(100 * completed / total) if total else 0,
            }
        return data

    @model_validator(mode="after")
    def completed_within_total(self):
        if self.completed > self.total:
            raise ValueError("completed must not exceed total")
        return self

    model_config = ConfigDict(frozen=True, extra="forbid")


class CompletenessScore(BaseModel):
    """
    Result of walking the completeness checklist.
    """

    score: int = Field(..., ge=0, le=100)
    completed: int = Field(..., ge=0)
    expected: int = Field(..., ge=0)
    phases: Dict[AddiePhase, PhaseCompleteness] = Field(default_factory=dict)
    satisfied_rules: List[str] = Field(
        default_factory=list,
        description="Identifiers of checklist rules that evaluated true",
    )

    band: ScoreBand = Field(
        ScoreBand.INCOMPLETE,
        description="Display band, derived from score when not supplied",
    )

    @model_validator(mode="before")
    @classmethod
    def derive_band(cls, data):
        if isinstance(data, dict) and "band" not in data:
            data = {**data, "band": ScoreBand.for_score(int(data.get("score", 0)))}
        return data

    model_config = ConfigDict(frozen=True, extra="forbid")


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding; scores follow the
    conventional rule instead (62.5 -> 63).
    """
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


# ---------------------------------------------------------------------------
# Top-Level Report (PUBLIC CONTRACT)
# ---------------------------------------------------------------------------


class GapReport(BaseModel):
    """
    Report produced by a single check battery run.

    Owned exclusively by the project it was run against.
    """

    report_id: str = Field(
        default_factory=lambda: uuid4().hex,
        description="Unique identifier for this run",
    )

    project_id: str = Field(
        ...,
        description="Owning project",
    )

    battery: str = Field(
        ...,
        description="Name of the check battery that produced the report",
    )

    score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Completeness score (0-100)",
    )

    findings: List[Finding] = Field(
        default_factory=list,
        description="Ordered findings of the most recent run",
    )

    summary: str = Field(
        ...,
        description="One-line human-readable summary",
    )

    run_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Timestamp when the battery was run (UTC)",
    )

    completeness: Optional[CompletenessScore] = Field(
        None,
        description="Checklist totals and per-phase breakdown",
    )

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def enforce_unique_finding_ids(self):
        ids = [f.finding_id for f in self.findings]
        if len(ids) != len(set(ids)):
            raise ValueError("finding_id values must be unique within a report")
        return self

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def unresolved(self) -> List[Finding]:
        return [f for f in self.findings if not f.resolved]

    def find(self, finding_id: str) -> Optional[Finding]:
        for finding in self.findings:
            if finding.finding_id == finding_id:
                return finding
        return None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
