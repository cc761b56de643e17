"""
Standardized gap finding schema.

Defines the canonical structure used to report missing or deficient
course artifacts identified by a check battery (e.g. gap analysis).

This schema is:
- authoritative
- immutable once produced (resolution is applied via model_copy)
- rule-traceable
- severity-graded
- category-tagged at emission time

All findings included in a GapReport MUST conform to this schema.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic import ConfigDict


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class Severity(str, Enum):
    """
    Severity level of a finding.

    Ordering is intentional and MUST remain stable: action items are
    sorted by declaration order.
    """

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    PASS = "pass"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = list(Severity)


class AddiePhase(str, Enum):
    """
    Lifecycle stage the completeness checklist is organized around.
    """

    ANALYSIS = "analysis"
    DESIGN = "design"
    DEVELOPMENT = "development"
    IMPLEMENTATION = "implementation"
    EVALUATION = "evaluation"


class FindingCategory(str, Enum):
    """
    Display bucket of a finding.

    Assigned by the originating rule, never inferred from wording.
    Declaration order is the display order.
    """

    ADDIE = "addie"
    ASSESSMENTS = "assessments"
    CONTENT = "content"
    STRUCTURAL = "structural"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    FindingCategory.ADDIE: "ADDIE Phases",
    FindingCategory.ASSESSMENTS: "Assessments",
    FindingCategory.CONTENT: "Content Coverage",
    FindingCategory.STRUCTURAL: "Structural",
}


# ---------------------------------------------------------------------------
# Rule output (INTERNAL CONTRACT)
# ---------------------------------------------------------------------------


class FindingDraft(BaseModel):
    """
    Raw rule output, before identity and resolution state are assigned.

    Rules produce drafts; the FindingAdapter is the only place that turns
    them into canonical findings.
    """

    rule_id: str
    category: FindingCategory
    phase: Optional[AddiePhase] = None
    severity: Severity
    title: str
    description: str
    location: str
    suggested_fix: str

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


# ---------------------------------------------------------------------------
# Canonical Finding Object (PUBLIC, FROZEN)
# ---------------------------------------------------------------------------


class FindingObject(BaseModel):
    """
    Canonical gap finding.

    Represents a single reported gap or deficiency. Findings are owned by
    the report that carries them and have no identity outside it.
    """

    finding_id: str = Field(
        ...,
        description=(
            "Identifier of the finding, unique within a single run. "
            "Regenerated on every run (e.g., 'GAP-CRITICAL-3f9a0c1b2d4e')."
        ),
    )

    fingerprint: str = Field(
        ...,
        description=(
            "Stable identity of the underlying gap, derived from the battery, rule, "
            "location and occurrence. Identical across reruns while "
            "the gap persists."
        ),
    )

    rule_id: str = Field(
        ...,
        description="Identifier of the rule that produced the finding",
    )

    category: FindingCategory = Field(
        ...,
        description="Display bucket assigned by the originating rule",
    )

    phase: Optional[AddiePhase] = Field(
        None,
        description="ADDIE phase for checklist-derived findings",
    )

    severity: Severity = Field(
        ...,
        description="Severity level of the finding",
    )

    title: str = Field(
        ...,
        description="Short human-readable summary of the finding",
    )

    description: str = Field(
        ...,
        description="Clear explanation of what is missing or deficient",
    )

    location: str = Field(
        ...,
        description="Artifact path (phase, module or module > lesson)",
    )

    suggested_fix: str = Field(
        ...,
        description="Advisory remediation suggestion",
    )

    resolved: bool = Field(
        default=False,
        description="Whether the finding was marked resolved by a user",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
