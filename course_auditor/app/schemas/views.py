"""
Display-layer view schemas.

Derived, read-only projections of a GapReport. Views carry no state of
their own and are recomputed from the stored report on every request.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from course_auditor.app.schemas.findings import FindingCategory
from course_auditor.app.schemas.findings import FindingObject as Finding


class CategoryGroup(BaseModel):
    category: FindingCategory
    label: str
    findings: List[Finding] = Field(default_factory=list)
    unresolved_critical: int = 0
    unresolved_warnings: int = 0

    @property
    def is_clear(self) -> bool:
        return not self.findings

    model_config = ConfigDict(frozen=True, extra="forbid")


class ActionItems(BaseModel):
    """
    Unresolved findings prioritized by severity.
    """

    items: List[Finding] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Unresolved findings before truncation")

    @property
    def remaining(self) -> int:
        return self.total - len(self.items)

    model_config = ConfigDict(frozen=True, extra="forbid")
