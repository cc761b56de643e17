"""
Gap analysis check battery.

A battery is a named, ordered list of rules. The order below is the
finding order contract: same snapshot, same findings, same order.

    1. ADDIE phase completeness (checklist, scored)
    2. Assessment alignment
    3. Content coverage
    4. Structural checks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from course_auditor.app.config import AuditorConfig
from course_auditor.app.checks.gap.base import ChecklistRule, GapRule
from course_auditor.app.checks.gap.checklist import build_checklist
from course_auditor.app.checks.gap.assessment import build_assessment_rules
from course_auditor.app.checks.gap.coverage import build_coverage_rules
from course_auditor.app.checks.gap.structure import build_structure_rules


GAP_ANALYSIS = "gap-analysis"


@dataclass(frozen=True)
class CheckBattery:
    name: str
    rules: Tuple[GapRule, ...] = field(default_factory=tuple)

    @property
    def checklist(self) -> List[ChecklistRule]:
        """
        Scored items, in battery order.
        """
        return [r for r in self.rules if isinstance(r, ChecklistRule)]

    @property
    def rule_ids(self) -> List[str]:
        return [r.rule_id for r in self.rules]


def build_gap_analysis_battery(config: AuditorConfig) -> CheckBattery:
    rules: List[GapRule] = [
        *build_checklist(config),
        *build_assessment_rules(),
        *build_coverage_rules(),
        *build_structure_rules(config),
    ]

    rule_ids = [r.rule_id for r in rules]
    if len(rule_ids) != len(set(rule_ids)):
        raise RuntimeError(
            "Invariant violation: duplicate rule_id in gap analysis battery"
        )

    return CheckBattery(name=GAP_ANALYSIS, rules=tuple(rules))
