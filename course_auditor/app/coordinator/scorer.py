"""
Completeness Scorer.

Walks the battery's checklist items and converts completed / expected
into a 0-100 score with a per-phase breakdown.

The scorer consumes the SAME ChecklistRule objects the evaluator runs,
so a checklist predicate is defined exactly once.
"""

from __future__ import annotations

from typing import Dict, List

from course_auditor.app.checks.gap.base import ChecklistRule
from course_auditor.app.schemas.findings import AddiePhase
from course_auditor.app.schemas.report import (
    CompletenessScore,
    PhaseCompleteness,
    round_half_up,
)
from course_auditor.app.schemas.snapshot import ProjectSnapshot


class CompletenessScorer:
    def __init__(self, checklist: List[ChecklistRule]) -> None:
        self._checklist = list(checklist)

    @property
    def expected(self) -> int:
        return sum(item.weight for item in self._checklist)

    def score(self, snapshot: ProjectSnapshot) -> CompletenessScore:
        completed = 0
        satisfied: List[str] = []
        phase_totals: Dict[AddiePhase, List[int]] = {
            phase: [0, 0] for phase in AddiePhase
        }

        for item in self._checklist:
            phase_totals[item.phase][1] += item.weight

            if item.is_satisfied(snapshot):
                completed += item.weight
                phase_totals[item.phase][0] += item.weight
                satisfied.append(item.rule_id)

        expected = self.expected
        score = round_half_up(100 * completed / expected) if expected else 0

        return CompletenessScore(
            score=score,
            completed=completed,
            expected=expected,
            phases={
                phase: PhaseCompleteness(completed=done, total=total)
                for phase, (done, total) in phase_totals.items()
            },
            satisfied_rules=satisfied,
        )
