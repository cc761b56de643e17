"""
Gap rule contracts.

A rule is a named, side-effect free function of a ProjectSnapshot that
returns zero or more FindingDrafts. Two kinds exist:

- ChecklistRule: one "is this expected artifact present/adequate"
  predicate. The same object feeds both the completeness scorer (via
  is_satisfied) and the rule evaluator (via evaluate), so the predicate
  is written exactly once.

- OutlineRule: walks the course outline and may emit several findings
  (one per module or lesson). It does not contribute to the score.

Rules MUST NOT mutate the snapshot and MUST be deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from course_auditor.app.schemas.findings import (
    AddiePhase,
    FindingCategory,
    FindingDraft,
    Severity,
)
from course_auditor.app.schemas.snapshot import ProjectSnapshot


Predicate = Callable[[ProjectSnapshot], bool]
DescriptionFactory = Callable[[ProjectSnapshot], str]
OutlineCheck = Callable[[ProjectSnapshot], List[FindingDraft]]


class GapRule(Protocol):
    rule_id: str
    category: FindingCategory

    def evaluate(self, snapshot: ProjectSnapshot) -> List[FindingDraft]:
        ...


@dataclass(frozen=True)
class FindingTemplate:
    title: str
    description: str
    location: str
    suggested_fix: str


@dataclass(frozen=True)
class ChecklistRule:
    """
    Single checklist item.

    predicate:   True when the item is present/adequate.
    emit_when:   optional gate; when it returns False, an unsatisfied
                 item still counts against the score but no finding is
                 emitted (e.g. coverage is only reported once documents
                 exist).
    describe:    optional factory for a snapshot-dependent description.
    """

    rule_id: str
    phase: AddiePhase
    severity: Severity
    template: FindingTemplate
    predicate: Predicate
    weight: int = 1
    emit_when: Optional[Predicate] = None
    describe: Optional[DescriptionFactory] = None

    @property
    def category(self) -> FindingCategory:
        return FindingCategory.ADDIE

    def is_satisfied(self, snapshot: ProjectSnapshot) -> bool:
        return bool(self.predicate(snapshot))

    def evaluate(self, snapshot: ProjectSnapshot) -> List[FindingDraft]:
        if self.is_satisfied(snapshot):
            return []

        if self.emit_when is not None and not self.emit_when(snapshot):
            return []

        description = (
            self.describe(snapshot)
            if self.describe is not None
            else self.template.description
        )

        return [
            FindingDraft(
                rule_id=self.rule_id,
                category=self.category,
                phase=self.phase,
                severity=self.severity,
                title=self.template.title,
                description=description,
                location=self.template.location,
                suggested_fix=self.template.suggested_fix,
            )
        ]


@dataclass(frozen=True)
class OutlineRule:
    """
    Per-module / per-lesson rule.

    Emits nothing when there is no outline to walk, unless
    requires_outline is False.
    """

    rule_id: str
    category: FindingCategory
    check: OutlineCheck
    requires_outline: bool = True

    def evaluate(self, snapshot: ProjectSnapshot) -> List[FindingDraft]:
        if self.requires_outline and snapshot.outline is None:
            return []
        return list(self.check(snapshot))


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def plural(count: int, word: str, suffix: str = "s") -> str:
    """
    'objective' -> 'objectives' unless count == 1.
    """
    return word if count == 1 else f"{word}{suffix}"
