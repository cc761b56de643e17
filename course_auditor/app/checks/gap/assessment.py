"""
Assessment alignment checks.

Per module:
    assessment.unaligned_objectives   objectives without an aligned assessment
    assessment.module_strategy        empty assessment strategy
    assessment.formative              lessons without an assessment type

Course level:
    assessment.summative              final module never mentions a
                                      summative component
"""

from __future__ import annotations

from typing import List

from course_auditor.app.checks.gap.base import OutlineRule, plural
from course_auditor.app.schemas.findings import (
    FindingCategory,
    FindingDraft,
    Severity,
)
from course_auditor.app.schemas.snapshot import ProjectSnapshot


RULE_UNALIGNED_OBJECTIVES = "assessment.unaligned_objectives"
RULE_MODULE_STRATEGY = "assessment.module_strategy"
RULE_FORMATIVE = "assessment.formative"
RULE_SUMMATIVE = "assessment.summative"


def check_unaligned_objectives(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    findings: List[FindingDraft] = []

    for module in snapshot.modules:
        unaligned = [o for o in module.objectives if not o.assessment_aligned]
        if not unaligned:
            continue

        count = len(unaligned)
        findings.append(
            FindingDraft(
                rule_id=RULE_UNALIGNED_OBJECTIVES,
                category=FindingCategory.ASSESSMENTS,
                severity=Severity.CRITICAL,
                title=f"{count} {plural(count, 'objective')} without assessments",
                description=(
                    f'Module "{module.title}" has {count} learning '
                    f"{plural(count, 'objective')} not aligned to an assessment."
                ),
                location=module.location,
                suggested_fix=(
                    "Create or align assessments for each learning objective."
                ),
            )
        )

    return findings


def check_module_strategy(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    return [
        FindingDraft(
            rule_id=RULE_MODULE_STRATEGY,
            category=FindingCategory.ASSESSMENTS,
            severity=Severity.WARNING,
            title="Module missing assessment strategy",
            description=(
                f'Module "{module.title}" has no assessment strategy defined.'
            ),
            location=module.location,
            suggested_fix="Define formative and summative assessment approaches.",
        )
        for module in snapshot.modules
        if not module.assessment_strategy.strip()
    ]


def check_formative(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    findings: List[FindingDraft] = []

    for module in snapshot.modules:
        if not module.lessons:
            continue

        missing = [l for l in module.lessons if not l.assessment_type]
        if not missing:
            continue

        findings.append(
            FindingDraft(
                rule_id=RULE_FORMATIVE,
                category=FindingCategory.ASSESSMENTS,
                severity=Severity.WARNING,
                title="Lessons without formative assessment",
                description=(
                    f"{len(missing)} of {len(module.lessons)} lessons in "
                    f'"{module.title}" lack an assessment type.'
                ),
                location=module.location,
                suggested_fix=(
                    "Add formative checks to lessons to verify understanding "
                    "as learners progress."
                ),
            )
        )

    return findings


def check_summative(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    modules = snapshot.modules
    if not modules:
        return []

    last = modules[-1]
    if "summative" in last.assessment_strategy.lower():
        return []

    return [
        FindingDraft(
            rule_id=RULE_SUMMATIVE,
            category=FindingCategory.ASSESSMENTS,
            severity=Severity.INFO,
            title="No summative assessment at course end",
            description=(
                "The final module does not explicitly mention a summative "
                "assessment."
            ),
            location=last.location,
            suggested_fix=(
                "Consider adding a summative assessment or capstone activity."
            ),
        )
    ]


def build_assessment_rules() -> List[OutlineRule]:
    return [
        OutlineRule(
            RULE_UNALIGNED_OBJECTIVES,
            FindingCategory.ASSESSMENTS,
            check_unaligned_objectives,
        ),
        OutlineRule(
            RULE_MODULE_STRATEGY,
            FindingCategory.ASSESSMENTS,
            check_module_strategy,
        ),
        OutlineRule(
            RULE_FORMATIVE,
            FindingCategory.ASSESSMENTS,
            check_formative,
        ),
        OutlineRule(
            RULE_SUMMATIVE,
            FindingCategory.ASSESSMENTS,
            check_summative,
        ),
    ]
