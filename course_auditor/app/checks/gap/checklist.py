"""
ADDIE phase completeness checklist.

Ten checklist items spread across the five lifecycle phases:

    analysis        3   report, learner profile, constraints
    design          3   outline, objectives, assessment strategy
    development     2   design documents, module coverage
    implementation  1   facilitator guide
    evaluation      1   success metrics

Each item is a ChecklistRule: the scorer counts satisfied items, the
evaluator emits a finding for each unsatisfied one.
"""

from __future__ import annotations

from typing import List

from course_auditor.app.config import AuditorConfig
from course_auditor.app.checks.gap.base import ChecklistRule, FindingTemplate
from course_auditor.app.schemas.findings import AddiePhase, Severity
from course_auditor.app.schemas.snapshot import (
    DesignDocFormat,
    ProjectSnapshot,
)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def has_completed_report(snapshot: ProjectSnapshot) -> bool:
    return snapshot.analysis.completed_report is not None


def has_learner_profile(snapshot: ProjectSnapshot) -> bool:
    report = snapshot.analysis.completed_report
    return bool(report and report.learner_profile)


def has_constraints(snapshot: ProjectSnapshot) -> bool:
    report = snapshot.analysis.completed_report
    return bool(report and report.constraints)


def has_outline(snapshot: ProjectSnapshot) -> bool:
    return snapshot.outline is not None


def has_objectives(snapshot: ProjectSnapshot) -> bool:
    return any(m.objectives for m in snapshot.modules)


def has_assessment_strategy(snapshot: ProjectSnapshot) -> bool:
    return any(m.assessment_strategy.strip() for m in snapshot.modules)


def has_design_documents(snapshot: ProjectSnapshot) -> bool:
    return len(snapshot.design_documents) > 0


def modules_with_documents(snapshot: ProjectSnapshot) -> int:
    return sum(1 for m in snapshot.modules if snapshot.documents_for(m))


def has_facilitator_guide(snapshot: ProjectSnapshot) -> bool:
    return any(
        d.format is DesignDocFormat.FACILITATOR_GUIDE
        for d in snapshot.design_documents
    )


def has_success_metrics(snapshot: ProjectSnapshot) -> bool:
    report = snapshot.analysis.completed_report
    return bool(report and report.success_metrics)


# ---------------------------------------------------------------------------
# Checklist construction
# ---------------------------------------------------------------------------


def build_checklist(config: AuditorConfig) -> List[ChecklistRule]:
    """
    Ordered checklist items. Order is part of the finding order contract.
    """

    def has_enough_coverage(snapshot: ProjectSnapshot) -> bool:
        module_count = len(snapshot.modules)
        return (
            module_count > 0
            and modules_with_documents(snapshot)
            >= module_count * config.COVERAGE_THRESHOLD
        )

    def describe_coverage(snapshot: ProjectSnapshot) -> str:
        return (
            f"Only {modules_with_documents(snapshot)} of "
            f"{len(snapshot.modules)} modules have design documents."
        )

    return [
        # --------------------------------------------------------------
        # Analysis
        # --------------------------------------------------------------
        ChecklistRule(
            rule_id="analysis.report",
            phase=AddiePhase.ANALYSIS,
            severity=Severity.CRITICAL,
            predicate=has_completed_report,
            template=FindingTemplate(
                title="No needs analysis report",
                description=(
                    "The Analysis phase is missing a completed needs "
                    "analysis report."
                ),
                location="Analysis Phase",
                suggested_fix=(
                    "Complete the Needs Analysis Wizard to generate a "
                    "comprehensive analysis report."
                ),
            ),
        ),
        ChecklistRule(
            rule_id="analysis.learner_profile",
            phase=AddiePhase.ANALYSIS,
            severity=Severity.WARNING,
            predicate=has_learner_profile,
            template=FindingTemplate(
                title="No learner profile defined",
                description=(
                    "A learner profile helps tailor content to the target "
                    "audience."
                ),
                location="Analysis Phase",
                suggested_fix=(
                    "Complete the audience analysis section in the Needs "
                    "Analysis Wizard."
                ),
            ),
        ),
        ChecklistRule(
            rule_id="analysis.constraints",
            phase=AddiePhase.ANALYSIS,
            severity=Severity.WARNING,
            predicate=has_constraints,
            template=FindingTemplate(
                title="Constraints not documented",
                description=(
                    "Timeline, budget, and technology constraints are not "
                    "documented."
                ),
                location="Analysis Phase",
                suggested_fix=(
                    "Document project constraints to guide design decisions."
                ),
            ),
        ),
        # --------------------------------------------------------------
        # Design
        # --------------------------------------------------------------
        ChecklistRule(
            rule_id="design.outline",
            phase=AddiePhase.DESIGN,
            severity=Severity.CRITICAL,
            predicate=has_outline,
            template=FindingTemplate(
                title="No course outline",
                description=(
                    "A course outline is required to structure the learning "
                    "experience."
                ),
                location="Design Phase",
                suggested_fix="Create a course outline using the Outline Builder.",
            ),
        ),
        ChecklistRule(
            rule_id="design.objectives",
            phase=AddiePhase.DESIGN,
            severity=Severity.CRITICAL,
            predicate=has_objectives,
            template=FindingTemplate(
                title="No learning objectives defined",
                description=(
                    "Learning objectives are essential for alignment of "
                    "content and assessments."
                ),
                location="Design Phase",
                suggested_fix=(
                    "Add learning objectives to each module using Bloom's "
                    "Taxonomy."
                ),
            ),
        ),
        ChecklistRule(
            rule_id="design.assessment_strategy",
            phase=AddiePhase.DESIGN,
            severity=Severity.WARNING,
            predicate=has_assessment_strategy,
            template=FindingTemplate(
                title="No assessment strategy",
                description="Assessment strategy is not defined for any module.",
                location="Design Phase",
                suggested_fix=(
                    "Define assessment strategies for each module in the "
                    "outline."
                ),
            ),
        ),
        # --------------------------------------------------------------
        # Development
        # --------------------------------------------------------------
        ChecklistRule(
            rule_id="development.design_documents",
            phase=AddiePhase.DEVELOPMENT,
            severity=Severity.CRITICAL,
            predicate=has_design_documents,
            template=FindingTemplate(
                title="No design documents created",
                description=(
                    "Design documents are required to develop actual course "
                    "content."
                ),
                location="Development Phase",
                suggested_fix=(
                    "Generate design documents for each module using the "
                    "Design Doc Generator."
                ),
            ),
        ),
        ChecklistRule(
            rule_id="development.coverage",
            phase=AddiePhase.DEVELOPMENT,
            severity=Severity.WARNING,
            predicate=has_enough_coverage,
            emit_when=has_design_documents,
            describe=describe_coverage,
            template=FindingTemplate(
                title="Insufficient content coverage",
                description="Not enough modules have design documents.",
                location="Development Phase",
                suggested_fix=(
                    "Create design documents for remaining modules to ensure "
                    "full coverage."
                ),
            ),
        ),
        # --------------------------------------------------------------
        # Implementation
        # --------------------------------------------------------------
        ChecklistRule(
            rule_id="implementation.facilitator_guide",
            phase=AddiePhase.IMPLEMENTATION,
            severity=Severity.INFO,
            predicate=has_facilitator_guide,
            template=FindingTemplate(
                title="No facilitator guide",
                description=(
                    "A facilitator guide helps instructors deliver the course "
                    "effectively."
                ),
                location="Implementation Phase",
                suggested_fix=(
                    "Create a facilitator guide design document for "
                    "instructor-led components."
                ),
            ),
        ),
        # --------------------------------------------------------------
        # Evaluation
        # --------------------------------------------------------------
        ChecklistRule(
            rule_id="evaluation.success_metrics",
            phase=AddiePhase.EVALUATION,
            severity=Severity.INFO,
            predicate=has_success_metrics,
            template=FindingTemplate(
                title="No success metrics defined",
                description=(
                    "Success metrics are needed to evaluate course "
                    "effectiveness."
                ),
                location="Evaluation Phase",
                suggested_fix=(
                    "Define success metrics in the needs analysis or "
                    "separately."
                ),
            ),
        ),
    ]
