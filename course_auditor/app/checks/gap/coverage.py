"""
Content coverage checks.

    content.module_documents    module has no design documents
    content.lesson_duration     lesson has a zero-minute duration
    content.lesson_activities   lesson has no activities
"""

from __future__ import annotations

from typing import List

from course_auditor.app.checks.gap.base import OutlineRule
from course_auditor.app.schemas.findings import (
    FindingCategory,
    FindingDraft,
    Severity,
)
from course_auditor.app.schemas.snapshot import ProjectSnapshot


RULE_MODULE_DOCUMENTS = "content.module_documents"
RULE_LESSON_DURATION = "content.lesson_duration"
RULE_LESSON_ACTIVITIES = "content.lesson_activities"


def check_module_documents(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    return [
        FindingDraft(
            rule_id=RULE_MODULE_DOCUMENTS,
            category=FindingCategory.CONTENT,
            severity=Severity.CRITICAL,
            title="Module without design documents",
            description=f'Module "{module.title}" has no design documents developed.',
            location=module.location,
            suggested_fix=(
                "Create design documents to develop lesson content for this "
                "module."
            ),
        )
        for module in snapshot.modules
        if not snapshot.documents_for(module)
    ]


def check_lesson_duration(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    return [
        FindingDraft(
            rule_id=RULE_LESSON_DURATION,
            category=FindingCategory.CONTENT,
            severity=Severity.INFO,
            title="Lesson with zero duration",
            description=(
                f'Lesson "{lesson.title}" in "{module.title}" has 0-minute '
                "duration."
            ),
            location=module.lesson_location(lesson),
            suggested_fix="Set an estimated duration for accurate course planning.",
        )
        for module in snapshot.modules
        for lesson in module.lessons
        if lesson.duration == 0
    ]


def check_lesson_activities(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    return [
        FindingDraft(
            rule_id=RULE_LESSON_ACTIVITIES,
            category=FindingCategory.CONTENT,
            severity=Severity.WARNING,
            title="Lesson without activities",
            description=(
                f'Lesson "{lesson.title}" in "{module.title}" has no '
                "activities defined."
            ),
            location=module.lesson_location(lesson),
            suggested_fix="Add at least one learning activity to engage learners.",
        )
        for module in snapshot.modules
        for lesson in module.lessons
        if not lesson.activities
    ]


def build_coverage_rules() -> List[OutlineRule]:
    return [
        OutlineRule(
            RULE_MODULE_DOCUMENTS,
            FindingCategory.CONTENT,
            check_module_documents,
        ),
        OutlineRule(
            RULE_LESSON_DURATION,
            FindingCategory.CONTENT,
            check_lesson_duration,
        ),
        OutlineRule(
            RULE_LESSON_ACTIVITIES,
            FindingCategory.CONTENT,
            check_lesson_activities,
        ),
    ]
