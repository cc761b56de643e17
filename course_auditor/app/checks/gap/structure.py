"""
Structural checks.

    structure.course_goal          outline absent or goal empty
    structure.module_count         fewer than MIN_MODULES modules
    structure.module_lessons       module with fewer than
                                   MIN_LESSONS_PER_MODULE lessons
    structure.module_description   module without description
    structure.lesson_description   lesson without description
"""

from __future__ import annotations

from typing import List

from course_auditor.app.config import AuditorConfig
from course_auditor.app.checks.gap.base import OutlineRule, plural
from course_auditor.app.schemas.findings import (
    FindingCategory,
    FindingDraft,
    Severity,
)
from course_auditor.app.schemas.snapshot import ProjectSnapshot


RULE_COURSE_GOAL = "structure.course_goal"
RULE_MODULE_COUNT = "structure.module_count"
RULE_MODULE_LESSONS = "structure.module_lessons"
RULE_MODULE_DESCRIPTION = "structure.module_description"
RULE_LESSON_DESCRIPTION = "structure.lesson_description"

OUTLINE_LOCATION = "Course Outline"


def check_course_goal(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    if snapshot.outline is not None and snapshot.outline.course_goal.strip():
        return []

    return [
        FindingDraft(
            rule_id=RULE_COURSE_GOAL,
            category=FindingCategory.STRUCTURAL,
            severity=Severity.CRITICAL,
            title="No course goal set",
            description=(
                "A course goal provides direction for the entire learning "
                "experience."
            ),
            location=OUTLINE_LOCATION,
            suggested_fix=(
                "Define a clear course goal that describes the overall "
                "learning outcome."
            ),
        )
    ]


def check_module_description(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    return [
        FindingDraft(
            rule_id=RULE_MODULE_DESCRIPTION,
            category=FindingCategory.STRUCTURAL,
            severity=Severity.WARNING,
            title="Missing module description",
            description=f'Module "{module.title}" has no description.',
            location=module.location,
            suggested_fix=(
                "Add a description that explains what learners will gain "
                "from this module."
            ),
        )
        for module in snapshot.modules
        if not module.description.strip()
    ]


def check_lesson_description(snapshot: ProjectSnapshot) -> List[FindingDraft]:
    return [
        FindingDraft(
            rule_id=RULE_LESSON_DESCRIPTION,
            category=FindingCategory.STRUCTURAL,
            severity=Severity.WARNING,
            title="Missing lesson description",
            description=(
                f'Lesson "{lesson.title}" in "{module.title}" has no '
                "description."
            ),
            location=module.lesson_location(lesson),
            suggested_fix=(
                "Add a description explaining the purpose and content of the "
                "lesson."
            ),
        )
        for module in snapshot.modules
        for lesson in module.lessons
        if not lesson.description.strip()
    ]


def build_structure_rules(config: AuditorConfig) -> List[OutlineRule]:
    min_modules = config.MIN_MODULES
    min_lessons = config.MIN_LESSONS_PER_MODULE

    def check_module_count(snapshot: ProjectSnapshot) -> List[FindingDraft]:
        count = len(snapshot.modules)
        if count >= min_modules:
            return []

        return [
            FindingDraft(
                rule_id=RULE_MODULE_COUNT,
                category=FindingCategory.STRUCTURAL,
                severity=Severity.INFO,
                title=f"Course has fewer than {min_modules} modules",
                description=(
                    f"The course has only {count} {plural(count, 'module')}. "
                    "Consider if more structure is needed."
                ),
                location=OUTLINE_LOCATION,
                suggested_fix=(
                    "Ensure the course structure adequately covers all "
                    "required topics."
                ),
            )
        ]

    def check_module_lessons(snapshot: ProjectSnapshot) -> List[FindingDraft]:
        return [
            FindingDraft(
                rule_id=RULE_MODULE_LESSONS,
                category=FindingCategory.STRUCTURAL,
                severity=Severity.INFO,
                title=f"Module with fewer than {min_lessons} lessons",
                description=(
                    f'Module "{module.title}" has only {len(module.lessons)} '
                    f"{plural(len(module.lessons), 'lesson')}."
                ),
                location=module.location,
                suggested_fix=(
                    "Consider breaking down the module into more granular "
                    "lessons."
                ),
            )
            for module in snapshot.modules
            if len(module.lessons) < min_lessons
        ]

    return [
        OutlineRule(
            RULE_COURSE_GOAL,
            FindingCategory.STRUCTURAL,
            check_course_goal,
            requires_outline=False,
        ),
        OutlineRule(
            RULE_MODULE_COUNT,
            FindingCategory.STRUCTURAL,
            check_module_count,
        ),
        OutlineRule(
            RULE_MODULE_LESSONS,
            FindingCategory.STRUCTURAL,
            check_module_lessons,
        ),
        OutlineRule(
            RULE_MODULE_DESCRIPTION,
            FindingCategory.STRUCTURAL,
            check_module_description,
        ),
        OutlineRule(
            RULE_LESSON_DESCRIPTION,
            FindingCategory.STRUCTURAL,
            check_lesson_description,
        ),
    ]
