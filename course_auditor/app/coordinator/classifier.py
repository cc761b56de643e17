"""
Finding Classifier & Deduplicator.

Pure functions over a flat finding list:

- group_by_category:      display buckets, by the category tag each rule
                          assigns at emission time
- prioritize:             unresolved action items, most severe first
- deduplicate_by_message: first occurrence of each description wins
- summarize:              one-line report summary
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from course_auditor.app.schemas.findings import (
    FindingCategory,
    Severity,
)
from course_auditor.app.schemas.findings import FindingObject as Finding
from course_auditor.app.schemas.views import ActionItems, CategoryGroup
from course_auditor.app.checks.gap.base import plural


ALL_CLEAR_SUMMARY = "All components are in place. The course structure is complete."


def group_by_category(findings: Sequence[Finding]) -> List[CategoryGroup]:
    """
    Every category is present, in display order, even when empty.
    """
    buckets: Dict[FindingCategory, List[Finding]] = {
        category: [] for category in FindingCategory
    }
    for finding in findings:
        buckets[finding.category].append(finding)

    return [
        CategoryGroup(
            category=category,
            label=category.label,
            findings=items,
            unresolved_critical=_count_unresolved(items, Severity.CRITICAL),
            unresolved_warnings=_count_unresolved(items, Severity.WARNING),
        )
        for category, items in buckets.items()
    ]


def prioritize(
    findings: Sequence[Finding],
    limit: Optional[int] = None,
) -> ActionItems:
    """
    Unresolved findings ordered critical -> warning -> info -> pass.

    sorted() is stable, so report order is kept within a severity.
    """
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    unresolved = [f for f in findings if not f.resolved]
    ordered = sorted(unresolved, key=lambda f: f.severity.rank)

    if limit is not None:
        ordered = ordered[:limit]

    return ActionItems(items=ordered, total=len(unresolved))


def deduplicate_by_message(findings: Sequence[Finding]) -> List[Finding]:
    """
    First occurrence of each description wins; order is preserved.
    """
    seen = set()
    unique: List[Finding] = []
    for finding in findings:
        if finding.description in seen:
            continue
        seen.add(finding.description)
        unique.append(finding)
    return unique


def summarize(findings: Sequence[Finding]) -> str:
    if not findings:
        return ALL_CLEAR_SUMMARY

    total = len(findings)
    critical = sum(1 for f in findings if f.severity is Severity.CRITICAL)
    warnings = sum(1 for f in findings if f.severity is Severity.WARNING)
    info = sum(1 for f in findings if f.severity is Severity.INFO)

    return (
        f"Found {total} {plural(total, 'gap')}: {critical} critical, "
        f"{warnings} warnings, {info} informational."
    )


def _count_unresolved(findings: Sequence[Finding], severity: Severity) -> int:
    return sum(1 for f in findings if f.severity is severity and not f.resolved)
