"""
Gap finding adapter.

Translates rule drafts into canonical FindingObject instances.

IMPORTANT:
- The adapter does NOT make judgments.
- The adapter ONLY assigns identity and initial resolution state.
- The adapter IS the authority for both finding_id and fingerprint.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List
from uuid import uuid4

from course_auditor.app.schemas.findings import FindingDraft
from course_auditor.app.schemas.findings import FindingObject as Finding
from course_auditor.app.utils.hashing import stable_suffix


class GapFindingAdapter:
    """
    A single adapter instance is reused across runs of one battery.
    """

    def __init__(self, *, battery: str, id_prefix: str = "GAP") -> None:
        self._battery = battery
        self._id_prefix = id_prefix

    def adapt_all(self, drafts: Iterable[FindingDraft]) -> List[Finding]:
        """
        Adapt drafts in order.

        finding_id is regenerated on every call (unique per run).

        fingerprint is derived ONLY from immutable facts:
        - battery name
        - rule_id
        - location
        - occurrence index among drafts sharing the above

        Wording, counts and execution order across rules MUST NOT affect
        the fingerprint.
        """
        occurrences: Counter = Counter()
        findings: List[Finding] = []

        for draft in drafts:
            key = (draft.rule_id, draft.location)
            occurrence = occurrences[key]
            occurrences[key] += 1

            fingerprint = stable_suffix(
                [
                    self._battery,
                    draft.rule_id,
                    draft.location,
                    str(occurrence),
                ],
                length=16,
            )

            findings.append(
                Finding(
                    finding_id=(
                        f"{self._id_prefix}-{draft.severity.value.upper()}-"
                        f"{uuid4().hex}"
                    ),
                    fingerprint=fingerprint,
                    rule_id=draft.rule_id,
                    category=draft.category,
                    phase=draft.phase,
                    severity=draft.severity,
                    title=draft.title,
                    description=draft.description,
                    location=draft.location,
                    suggested_fix=draft.suggested_fix,
                    resolved=False,
                )
            )

        return findings
