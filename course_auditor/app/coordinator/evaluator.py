"""
Rule Evaluator.

Runs a check battery against a snapshot and collects findings.

The evaluator:
- preserves battery order (no sorting, no filtering)
- never catches rule errors: a rule that raises is a bug
- never mutates the snapshot
"""

from __future__ import annotations

import logging
from typing import List, Optional

from course_auditor.app.checks.gap.battery import CheckBattery
from course_auditor.app.schemas.findings import FindingDraft
from course_auditor.app.schemas.snapshot import ProjectSnapshot
from course_auditor.app.events import (
    GapEvent,
    GapEventType,
    GapEventEmitter,
    NullEventEmitter,
)

logger = logging.getLogger(__name__)


class RuleEvaluator:
    def __init__(self, battery: CheckBattery) -> None:
        self._battery = battery

    @property
    def battery(self) -> CheckBattery:
        return self._battery

    def evaluate(
        self,
        snapshot: ProjectSnapshot,
        emitter: Optional[GapEventEmitter] = None,
    ) -> List[FindingDraft]:
        emitter = emitter or NullEventEmitter()
        drafts: List[FindingDraft] = []

        for rule in self._battery.rules:
            produced = rule.evaluate(snapshot)
            drafts.extend(produced)

            logger.debug(
                "Rule %s produced %d finding(s) for project %s",
                rule.rule_id,
                len(produced),
                snapshot.project_id,
            )

            emitter.emit(
                GapEvent(
                    project_id=snapshot.project_id,
                    event_type=GapEventType.RULE_EVALUATED,
                    details={
                        "battery": self._battery.name,
                        "rule_id": rule.rule_id,
                        "findings_count": len(produced),
                    },
                )
            )

        return drafts
