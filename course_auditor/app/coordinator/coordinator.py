"""
Gap analysis coordinator.

IMPORTANT:
The coordinator is a DUMB AUTHORITY.

It MUST NOT:
- inspect snapshot content
- interpret findings
- decide severities or categories

Its sole responsibilities are:
- reading the snapshot
- running the evaluator and the scorer over the same snapshot
- assembling and storing the GapReport
- forwarding resolution requests to the store
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from course_auditor.app.config import AuditorConfig
from course_auditor.app.checks.gap.battery import (
    GAP_ANALYSIS,
    CheckBattery,
    build_gap_analysis_battery,
)
from course_auditor.app.coordinator.classifier import (
    deduplicate_by_message,
    group_by_category,
    prioritize,
    summarize,
)
from course_auditor.app.coordinator.evaluator import RuleEvaluator
from course_auditor.app.coordinator.finding_adapter import GapFindingAdapter
from course_auditor.app.coordinator.scorer import CompletenessScorer
from course_auditor.app.schemas.findings import FindingObject as Finding
from course_auditor.app.schemas.report import GapReport
from course_auditor.app.schemas.views import ActionItems, CategoryGroup
from course_auditor.app.snapshot.reader import SnapshotReader
from course_auditor.app.snapshot.source import ProjectSource
from course_auditor.app.store.report_store import ReportStore

# Events (observational only)
from course_auditor.app.events import (
    GapEvent,
    GapEventType,
    GapEventEmitter,
    NullEventEmitter,
)

logger = logging.getLogger(__name__)


class UnknownBatteryError(KeyError):
    """Raised when a run is requested for a battery that is not registered."""


class GapAnalysisCoordinator:
    """
    Composition root exposed to the display layer.

    Execution order of a run:
        1. Snapshot read
        2. Rule evaluation (ordered battery)
        3. Completeness scoring (same snapshot, same checklist objects)
        4. Finding identity assignment
        5. Report assembly and store replacement
    """

    def __init__(
        self,
        config: AuditorConfig,
        source: ProjectSource,
        store: Optional[ReportStore] = None,
        batteries: Optional[Dict[str, CheckBattery]] = None,
        emitter: Optional[GapEventEmitter] = None,
    ) -> None:
        """
        Direct constructor.

        Intended for tests and explicit wiring. When batteries is None the
        gap analysis battery is built from config.
        """
        self._config = config
        self._reader = SnapshotReader(source)
        self._source = source
        self._store = (
            store
            if store is not None
            else ReportStore(resolution_policy=config.RESOLUTION_POLICY)
        )
        self._batteries = (
            dict(batteries)
            if batteries is not None
            else {GAP_ANALYSIS: build_gap_analysis_battery(config)}
        )
        self._emitter = emitter or NullEventEmitter()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def store(self) -> ReportStore:
        return self._store

    def run_analysis(
        self,
        project_id: str,
        battery: str = GAP_ANALYSIS,
    ) -> GapReport:
        """
        Evaluate the battery against the current project snapshot and
        replace the stored report.
        """
        check_battery = self._batteries.get(battery)
        if check_battery is None:
            raise UnknownBatteryError(battery)

        self._emitter.emit(
            GapEvent(
                project_id=project_id,
                event_type=GapEventType.ANALYSIS_STARTED,
                details={"battery": battery},
            )
        )

        try:
            snapshot = self._reader.read(project_id)

            drafts = RuleEvaluator(check_battery).evaluate(
                snapshot, emitter=self._emitter
            )
            completeness = CompletenessScorer(check_battery.checklist).score(
                snapshot
            )
            findings = GapFindingAdapter(battery=battery).adapt_all(drafts)

            report = self._store.save(
                GapReport(
                    project_id=project_id,
                    battery=battery,
                    score=completeness.score,
                    findings=findings,
                    summary=summarize(findings),
                    completeness=completeness,
                )
            )

        except Exception as exc:
            self._emitter.emit(
                GapEvent(
                    project_id=project_id,
                    event_type=GapEventType.ANALYSIS_FAILED,
                    details={
                        "battery": battery,
                        "error": str(exc),
                        "exception_type": type(exc).__name__,
                    },
                )
            )
            raise

        logger.info(
            "Gap analysis %s for project %s: score=%d findings=%d",
            battery,
            project_id,
            report.score,
            len(report.findings),
        )

        self._emitter.emit(
            GapEvent(
                project_id=project_id,
                event_type=GapEventType.ANALYSIS_COMPLETED,
                details={
                    "battery": battery,
                    "score": report.score,
                    "findings_count": len(report.findings),
                    "summary": report.summary,
                },
            )
        )

        return report

    def get_report(
        self,
        project_id: str,
        battery: str = GAP_ANALYSIS,
    ) -> Optional[GapReport]:
        return self._store.get(project_id, battery)

    def resolve_finding(
        self,
        project_id: str,
        battery: str,
        finding_id: str,
    ) -> None:
        """
        Mark a finding resolved without re-running the battery.

        A finding id from an earlier run is a silent no-op.
        """
        if self._store.resolve(project_id, battery, finding_id):
            self._emitter.emit(
                GapEvent(
                    project_id=project_id,
                    event_type=GapEventType.FINDING_RESOLVED,
                    details={"battery": battery, "finding_id": finding_id},
                )
            )

    def discard_project(self, project_id: str) -> None:
        """
        Project teardown: drop its reports and, when the source supports
        it, its collaborator data.
        """
        removed = self._store.discard_project(project_id)

        remove_project = getattr(self._source, "remove_project", None)
        if callable(remove_project):
            remove_project(project_id)

        self._emitter.emit(
            GapEvent(
                project_id=project_id,
                event_type=GapEventType.PROJECT_DISCARDED,
                details={"reports_removed": removed},
            )
        )

    # ------------------------------------------------------------------
    # Display views (DERIVED, READ-ONLY)
    # ------------------------------------------------------------------

    def action_items(
        self,
        project_id: str,
        battery: str = GAP_ANALYSIS,
        limit: Optional[int] = None,
    ) -> Optional[ActionItems]:
        report = self.get_report(project_id, battery)
        if report is None:
            return None
        return prioritize(
            report.findings,
            limit=self._config.ACTION_ITEM_LIMIT if limit is None else limit,
        )

    def grouped_findings(
        self,
        project_id: str,
        battery: str = GAP_ANALYSIS,
    ) -> Optional[List[CategoryGroup]]:
        report = self.get_report(project_id, battery)
        if report is None:
            return None
        return group_by_category(report.findings)

    def summary_findings(
        self,
        project_id: str,
        battery: str = GAP_ANALYSIS,
    ) -> Optional[List[Finding]]:
        """
        Unresolved findings with repeated messages collapsed, in report
        order. Per-module rules that produce identical text show once.
        """
        report = self.get_report(project_id, battery)
        if report is None:
            return None
        return deduplicate_by_message(report.unresolved)
