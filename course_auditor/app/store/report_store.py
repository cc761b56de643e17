"""
Report Store & Resolution Tracker.

Holds the most recent GapReport per (project id, battery).

State machine (per project + battery):

    no-report --save--> report-present
    report-present --save--> report-present   (wholesale replacement)
    finding: unresolved --resolve--> resolved  (one-way)

Reports are frozen; resolution swaps in a model_copy of the report with
a single finding updated.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Tuple

from course_auditor.app.config import ResolutionPolicy
from course_auditor.app.schemas.report import GapReport

logger = logging.getLogger(__name__)


ReportKey = Tuple[str, str]


class ReportStore:
    """
    Process-local report map.

    The lock only serializes writers: the store reflects the most recent
    completed save or resolve call, nothing stronger.
    """

    def __init__(
        self,
        resolution_policy: ResolutionPolicy = ResolutionPolicy.RESET,
    ) -> None:
        self._policy = resolution_policy
        self._reports: Dict[ReportKey, GapReport] = {}
        self._lock = threading.Lock()

    @property
    def resolution_policy(self) -> ResolutionPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, project_id: str, battery: str) -> Optional[GapReport]:
        with self._lock:
            return self._reports.get((project_id, battery))

    def batteries_for(self, project_id: str) -> List[str]:
        with self._lock:
            return sorted(b for (p, b) in self._reports if p == project_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, report: GapReport) -> GapReport:
        """
        Replace any stored report for the same project and battery.

        Under CARRY_FORWARD, findings whose fingerprint was resolved in the
        replaced report are stored as resolved. Returns the stored report.
        """
        key = (report.project_id, report.battery)

        with self._lock:
            previous = self._reports.get(key)

            if (
                self._policy is ResolutionPolicy.CARRY_FORWARD
                and previous is not None
            ):
                report = _carry_forward(previous, report)

            self._reports[key] = report

        return report

    def resolve(self, project_id: str, battery: str, finding_id: str) -> bool:
        """
        Mark one finding resolved in the currently stored report.

        Unknown project, battery or finding id is a silent no-op (ids are
        regenerated by every run). Returns True when a finding changed.
        """
        key = (project_id, battery)

        with self._lock:
            report = self._reports.get(key)
            if report is None:
                logger.warning(
                    "Ignoring resolve for %s: no %s report for project %s",
                    finding_id,
                    battery,
                    project_id,
                )
                return False

            target = report.find(finding_id)
            if target is None:
                logger.debug(
                    "Ignoring resolve for unknown finding %s in %s/%s",
                    finding_id,
                    project_id,
                    battery,
                )
                return False

            if target.resolved:
                return False

            self._reports[key] = report.model_copy(
                update={
                    "findings": [
                        (
                            f.model_copy(update={"resolved": True})
                            if f.finding_id == finding_id
                            else f
                        )
                        for f in report.findings
                    ]
                }
            )
            return True

    def discard_project(self, project_id: str) -> int:
        """
        Destroy every report owned by the project. Returns the count removed.
        """
        with self._lock:
            keys = [k for k in self._reports if k[0] == project_id]
            for key in keys:
                del self._reports[key]
            return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._reports.clear()


def _carry_forward(previous: GapReport, report: GapReport) -> GapReport:
    resolved = {f.fingerprint for f in previous.findings if f.resolved}
    if not resolved:
        return report

    return report.model_copy(
        update={
            "findings": [
                (
                    f.model_copy(update={"resolved": True})
                    if f.fingerprint in resolved
                    else f
                )
                for f in report.findings
            ]
        }
    )
