"""
Project Snapshot Reader.

Assembles the read-only ProjectSnapshot a check battery runs against.
No caching: every call is a fresh point-in-time view.
"""

from __future__ import annotations

import logging

from course_auditor.app.schemas.snapshot import ProjectSnapshot
from course_auditor.app.snapshot.source import ProjectSource

logger = logging.getLogger(__name__)


class SnapshotReader:
    def __init__(self, source: ProjectSource) -> None:
        self._source = source

    def read(self, project_id: str) -> ProjectSnapshot:
        snapshot = ProjectSnapshot(
            project_id=project_id,
            analysis=self._source.get_analysis_state(project_id),
            outline=self._source.get_outline(project_id),
            design_documents=self._source.get_design_documents(project_id),
        )

        logger.debug(
            "Snapshot for project %s: analysis=%s modules=%d documents=%d",
            project_id,
            snapshot.analysis.status.value,
            len(snapshot.modules),
            len(snapshot.design_documents),
        )

        return snapshot
