"""
Project data sources.

The engine never owns project data. It reads it through a ProjectSource,
which fronts the three upstream collaborators (needs analysis, course
outline, design documents).

InMemoryProjectSource is the reference implementation used by the HTTP
entrypoint and by tests.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Protocol

from course_auditor.app.schemas.snapshot import (
    AnalysisState,
    CourseOutline,
    DesignDocument,
)


class ProjectSource(Protocol):
    """
    Read interface over the upstream collaborators.

    Implementations must return the current state; absent data is
    returned as an empty value, never raised.
    """

    def get_analysis_state(self, project_id: str) -> AnalysisState:
        ...

    def get_outline(self, project_id: str) -> Optional[CourseOutline]:
        ...

    def get_design_documents(self, project_id: str) -> List[DesignDocument]:
        ...


class InMemoryProjectSource:
    """
    Process-local project data, keyed by project id.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._analysis: Dict[str, AnalysisState] = {}
        self._outlines: Dict[str, CourseOutline] = {}
        self._documents: Dict[str, List[DesignDocument]] = {}

    # ------------------------------------------------------------------
    # ProjectSource
    # ------------------------------------------------------------------

    def get_analysis_state(self, project_id: str) -> AnalysisState:
        with self._lock:
            return self._analysis.get(project_id, AnalysisState())

    def get_outline(self, project_id: str) -> Optional[CourseOutline]:
        with self._lock:
            return self._outlines.get(project_id)

    def get_design_documents(self, project_id: str) -> List[DesignDocument]:
        with self._lock:
            return list(self._documents.get(project_id, []))

    # ------------------------------------------------------------------
    # Collaborator writes
    # ------------------------------------------------------------------

    def put_project(
        self,
        project_id: str,
        *,
        analysis: Optional[AnalysisState] = None,
        outline: Optional[CourseOutline] = None,
        design_documents: Optional[List[DesignDocument]] = None,
    ) -> None:
        """
        Replace all stored data for a project.
        """
        with self._lock:
            self._analysis[project_id] = analysis or AnalysisState()
            if outline is None:
                self._outlines.pop(project_id, None)
            else:
                self._outlines[project_id] = outline
            self._documents[project_id] = list(design_documents or [])

    def remove_project(self, project_id: str) -> None:
        with self._lock:
            self._analysis.pop(project_id, None)
            self._outlines.pop(project_id, None)
            self._documents.pop(project_id, None)

    def has_project(self, project_id: str) -> bool:
        with self._lock:
            return project_id in self._analysis
