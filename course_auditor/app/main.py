"""
FastAPI entrypoint for the course auditor.

This module defines a thin HTTP display-layer adapter over the gap
analysis coordinator. It accepts collaborator data for a project, runs
check batteries on demand, and exposes the stored reports, their derived
views, and finding resolution.

No evaluation logic lives here.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from starlette.responses import Response

from course_auditor.app.config import AuditorConfig
from course_auditor.app.coordinator.coordinator import (
    GapAnalysisCoordinator,
    UnknownBatteryError,
)
from course_auditor.app.events import GapEvent, MemoryEventEmitter
from course_auditor.app.schemas.findings import FindingObject as Finding
from course_auditor.app.schemas.report import GapReport
from course_auditor.app.schemas.snapshot import ProjectDataPayload
from course_auditor.app.schemas.views import ActionItems, CategoryGroup
from course_auditor.app.snapshot.source import InMemoryProjectSource

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Presentation helpers (presentation-only)
# ---------------------------------------------------------------------------

def pretty_json(data: Any) -> str:
    """
    Pretty-print JSON for human-readable output.
    """
    return json.dumps(
        data,
        ensure_ascii=False,
        allow_nan=False,
        indent=2,
        separators=(", ", ": "),
    )


class PrettyJSONResponse(Response):
    """
    Pretty-printed JSON response for human-readable console output.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return pretty_json(content).encode("utf-8")


# ---------------------------------------------------------------------------
# Application setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Course Auditor",
    description="Completeness and gap analysis for course development projects",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Startup / Shutdown
# ---------------------------------------------------------------------------

@app.on_event("startup")
def startup_event() -> None:
    """
    Application startup hook.

    Configuration is loaded once and treated as immutable for the lifetime
    of the process.
    """
    config = AuditorConfig.from_env()
    logging.basicConfig(level=config.LOG_LEVEL)

    source = InMemoryProjectSource()
    events = MemoryEventEmitter()

    app.state.source = source
    app.state.events = events
    app.state.coordinator = GapAnalysisCoordinator(
        config=config,
        source=source,
        emitter=events,
    )

    logger.info(
        "Course auditor started (resolution_policy=%s)",
        config.RESOLUTION_POLICY.value,
    )


@app.on_event("shutdown")
def shutdown_event() -> None:
    """Application shutdown hook."""
    coordinator: GapAnalysisCoordinator = app.state.coordinator
    coordinator.store.clear()


def _coordinator() -> GapAnalysisCoordinator:
    return app.state.coordinator


def _require_report(project_id: str, battery: str) -> GapReport:
    report = _coordinator().get_report(project_id, battery)
    if report is None:
        raise HTTPException(
            status_code=404,
            detail=f"No {battery} report for project {project_id}",
        )
    return report


# ---------------------------------------------------------------------------
# Project data (collaborator ingress)
# ---------------------------------------------------------------------------

@app.put(
    "/projects/{project_id}/snapshot",
    status_code=204,
    summary="Replace the collaborator data of a project",
)
def put_project_data(project_id: str, payload: ProjectDataPayload) -> Response:
    source: InMemoryProjectSource = app.state.source
    source.put_project(
        project_id,
        analysis=payload.analysis,
        outline=payload.outline,
        design_documents=payload.design_documents,
    )
    return Response(status_code=204)


@app.delete(
    "/projects/{project_id}",
    status_code=204,
    summary="Discard a project and every report it owns",
)
def delete_project(project_id: str) -> Response:
    _coordinator().discard_project(project_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------

@app.post(
    "/projects/{project_id}/analysis",
    response_model=GapReport,
    response_class=PrettyJSONResponse,
    summary="Run a check battery against the current project data",
)
def run_analysis(project_id: str, battery: str = "gap-analysis") -> GapReport:
    try:
        return _coordinator().run_analysis(project_id, battery)
    except UnknownBatteryError as exc:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown check battery: {battery}",
        ) from exc


@app.get(
    "/projects/{project_id}/reports/{battery}",
    response_model=GapReport,
    response_class=PrettyJSONResponse,
    summary="Fetch the stored report",
)
def get_report(project_id: str, battery: str) -> GapReport:
    return _require_report(project_id, battery)


@app.post(
    "/projects/{project_id}/reports/{battery}/findings/{finding_id}/resolve",
    status_code=204,
    summary="Mark a single finding resolved",
)
def resolve_finding(project_id: str, battery: str, finding_id: str) -> Response:
    """
    Resolution of an unknown finding id is a silent no-op.
    """
    _coordinator().resolve_finding(project_id, battery, finding_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

@app.get(
    "/projects/{project_id}/reports/{battery}/action-items",
    response_model=ActionItems,
    summary="Unresolved findings, most severe first",
)
def get_action_items(
    project_id: str,
    battery: str,
    limit: Optional[int] = Query(None, ge=1),
) -> ActionItems:
    _require_report(project_id, battery)
    return _coordinator().action_items(project_id, battery, limit=limit)


@app.get(
    "/projects/{project_id}/reports/{battery}/categories",
    response_model=List[CategoryGroup],
    summary="Findings grouped by display category",
)
def get_categories(project_id: str, battery: str) -> List[CategoryGroup]:
    _require_report(project_id, battery)
    return _coordinator().grouped_findings(project_id, battery)


@app.get(
    "/projects/{project_id}/reports/{battery}/summary",
    response_model=List[Finding],
    summary="Unresolved findings with repeated messages collapsed",
)
def get_summary_findings(project_id: str, battery: str) -> List[Finding]:
    _require_report(project_id, battery)
    return _coordinator().summary_findings(project_id, battery)


# ---------------------------------------------------------------------------
# Events (observational)
# ---------------------------------------------------------------------------

@app.get(
    "/projects/{project_id}/events",
    response_model=List[GapEvent],
    summary="Recorded analysis events for a project, oldest first",
)
def get_project_events(project_id: str) -> List[GapEvent]:
    events: MemoryEventEmitter = app.state.events
    return events.for_project(project_id)


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------

@app.get(
    "/health",
    summary="Service health check",
)
def health_check() -> JSONResponse:
    """Simple health check endpoint."""
    return JSONResponse(
        content={
            "status": "ok",
            "service": "course-auditor",
        }
    )
