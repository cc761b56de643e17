"""
Project snapshot schemas.

Defines the read-only, point-in-time view of a course project that check
batteries evaluate. The structures mirror the data exposed by the three
upstream collaborators:

- needs-analysis wizard (status + optional report)
- course outline (modules -> lessons / objectives)
- design document generator (documents tagged by module and format)

All models are frozen. The engine MUST NOT mutate a snapshot.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


_FROZEN = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class AnalysisStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class BloomLevel(str, Enum):
    """Cognitive level of a learning objective (Bloom's taxonomy)."""

    REMEMBER = "remember"
    UNDERSTAND = "understand"
    APPLY = "apply"
    ANALYZE = "analyze"
    EVALUATE = "evaluate"
    CREATE = "create"


class DesignDocFormat(str, Enum):
    """
    Delivery format of a generated design document.

    FACILITATOR_GUIDE denotes the instructor-facing guide checked by the
    implementation phase.
    """

    ELEARNING = "elearning"
    ILT = "ilt"
    VILT = "vilt"
    MICROLEARNING = "microlearning"
    VIDEO_SCRIPT = "video-script"
    JOB_AID = "job-aid"
    PARTICIPANT_GUIDE = "participant-guide"
    FACILITATOR_GUIDE = "facilitator-guide"


# ---------------------------------------------------------------------------
# Needs analysis
# ---------------------------------------------------------------------------


class NeedsAnalysisReport(BaseModel):
    """
    Structured output of a completed needs analysis.

    Sections are free-form dictionaries owned by the wizard; the engine
    only checks their presence.
    """

    learner_profile: Optional[Dict[str, Any]] = None
    constraints: Optional[Dict[str, Any]] = None
    success_metrics: List[str] = Field(default_factory=list)

    model_config = _FROZEN


class AnalysisState(BaseModel):
    status: AnalysisStatus = AnalysisStatus.NOT_STARTED
    report: Optional[NeedsAnalysisReport] = None

    model_config = _FROZEN

    @property
    def completed_report(self) -> Optional[NeedsAnalysisReport]:
        """
        The report, only if the wizard reached completion.
        """
        if self.status is AnalysisStatus.COMPLETED:
            return self.report
        return None


# ---------------------------------------------------------------------------
# Course outline
# ---------------------------------------------------------------------------


class LearningObjective(BaseModel):
    id: str
    text: str
    bloom_level: BloomLevel = BloomLevel.UNDERSTAND
    assessment_aligned: bool = False

    model_config = _FROZEN


class Lesson(BaseModel):
    id: str
    title: str
    description: str = ""
    duration: int = Field(0, ge=0, description="Estimated duration in minutes")
    activities: List[str] = Field(default_factory=list)
    assessment_type: Optional[str] = None

    model_config = _FROZEN


class Module(BaseModel):
    id: str
    title: str
    description: str = ""
    assessment_strategy: str = ""
    lessons: List[Lesson] = Field(default_factory=list)
    objectives: List[LearningObjective] = Field(default_factory=list)

    model_config = _FROZEN

    @property
    def location(self) -> str:
        return f"Module: {self.title}"

    def lesson_location(self, lesson: Lesson) -> str:
        return f"Module: {self.title} > Lesson: {lesson.title}"


class CourseOutline(BaseModel):
    course_goal: str = ""
    modules: List[Module] = Field(default_factory=list)

    model_config = _FROZEN


# ---------------------------------------------------------------------------
# Design documents
# ---------------------------------------------------------------------------


class DesignDocument(BaseModel):
    id: str
    module_id: str
    format: DesignDocFormat
    title: str = ""

    model_config = _FROZEN


# ---------------------------------------------------------------------------
# Snapshot (PUBLIC, READ-ONLY)
# ---------------------------------------------------------------------------


class ProjectSnapshot(BaseModel):
    """
    Read-only point-in-time view of a project.

    No consistency guarantee is made if the underlying artifacts change
    after the snapshot was taken.
    """

    project_id: str
    analysis: AnalysisState = Field(default_factory=AnalysisState)
    outline: Optional[CourseOutline] = None
    design_documents: List[DesignDocument] = Field(default_factory=list)
    taken_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    model_config = _FROZEN

    @property
    def modules(self) -> List[Module]:
        return list(self.outline.modules) if self.outline else []

    def documents_for(self, module: Module) -> List[DesignDocument]:
        return [d for d in self.design_documents if d.module_id == module.id]


# ---------------------------------------------------------------------------
# Collaborator payload (HTTP ingress)
# ---------------------------------------------------------------------------


class ProjectDataPayload(BaseModel):
    """
    Collaborator data pushed by the authoring tool for one project.
    """

    analysis: AnalysisState = Field(default_factory=AnalysisState)
    outline: Optional[CourseOutline] = None
    design_documents: List[DesignDocument] = Field(default_factory=list)

    model_config = _FROZEN
