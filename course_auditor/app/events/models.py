from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------------------------------------------------
# Event types
# ----------------------------------------------------------------------
class GapEventType(str, Enum):
    """
    Lifecycle points of a gap analysis run and of a stored report.

    Adding a member is a contract change for every listener.
    """

    # Battery run
    ANALYSIS_STARTED = "analysis_started"
    RULE_EVALUATED = "rule_evaluated"
    ANALYSIS_COMPLETED = "analysis_completed"
    ANALYSIS_FAILED = "analysis_failed"

    # Stored report
    FINDING_RESOLVED = "finding_resolved"
    PROJECT_DISCARDED = "project_discarded"


# ----------------------------------------------------------------------
# Event
# ----------------------------------------------------------------------
class GapEvent(BaseModel):
    """
    Record of something the coordinator or evaluator did for a project.

    Listeners read events for progress display only. Reports and scores
    never depend on them.
    """

    event_id: UUID = Field(default_factory=uuid4)
    project_id: str = Field(..., description="Project the event belongs to")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    event_type: GapEventType

    # battery, rule_id, score, counts ...
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True, extra="forbid")
