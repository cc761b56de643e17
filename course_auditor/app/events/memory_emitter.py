from __future__ import annotations

import logging
from typing import List

from course_auditor.app.events.models import GapEvent, GapEventType
from course_auditor.app.events.emitter import GapEventEmitter

logger = logging.getLogger(__name__)


class MemoryEventEmitter(GapEventEmitter):
    """
    In-memory event recorder.

    Properties:
    - deterministic ordering
    - bounded (oldest events are dropped past max_events)
    - never raises into the caller
    """

    def __init__(self, max_events: int = 1000) -> None:
        self._events: List[GapEvent] = []
        self._max_events = max_events

    def emit(self, event: GapEvent) -> None:
        try:
            self._events.append(event)
            if len(self._events) > self._max_events:
                del self._events[0]
        except Exception as exc:
            # Fail-safe: never let observability break a run
            logger.debug("Dropped gap event %s: %s", event.event_type, exc)

    @property
    def events(self) -> List[GapEvent]:
        return list(self._events)

    def of_type(self, event_type: GapEventType) -> List[GapEvent]:
        return [e for e in self._events if e.event_type is event_type]

    def for_project(self, project_id: str) -> List[GapEvent]:
        return [e for e in self._events if e.project_id == project_id]

    def clear(self) -> None:
        self._events.clear()
