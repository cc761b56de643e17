from __future__ import annotations

from typing import Protocol

from course_auditor.app.events.models import GapEvent


class GapEventEmitter(Protocol):
    """
    Sink for gap analysis events.

    emit() is called inline from the run; it must return quickly and
    must not raise.
    """

    def emit(self, event: GapEvent) -> None:
        ...


class NullEventEmitter:
    """
    Discards every event. Default when the coordinator has no listener.
    """

    def emit(self, event: GapEvent) -> None:
        return None
