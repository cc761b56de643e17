from .models import GapEvent, GapEventType
from .emitter import GapEventEmitter, NullEventEmitter
from .memory_emitter import MemoryEventEmitter

__all__ = [
    "GapEvent",
    "GapEventType",
    "GapEventEmitter",
    "NullEventEmitter",
    "MemoryEventEmitter",
]
