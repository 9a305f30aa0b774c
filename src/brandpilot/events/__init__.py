"""Event system: bus and event types for the run lifecycle."""

from brandpilot.events.bus import EventBus
from brandpilot.events.types import (
    NodeCancelled,
    NodeCompleted,
    NodeFailed,
    NodeOutput,
    NodeSkipped,
    NodeStarted,
    RunCompleted,
    RunFailed,
    RunResumed,
    RunStarted,
    RunStopped,
    RunUpdated,
)

__all__ = [
    "EventBus",
    "NodeCancelled",
    "NodeCompleted",
    "NodeFailed",
    "NodeOutput",
    "NodeSkipped",
    "NodeStarted",
    "RunCompleted",
    "RunFailed",
    "RunResumed",
    "RunStarted",
    "RunStopped",
    "RunUpdated",
]
