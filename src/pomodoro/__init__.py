from .service import (
    PhaseName,
    PhaseScheduler,
    PhaseStarted,
    SchedulerAction,
    SchedulerActionResult,
    SchedulerEvent,
    SchedulerListener,
    SchedulerSnapshot,
    SchedulerUpdate,
    format_remaining,
    phase_started_event,
)
from .ticks import ThreadTickSource, TickSource, TickSourceFactory

__all__ = [
    "PhaseName",
    "PhaseScheduler",
    "PhaseStarted",
    "SchedulerAction",
    "SchedulerActionResult",
    "SchedulerEvent",
    "SchedulerListener",
    "SchedulerSnapshot",
    "SchedulerUpdate",
    "ThreadTickSource",
    "TickSource",
    "TickSourceFactory",
    "format_remaining",
    "phase_started_event",
]
