"""Web UI websocket event and message constants."""

from __future__ import annotations

# Outbound websocket event types
EVENT_HELLO = "hello"
EVENT_SCHEDULER = "scheduler"
EVENT_PHASE_STARTED = "phase_started"
EVENT_NOTIFICATION = "notification"
EVENT_COMMAND_RESULT = "command_result"
EVENT_ERROR = "error"

# Inbound websocket message types
MESSAGE_COMMAND = "command"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_SCHEDULER,
        EVENT_PHASE_STARTED,
        EVENT_NOTIFICATION,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_PHASE_STARTED,
    EVENT_NOTIFICATION,
    EVENT_SCHEDULER,
)
