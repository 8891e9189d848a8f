"""Canonical scheduler command names and the aliases accepted from transports."""

from __future__ import annotations

from typing import Optional

from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_RESUME,
    ACTION_SKIP_BREAK,
    ACTION_START_FOCUS,
)

# Notification action identifiers, kept compatible with the broadcast names
# delivered by platform notification buttons.
NOTIFICATION_ACTION_PAUSE = "PAUSE_TIMER"
NOTIFICATION_ACTION_SKIP_BREAK = "SKIP_BREAK"

COMMAND_ALIASES: dict[str, str] = {
    ACTION_START_FOCUS: ACTION_START_FOCUS,
    "start": ACTION_START_FOCUS,
    "focus": ACTION_START_FOCUS,
    ACTION_PAUSE: ACTION_PAUSE,
    "pause_timer": ACTION_PAUSE,
    ACTION_RESUME: ACTION_RESUME,
    "continue": ACTION_RESUME,
    ACTION_RESET: ACTION_RESET,
    ACTION_SKIP_BREAK: ACTION_SKIP_BREAK,
    "skip": ACTION_SKIP_BREAK,
}


def normalize_command(raw: object) -> Optional[str]:
    """Return the canonical command for a transport-level name, if known."""
    if not isinstance(raw, str):
        return None
    key = raw.strip().lower().replace("-", "_").replace(" ", "_")
    if not key:
        return None
    return COMMAND_ALIASES.get(key)
