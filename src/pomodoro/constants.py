"""Phase, action, reason, and notification constants used by the scheduler."""

from __future__ import annotations

PHASE_FOCUS = "focus"
PHASE_BREAK = "break"

FOCUS_DURATION_SECONDS = 25 * 60
BREAK_DURATION_SECONDS = 5 * 60

PHASE_DURATIONS: dict[str, int] = {
    PHASE_FOCUS: FOCUS_DURATION_SECONDS,
    PHASE_BREAK: BREAK_DURATION_SECONDS,
}

NEXT_PHASE: dict[str, str] = {
    PHASE_FOCUS: PHASE_BREAK,
    PHASE_BREAK: PHASE_FOCUS,
}

TICK_INTERVAL_SECONDS = 1.0

ACTION_START_FOCUS = "start_focus"
ACTION_PAUSE = "pause"
ACTION_RESUME = "resume"
ACTION_RESET = "reset"
ACTION_SKIP_BREAK = "skip_break"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_EXPIRED = "expired"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESUMED = "resumed"
REASON_RESET = "reset"
REASON_SKIPPED = "skipped"
REASON_NOT_RUNNING = "not_running"
REASON_NOT_PAUSED = "not_paused"
REASON_UNSUPPORTED_ACTION = "unsupported_action"
REASON_TICK = "tick"
REASON_EXPIRED = "expired"
REASON_STARTUP = "startup"

PHASE_STARTED_TEXT: dict[str, tuple[str, str]] = {
    PHASE_FOCUS: (
        "Inicio de Concentración",
        "La sesión de concentración ha comenzado.",
    ),
    PHASE_BREAK: (
        "Inicio de Descanso",
        "La sesión de descanso ha comenzado.",
    ),
}
