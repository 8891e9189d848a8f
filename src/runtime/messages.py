"""Spanish status text builders for scheduler snapshots and rejected commands."""

from __future__ import annotations

from pomodoro import SchedulerSnapshot
from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_RESUME,
    PHASE_BREAK,
    PHASE_FOCUS,
    REASON_NOT_PAUSED,
    REASON_NOT_RUNNING,
    REASON_UNSUPPORTED_ACTION,
)

PHASE_LABELS: dict[str, str] = {
    PHASE_FOCUS: "Concentración",
    PHASE_BREAK: "Descanso",
}

PHASE_SUMMARY_TEXT: dict[str, str] = {
    PHASE_FOCUS: "Sesión de concentración",
    PHASE_BREAK: "Tiempo de descanso",
}


def status_message(snapshot: SchedulerSnapshot) -> str:
    """Build status text for the current scheduler snapshot."""
    label = PHASE_LABELS[snapshot.phase]
    if snapshot.running:
        return f"{label} en curso ({snapshot.remaining_text} restantes)"
    return f"{label} en pausa ({snapshot.remaining_text} restantes)"


def rejection_text(action: str, reason: str) -> str:
    if reason == REASON_NOT_RUNNING and action == ACTION_PAUSE:
        return "El temporizador ya está en pausa."
    if reason == REASON_NOT_PAUSED and action == ACTION_RESUME:
        return "El temporizador ya está en marcha."
    if reason == REASON_UNSUPPORTED_ACTION:
        return f"Acción no soportada: {action}."
    return "La acción no es posible en el estado actual."
