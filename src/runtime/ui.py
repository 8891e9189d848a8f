from __future__ import annotations

from typing import Any, Optional, Protocol

from pomodoro import PhaseStarted, SchedulerActionResult, SchedulerSnapshot
from contracts.ui_protocol import (
    EVENT_COMMAND_RESULT,
    EVENT_NOTIFICATION,
    EVENT_PHASE_STARTED,
    EVENT_SCHEDULER,
)

from .messages import rejection_text, status_message


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


def snapshot_payload(snapshot: SchedulerSnapshot) -> dict[str, Any]:
    return {
        "phase": snapshot.phase,
        "duration_seconds": snapshot.duration_seconds,
        "remaining_seconds": snapshot.remaining_seconds,
        "remaining_text": snapshot.remaining_text,
        "running": snapshot.running,
        "skip_visible": snapshot.skip_visible,
    }


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_scheduler_update(
        self,
        snapshot: SchedulerSnapshot,
        *,
        action: str,
        reason: str = "",
    ) -> None:
        payload = snapshot_payload(snapshot)
        payload["action"] = action
        payload["message"] = status_message(snapshot)
        if reason:
            payload["reason"] = reason
        self.publish(EVENT_SCHEDULER, **payload)

    def publish_phase_started(self, event: PhaseStarted) -> None:
        self.publish(
            EVENT_PHASE_STARTED,
            phase=event.phase,
            title=event.title,
            body=event.body,
        )

    def publish_notification(self, payload: dict[str, Any]) -> None:
        self.publish(EVENT_NOTIFICATION, **payload)

    def publish_command_result(
        self,
        result: SchedulerActionResult,
        *,
        command: str,
    ) -> None:
        payload: dict[str, Any] = {
            "command": command,
            "action": result.action,
            "accepted": result.accepted,
            "reason": result.reason,
        }
        if not result.accepted:
            payload["message"] = rejection_text(result.action, result.reason)
        self.publish(EVENT_COMMAND_RESULT, **payload)
