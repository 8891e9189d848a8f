"""Phase-start notification content and delivery to a notification sink."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pomodoro import PhaseStarted
from pomodoro.constants import ACTION_PAUSE, ACTION_SKIP_BREAK, PHASE_BREAK, PHASE_FOCUS
from contracts.command_contract import (
    NOTIFICATION_ACTION_PAUSE,
    NOTIFICATION_ACTION_SKIP_BREAK,
)

from .messages import PHASE_SUMMARY_TEXT

_PHASE_COLORS: dict[str, str] = {
    PHASE_FOCUS: "#FF0000",
    PHASE_BREAK: "#00FF00",
}
_VIBRATION_PATTERN_MS: tuple[int, ...] = (0, 500, 250, 500)


@dataclass(frozen=True)
class NotificationAction:
    """Button offered on a notification and the scheduler command it sends."""
    action_id: str
    label: str
    command: str


@dataclass(frozen=True)
class PhaseNotification:
    phase: str
    title: str
    body: str
    summary: str
    color: str
    actions: tuple[NotificationAction, ...]
    vibration_pattern_ms: tuple[int, ...] = _VIBRATION_PATTERN_MS

    def to_payload(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "title": self.title,
            "body": self.body,
            "summary": self.summary,
            "color": self.color,
            "vibration_pattern_ms": list(self.vibration_pattern_ms),
            "actions": [
                {
                    "id": action.action_id,
                    "label": action.label,
                    "command": action.command,
                }
                for action in self.actions
            ],
        }


def build_phase_notification(event: PhaseStarted) -> PhaseNotification:
    """Build the notification shown when a phase starts.

    Every notification offers a pause button; break notifications also offer
    to skip straight to the next focus session.
    """
    actions = [
        NotificationAction(
            action_id=NOTIFICATION_ACTION_PAUSE,
            label="Pausar",
            command=ACTION_PAUSE,
        )
    ]
    if event.phase == PHASE_BREAK:
        actions.append(
            NotificationAction(
                action_id=NOTIFICATION_ACTION_SKIP_BREAK,
                label="Saltar descanso",
                command=ACTION_SKIP_BREAK,
            )
        )

    return PhaseNotification(
        phase=event.phase,
        title=event.title,
        body=event.body,
        summary=PHASE_SUMMARY_TEXT[event.phase],
        color=_PHASE_COLORS[event.phase],
        actions=tuple(actions),
    )


class NotificationSink(Protocol):
    def show(self, notification: PhaseNotification) -> None:
        ...


class UINotificationSink:
    """Forwards notifications to connected UI clients as `notification` events."""
    def __init__(self, ui):
        self._ui = ui

    def show(self, notification: PhaseNotification) -> None:
        self._ui.publish_notification(notification.to_payload())


class PhaseNotifier:
    """Renders phase-start events; delivery failures are logged, never raised."""
    def __init__(
        self,
        sink: NotificationSink,
        *,
        enabled: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        self._sink = sink
        self._enabled = enabled
        self._logger = logger or logging.getLogger("notifications")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def notify(self, event: PhaseStarted) -> bool:
        if not self._enabled:
            self._logger.debug("Notifications disabled; skipping %s", event.phase)
            return False

        notification = build_phase_notification(event)
        try:
            self._sink.show(notification)
        except Exception as error:
            self._logger.error(
                "Failed to show %s notification: %s",
                event.phase,
                error,
                exc_info=True,
            )
            return False

        self._logger.info("Notification shown: %s", notification.title)
        return True
