"""Handlers that publish scheduler ticks and phase starts to UI and notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pomodoro import PhaseStarted, SchedulerEvent, SchedulerUpdate

from .notifications import PhaseNotifier
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing scheduler events."""
    logger: logging.Logger
    ui: RuntimeUIPublisher
    notifier: Optional[PhaseNotifier]


class TickProcessor:
    """Handles scheduler event side effects such as UI updates and notifications."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_event(self, event: SchedulerEvent) -> None:
        if isinstance(event, PhaseStarted):
            self.handle_phase_started(event)
            return
        if isinstance(event, SchedulerUpdate):
            self.handle_update(event)
            return
        self._dependencies.logger.warning(
            "Ignoring unknown scheduler event: %s",
            type(event).__name__,
        )

    def handle_phase_started(self, event: PhaseStarted) -> None:
        deps = self._dependencies
        deps.logger.info("Phase started: %s", event.phase)
        deps.ui.publish_phase_started(event)
        if deps.notifier is not None:
            deps.notifier.notify(event)

    def handle_update(self, event: SchedulerUpdate) -> None:
        self._dependencies.ui.publish_scheduler_update(
            event.snapshot,
            action=event.action,
            reason=event.reason,
        )
