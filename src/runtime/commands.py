"""Dispatcher that executes transport-level commands against the scheduler."""

from __future__ import annotations

import logging
from typing import Optional

from pomodoro import PhaseScheduler, SchedulerActionResult
from pomodoro.constants import REASON_UNSUPPORTED_ACTION
from contracts.command_contract import normalize_command

from .ui import RuntimeUIPublisher


class SchedulerCommandDispatcher:
    """Routes command names from UI or notification actions to the scheduler."""
    def __init__(
        self,
        *,
        scheduler: PhaseScheduler,
        ui: Optional[RuntimeUIPublisher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._scheduler = scheduler
        self._ui = ui
        self._logger = logger or logging.getLogger("runtime.commands")

    def dispatch(self, command: str) -> SchedulerActionResult:
        action = normalize_command(command)
        if action is None:
            self._logger.warning("Unsupported command: %s", command)
            result = SchedulerActionResult(
                action=str(command),
                accepted=False,
                reason=REASON_UNSUPPORTED_ACTION,
                snapshot=self._scheduler.snapshot(),
            )
        else:
            result = self._scheduler.apply(action)
            self._logger.debug(
                "Command %s -> %s (accepted=%s reason=%s)",
                command,
                action,
                result.accepted,
                result.reason,
            )

        if self._ui is not None:
            self._ui.publish_command_result(result, command=str(command))
        return result
