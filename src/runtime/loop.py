"""Runtime orchestration loop for scheduler events and inbound commands."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional

from app_config import AppConfig
from pomodoro import PhaseScheduler, PhaseStarted, SchedulerUpdate, TickSourceFactory
from pomodoro.constants import ACTION_SYNC, REASON_STARTUP
from server import UIServer

from .commands import SchedulerCommandDispatcher
from .notifications import PhaseNotifier, UINotificationSink
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    ui_server: Optional[UIServer]
    hooks: RuntimeHooks
    tick_source_factory: Optional[TickSourceFactory] = None


@dataclass(frozen=True)
class CommandRequest:
    """Command received from a transport, queued for the runtime thread."""
    command: str


class RuntimeEngine:
    """Main runtime loop that owns the scheduler and serializes its commands."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._scheduler = PhaseScheduler(
            tick_source_factory=bootstrap.tick_source_factory,
            logger=logging.getLogger("scheduler"),
        )
        self._dispatcher = SchedulerCommandDispatcher(
            scheduler=self._scheduler,
            ui=self._ui,
            logger=logging.getLogger("runtime.commands"),
        )
        notifier = PhaseNotifier(
            UINotificationSink(self._ui),
            enabled=bootstrap.app_config.notifications.enabled,
            logger=logging.getLogger("notifications"),
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                logger=self._logger,
                ui=self._ui,
                notifier=notifier,
            )
        )

        self._event_queue: Queue[Any] = Queue()
        self._stop_requested = threading.Event()
        self._attached = False

    @property
    def scheduler(self) -> PhaseScheduler:
        return self._scheduler

    def submit_command(self, command: str) -> None:
        """Queue a command for the runtime thread; safe to call from any thread."""
        self._event_queue.put(CommandRequest(command=command))

    def request_stop(self) -> None:
        self._stop_requested.set()

    def attach(self) -> None:
        if self._attached:
            return
        self._scheduler.subscribe(self._event_queue.put)
        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            ui_server.set_command_handler(self.submit_command)
        self._attached = True
        self._publish_startup_sync()

    def run(self) -> int:
        self.attach()
        self._bootstrap.hooks.setup_signal_handlers(self.request_stop)
        self._logger.info("Scheduler ready; waiting for commands.")

        try:
            while not self._stop_requested.is_set():
                event = self._poll_event(timeout_seconds=0.25)
                if event is not None:
                    self._handle_event(event)
            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def process_pending(self) -> int:
        """Handle every queued event without blocking; returns the count."""
        handled = 0
        while True:
            try:
                event = self._event_queue.get_nowait()
            except Empty:
                return handled
            self._handle_event(event)
            handled += 1

    def _publish_startup_sync(self) -> None:
        self._ui.publish_scheduler_update(
            self._scheduler.snapshot(),
            action=ACTION_SYNC,
            reason=REASON_STARTUP,
        )

    def _poll_event(self, timeout_seconds: float) -> Optional[Any]:
        try:
            return self._event_queue.get(timeout=timeout_seconds)
        except Empty:
            return None

    def _handle_event(self, event: Any) -> None:
        if isinstance(event, CommandRequest):
            self._dispatcher.dispatch(event.command)
            return

        if isinstance(event, (PhaseStarted, SchedulerUpdate)):
            self._tick_processor.handle_event(event)
            return

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)

    def _shutdown(self) -> None:
        self._logger.info("Stopping scheduler...")
        self._scheduler.unsubscribe(self._event_queue.put)
        self._scheduler.close()
        self._attached = False

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
