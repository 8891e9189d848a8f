"""Thread-safe focus/break phase scheduler driven by a cancellable tick source."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Literal, Mapping, Optional, Union

from .constants import (
    ACTION_EXPIRED,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_RESUME,
    ACTION_SKIP_BREAK,
    ACTION_START_FOCUS,
    ACTION_TICK,
    NEXT_PHASE,
    PHASE_BREAK,
    PHASE_DURATIONS,
    PHASE_FOCUS,
    PHASE_STARTED_TEXT,
    REASON_EXPIRED,
    REASON_NOT_PAUSED,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_RESUMED,
    REASON_SKIPPED,
    REASON_STARTED,
    REASON_TICK,
    REASON_UNSUPPORTED_ACTION,
)
from .ticks import TickSource, TickSourceFactory, thread_tick_source_factory

PhaseName = Literal["focus", "break"]
SchedulerAction = Literal["start_focus", "pause", "resume", "reset", "skip_break"]


def format_remaining(seconds: int) -> str:
    """Format remaining seconds as zero-padded `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


@dataclass(frozen=True)
class SchedulerSnapshot:
    """Immutable scheduler state exposed to UI and notification collaborators."""
    phase: PhaseName
    duration_seconds: int
    remaining_seconds: int
    running: bool
    skip_visible: bool

    @property
    def remaining_text(self) -> str:
        return format_remaining(self.remaining_seconds)


@dataclass(frozen=True)
class SchedulerActionResult:
    """Result envelope returned after applying a scheduler command."""
    action: str
    accepted: bool
    reason: str
    snapshot: SchedulerSnapshot


@dataclass(frozen=True)
class PhaseStarted:
    """Emitted whenever a phase begins, carrying the notification content."""
    phase: PhaseName
    title: str
    body: str


@dataclass(frozen=True)
class SchedulerUpdate:
    """Emitted after every accepted command and every applied tick."""
    action: str
    reason: str
    snapshot: SchedulerSnapshot


SchedulerEvent = Union[PhaseStarted, SchedulerUpdate]
SchedulerListener = Callable[[SchedulerEvent], None]


def phase_started_event(phase: PhaseName) -> PhaseStarted:
    title, body = PHASE_STARTED_TEXT[phase]
    return PhaseStarted(phase=phase, title=title, body=body)


class PhaseScheduler:
    """Alternates focus and break countdowns with at most one live tick source."""

    def __init__(
        self,
        *,
        tick_source_factory: Optional[TickSourceFactory] = None,
        durations: Optional[Mapping[str, int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        resolved = dict(PHASE_DURATIONS)
        if durations is not None:
            resolved.update(durations)
        for phase in (PHASE_FOCUS, PHASE_BREAK):
            if int(resolved[phase]) <= 0:
                raise ValueError(f"{phase} duration must be greater than zero")

        self._durations = {phase: int(seconds) for phase, seconds in resolved.items()}
        self._tick_source_factory = tick_source_factory or thread_tick_source_factory
        self._logger = logger or logging.getLogger("scheduler")
        self._lock = threading.Lock()
        # Held across mutation and delivery so listeners see events in order.
        self._emit_lock = threading.RLock()
        self._listeners: list[SchedulerListener] = []

        self._phase: PhaseName = PHASE_FOCUS
        self._remaining_seconds = self._durations[PHASE_FOCUS]
        self._running = False
        self._skip_visible = False
        self._tick_source: Optional[TickSource] = None

    def phase_duration(self, phase: PhaseName) -> int:
        return self._durations[phase]

    def snapshot(self) -> SchedulerSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def subscribe(self, listener: SchedulerListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: SchedulerListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def start_focus(self) -> SchedulerActionResult:
        return self.apply(ACTION_START_FOCUS)

    def pause(self) -> SchedulerActionResult:
        return self.apply(ACTION_PAUSE)

    def resume(self) -> SchedulerActionResult:
        return self.apply(ACTION_RESUME)

    def reset(self) -> SchedulerActionResult:
        return self.apply(ACTION_RESET)

    def skip_break(self) -> SchedulerActionResult:
        return self.apply(ACTION_SKIP_BREAK)

    def apply(self, action: str) -> SchedulerActionResult:
        with self._emit_lock:
            with self._lock:
                result, events = self._apply_locked(action)
                listeners = tuple(self._listeners)
            self._deliver(listeners, events)
        return result

    def tick(self) -> None:
        """Advance the countdown by one second if the scheduler is running."""
        with self._emit_lock:
            with self._lock:
                events = self._tick_locked()
                listeners = tuple(self._listeners)
            self._deliver(listeners, events)

    def close(self) -> None:
        with self._lock:
            self._cancel_tick_source_locked()
            self._running = False
        self._logger.debug("Scheduler closed")

    def _apply_locked(
        self,
        action: str,
    ) -> tuple[SchedulerActionResult, list[SchedulerEvent]]:
        events: list[SchedulerEvent] = []

        if action in (ACTION_START_FOCUS, ACTION_SKIP_BREAK):
            skipped_phase = self._phase
            self._cancel_tick_source_locked()
            self._enter_phase_locked(PHASE_FOCUS, events)
            self._start_tick_source_locked()
            reason = REASON_STARTED if action == ACTION_START_FOCUS else REASON_SKIPPED
            self._logger.info(
                "Focus started: action=%s previous_phase=%s",
                action,
                skipped_phase,
            )
            return self._accepted_locked(action, reason, events)

        if action == ACTION_PAUSE:
            if not self._running:
                return self._rejected_locked(action, REASON_NOT_RUNNING)

            self._cancel_tick_source_locked()
            self._running = False
            self._logger.info(
                "Scheduler paused: phase=%s remaining=%ss",
                self._phase,
                self._remaining_seconds,
            )
            return self._accepted_locked(action, REASON_PAUSED, events)

        if action == ACTION_RESUME:
            if self._running:
                return self._rejected_locked(action, REASON_NOT_PAUSED)

            self._start_tick_source_locked()
            self._logger.info(
                "Scheduler resumed: phase=%s remaining=%ss",
                self._phase,
                self._remaining_seconds,
            )
            return self._accepted_locked(action, REASON_RESUMED, events)

        if action == ACTION_RESET:
            self._cancel_tick_source_locked()
            self._running = False
            self._phase = PHASE_FOCUS
            self._remaining_seconds = self._durations[PHASE_FOCUS]
            self._skip_visible = False
            self._logger.info("Scheduler reset")
            return self._accepted_locked(action, REASON_RESET, events)

        self._logger.warning("Unsupported scheduler action: %s", action)
        return self._rejected_locked(action, REASON_UNSUPPORTED_ACTION)

    def _tick_locked(self) -> list[SchedulerEvent]:
        if not self._running:
            self._logger.debug("Ignoring tick while paused")
            return []

        self._remaining_seconds = max(0, self._remaining_seconds - 1)
        if self._remaining_seconds > 0:
            return [
                SchedulerUpdate(
                    action=ACTION_TICK,
                    reason=REASON_TICK,
                    snapshot=self._snapshot_locked(),
                )
            ]

        expired_phase = self._phase
        events: list[SchedulerEvent] = []
        self._cancel_tick_source_locked()
        self._enter_phase_locked(NEXT_PHASE[expired_phase], events)
        self._start_tick_source_locked()
        self._logger.info("Phase expired: %s -> %s", expired_phase, self._phase)
        events.append(
            SchedulerUpdate(
                action=ACTION_EXPIRED,
                reason=REASON_EXPIRED,
                snapshot=self._snapshot_locked(),
            )
        )
        return events

    def _on_source_tick(self, source: Optional[TickSource]) -> None:
        with self._emit_lock:
            with self._lock:
                if source is None or source is not self._tick_source:
                    self._logger.debug("Ignoring tick from cancelled tick source")
                    return
                events = self._tick_locked()
                listeners = tuple(self._listeners)
            self._deliver(listeners, events)

    def _enter_phase_locked(self, phase: PhaseName, events: list[SchedulerEvent]) -> None:
        self._phase = phase
        self._remaining_seconds = self._durations[phase]
        self._skip_visible = phase == PHASE_BREAK
        events.append(phase_started_event(phase))

    def _start_tick_source_locked(self) -> None:
        self._cancel_tick_source_locked()
        source: Optional[TickSource] = None

        def on_tick() -> None:
            self._on_source_tick(source)

        source = self._tick_source_factory(on_tick)
        self._tick_source = source
        self._running = True
        source.start()

    def _cancel_tick_source_locked(self) -> None:
        source = self._tick_source
        self._tick_source = None
        if source is not None:
            source.cancel()

    def _accepted_locked(
        self,
        action: str,
        reason: str,
        events: list[SchedulerEvent],
    ) -> tuple[SchedulerActionResult, list[SchedulerEvent]]:
        snapshot = self._snapshot_locked()
        events.append(SchedulerUpdate(action=action, reason=reason, snapshot=snapshot))
        result = SchedulerActionResult(
            action=action,
            accepted=True,
            reason=reason,
            snapshot=snapshot,
        )
        return result, events

    def _rejected_locked(
        self,
        action: str,
        reason: str,
    ) -> tuple[SchedulerActionResult, list[SchedulerEvent]]:
        self._logger.debug("Scheduler action ignored: action=%s reason=%s", action, reason)
        result = SchedulerActionResult(
            action=action,
            accepted=False,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )
        return result, []

    def _snapshot_locked(self) -> SchedulerSnapshot:
        return SchedulerSnapshot(
            phase=self._phase,
            duration_seconds=self._durations[self._phase],
            remaining_seconds=self._remaining_seconds,
            running=self._running,
            skip_visible=self._skip_visible,
        )

    def _deliver(
        self,
        listeners: tuple[SchedulerListener, ...],
        events: list[SchedulerEvent],
    ) -> None:
        for event in events:
            for listener in listeners:
                try:
                    listener(event)
                except Exception as error:
                    self._logger.error(
                        "Scheduler listener failed on %s: %s",
                        type(event).__name__,
                        error,
                        exc_info=True,
                    )
