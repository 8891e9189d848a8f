"""Cancellable periodic tick sources that drive the phase scheduler."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol

from .constants import TICK_INTERVAL_SECONDS

TickCallback = Callable[[], None]


class TickSource(Protocol):
    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TickSourceFactory = Callable[[TickCallback], TickSource]


class ThreadTickSource:
    """Daemon thread that invokes a callback on a fixed monotonic schedule.

    Deadlines advance by a whole interval each tick, so a slow callback does
    not accumulate drift. ``cancel`` only sets a flag and never joins, which
    makes it safe to call from inside the callback itself.
    """

    def __init__(
        self,
        callback: TickCallback,
        *,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        self._callback = callback
        self._interval_seconds = float(interval_seconds)
        self._logger = logger or logging.getLogger("scheduler.ticks")
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_active(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._cancelled.is_set()
        )

    def start(self) -> None:
        if self._thread is not None:
            self._logger.warning("Tick source already started")
            return

        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="phase-ticker",
        )
        self._thread.start()

    def cancel(self) -> None:
        self._cancelled.set()

    def join(self, timeout_seconds: float = 1.0) -> None:
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout=timeout_seconds)

    def _run(self) -> None:
        deadline = time.monotonic() + self._interval_seconds
        while not self._cancelled.wait(max(0.0, deadline - time.monotonic())):
            try:
                self._callback()
            except Exception as error:
                self._logger.error("Tick callback failed: %s", error, exc_info=True)
            deadline += self._interval_seconds


def thread_tick_source_factory(callback: TickCallback) -> TickSource:
    return ThreadTickSource(callback)
