import threading
import time
import unittest

from pomodoro import PhaseScheduler, PhaseStarted, ThreadTickSource


class ThreadTickSourceTests(unittest.TestCase):
    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            ThreadTickSource(lambda: None, interval_seconds=0)

    def test_fires_repeatedly_until_cancelled(self) -> None:
        fired = threading.Event()
        calls: list[float] = []

        def callback() -> None:
            calls.append(time.monotonic())
            if len(calls) >= 3:
                fired.set()

        source = ThreadTickSource(callback, interval_seconds=0.01)
        source.start()
        self.assertTrue(fired.wait(2.0))
        self.assertTrue(source.is_active)

        source.cancel()
        source.join(timeout_seconds=1.0)
        count_after_cancel = len(calls)
        time.sleep(0.05)

        self.assertFalse(source.is_active)
        self.assertEqual(count_after_cancel, len(calls))

    def test_cancel_from_inside_callback_stops_source(self) -> None:
        calls: list[int] = []
        source: ThreadTickSource

        def callback() -> None:
            calls.append(1)
            source.cancel()

        source = ThreadTickSource(callback, interval_seconds=0.01)
        source.start()
        source.join(timeout_seconds=1.0)

        self.assertEqual([1], calls)

    def test_callback_errors_are_logged_and_ticking_continues(self) -> None:
        fired = threading.Event()
        calls: list[int] = []

        def callback() -> None:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            fired.set()

        source = ThreadTickSource(callback, interval_seconds=0.01)
        with self.assertLogs("scheduler.ticks", level="ERROR"):
            source.start()
            self.assertTrue(fired.wait(2.0))
        source.cancel()
        source.join(timeout_seconds=1.0)

    def test_scheduler_counts_down_with_thread_ticks(self) -> None:
        sources: list[ThreadTickSource] = []

        def factory(callback) -> ThreadTickSource:
            source = ThreadTickSource(callback, interval_seconds=0.005)
            sources.append(source)
            return source

        scheduler = PhaseScheduler(
            tick_source_factory=factory,
            durations={"focus": 5, "break": 3},
        )
        reached_break = threading.Event()

        def listener(event) -> None:
            if isinstance(event, PhaseStarted) and event.phase == "break":
                reached_break.set()

        scheduler.subscribe(listener)
        scheduler.start_focus()
        try:
            self.assertTrue(reached_break.wait(2.0))
        finally:
            scheduler.close()
        for source in sources:
            source.join(timeout_seconds=1.0)

        self.assertFalse(any(source.is_active for source in sources))
        self.assertFalse(scheduler.snapshot().running)


if __name__ == "__main__":
    unittest.main()
