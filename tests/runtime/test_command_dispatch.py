import unittest

from pomodoro import PhaseScheduler
from runtime.commands import SchedulerCommandDispatcher
from runtime.ui import RuntimeUIPublisher


class _NoopTickSource:
    def __init__(self, callback):
        self.callback = callback

    def start(self) -> None:
        pass

    def cancel(self) -> None:
        pass


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))


class SchedulerCommandDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = PhaseScheduler(tick_source_factory=_NoopTickSource)
        self.ui_server = _UIServerStub()
        self.dispatcher = SchedulerCommandDispatcher(
            scheduler=self.scheduler,
            ui=RuntimeUIPublisher(self.ui_server),
        )

    def test_start_focus_alias_from_notification_broadcast(self) -> None:
        result = self.dispatcher.dispatch("START_FOCUS")

        self.assertTrue(result.accepted)
        self.assertEqual("start_focus", result.action)
        self.assertTrue(self.scheduler.snapshot().running)

    def test_pause_timer_broadcast_only_pauses(self) -> None:
        self.dispatcher.dispatch("start_focus")
        result = self.dispatcher.dispatch("PAUSE_TIMER")

        self.assertTrue(result.accepted)
        self.assertEqual("pause", result.action)
        snapshot = self.scheduler.snapshot()
        self.assertFalse(snapshot.running)
        self.assertEqual("focus", snapshot.phase)

    def test_pause_twice_does_not_resume(self) -> None:
        self.dispatcher.dispatch("start_focus")
        self.dispatcher.dispatch("pause")
        result = self.dispatcher.dispatch("pause")

        self.assertFalse(result.accepted)
        self.assertEqual("not_running", result.reason)
        self.assertFalse(self.scheduler.snapshot().running)

    def test_skip_break_during_focus_starts_focus(self) -> None:
        result = self.dispatcher.dispatch("SKIP_BREAK")

        self.assertTrue(result.accepted)
        self.assertEqual("focus", result.snapshot.phase)
        self.assertTrue(result.snapshot.running)

    def test_resume_and_reset_commands(self) -> None:
        self.dispatcher.dispatch("start_focus")
        self.dispatcher.dispatch("pause")
        self.assertTrue(self.dispatcher.dispatch("resume").accepted)
        result = self.dispatcher.dispatch("reset")

        self.assertTrue(result.accepted)
        self.assertFalse(result.snapshot.running)
        self.assertEqual(1500, result.snapshot.remaining_seconds)

    def test_unknown_command_is_rejected_without_state_change(self) -> None:
        before = self.scheduler.snapshot()
        with self.assertLogs("runtime.commands", level="WARNING"):
            result = self.dispatcher.dispatch("self_destruct")

        self.assertFalse(result.accepted)
        self.assertEqual("unsupported_action", result.reason)
        self.assertEqual(before, self.scheduler.snapshot())

    def test_command_results_are_published(self) -> None:
        self.dispatcher.dispatch("start_focus")
        self.dispatcher.dispatch("resume")

        results = [payload for kind, payload in self.ui_server.events if kind == "command_result"]
        self.assertEqual(2, len(results))
        self.assertTrue(results[0]["accepted"])
        self.assertNotIn("message", results[0])
        self.assertFalse(results[1]["accepted"])
        self.assertEqual("not_paused", results[1]["reason"])
        self.assertEqual("El temporizador ya está en marcha.", results[1]["message"])


if __name__ == "__main__":
    unittest.main()
