import datetime as dt
import json
import unittest

from server.events import (
    ClientMessageError,
    StickyEventStore,
    make_event,
    parse_command_message,
)


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event(
            "scheduler",
            now_fn=lambda: now,
            phase="focus",
            remaining_text="25:00",
        )
        payload = json.loads(raw)

        self.assertEqual("scheduler", payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual("focus", payload["phase"])
        self.assertEqual("25:00", payload["remaining_text"])

    def test_make_event_keeps_non_ascii_text(self) -> None:
        raw = make_event("phase_started", title="Inicio de Concentración")
        self.assertIn("Concentración", raw)

    def test_sticky_store_ignores_non_sticky_events(self) -> None:
        store = StickyEventStore()
        store.remember("hello", '{"type":"hello"}')
        store.remember("command_result", '{"type":"command_result"}')
        self.assertEqual([], store.snapshot())

    def test_sticky_store_snapshot_follows_stable_order(self) -> None:
        store = StickyEventStore()
        store.remember("scheduler", '{"type":"scheduler","n":1}')
        store.remember("notification", '{"type":"notification","n":2}')
        store.remember("phase_started", '{"type":"phase_started","n":3}')

        decoded_types = [json.loads(item)["type"] for item in store.snapshot()]
        self.assertEqual(
            ["phase_started", "notification", "scheduler"],
            decoded_types,
        )

    def test_sticky_store_overwrites_latest_event_by_type(self) -> None:
        store = StickyEventStore()
        store.remember("scheduler", '{"type":"scheduler","remaining":10}')
        store.remember("scheduler", '{"type":"scheduler","remaining":9}')
        snapshot = store.snapshot()

        self.assertEqual(1, len(snapshot))
        self.assertEqual(9, json.loads(snapshot[0])["remaining"])


class ParseCommandMessageTests(unittest.TestCase):
    def test_parses_canonical_and_broadcast_names(self) -> None:
        self.assertEqual(
            "start_focus",
            parse_command_message('{"type": "command", "command": "start_focus"}'),
        )
        self.assertEqual(
            "pause",
            parse_command_message(b'{"type": "command", "command": "PAUSE_TIMER"}'),
        )
        self.assertEqual(
            "skip_break",
            parse_command_message('{"type": "command", "command": "SKIP_BREAK"}'),
        )

    def test_rejects_invalid_json(self) -> None:
        with self.assertRaises(ClientMessageError):
            parse_command_message("not json")

    def test_rejects_non_object_payload(self) -> None:
        with self.assertRaises(ClientMessageError):
            parse_command_message('["command"]')

    def test_rejects_wrong_message_type(self) -> None:
        with self.assertRaises(ClientMessageError):
            parse_command_message('{"type": "ping"}')

    def test_rejects_unknown_command(self) -> None:
        with self.assertRaises(ClientMessageError):
            parse_command_message('{"type": "command", "command": "explode"}')

    def test_rejects_missing_command(self) -> None:
        with self.assertRaises(ClientMessageError):
            parse_command_message('{"type": "command"}')


if __name__ == "__main__":
    unittest.main()
