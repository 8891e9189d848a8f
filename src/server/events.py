"""Utilities for serializing UI events, parsing client commands, and sticky state."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable

from contracts.command_contract import normalize_command
from contracts.ui_protocol import MESSAGE_COMMAND, STICKY_EVENT_ORDER, STICKY_EVENT_TYPES


class ClientMessageError(ValueError):
    """Raised when a websocket client sends an unusable message."""


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        },
        ensure_ascii=False,
    )


def parse_command_message(raw: str | bytes) -> str:
    """Extract the canonical scheduler command from an inbound client message."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as error:
            raise ClientMessageError("Message is not valid UTF-8") from error

    try:
        message = json.loads(raw)
    except json.JSONDecodeError as error:
        raise ClientMessageError("Message is not valid JSON") from error

    if not isinstance(message, dict):
        raise ClientMessageError("Message must be a JSON object")
    if message.get("type") != MESSAGE_COMMAND:
        raise ClientMessageError(f"Unsupported message type: {message.get('type')!r}")

    raw_command = message.get("command")
    command = normalize_command(raw_command)
    if command is None:
        raise ClientMessageError(f"Unknown command: {raw_command!r}")
    return command


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
