import datetime as dt
import json
import sys
import types
import unittest
from pathlib import Path

# Import server.events without executing src/server/__init__.py.
_SERVER_DIR = Path(__file__).resolve().parents[2] / "src" / "server"
if "server" not in sys.modules:
    _pkg = types.ModuleType("server")
    _pkg.__path__ = [str(_SERVER_DIR)]  # type: ignore[attr-defined]
    sys.modules["server"] = _pkg

from server.events import StickyEventStore, make_event


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event("state_update", now_fn=lambda: now, state="idle", message="Ready")
        payload = json.loads(raw)

        self.assertEqual("state_update", payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual("idle", payload["state"])
        self.assertEqual("Ready", payload["message"])

    def test_make_event_stringifies_dates(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event("command_result", now_fn=lambda: now, day=dt.date(2026, 2, 21))

        self.assertEqual("2026-02-21", json.loads(raw)["day"])

    def test_sticky_store_ignores_non_sticky_events(self) -> None:
        store = StickyEventStore()
        store.remember("hello", '{"type":"hello"}')
        store.remember("notification", '{"type":"notification"}')
        self.assertEqual([], store.snapshot())

    def test_sticky_store_snapshot_follows_stable_order(self) -> None:
        store = StickyEventStore()
        store.remember("state_update", '{"type":"state_update","n":1}')
        store.remember("reminders", '{"type":"reminders","n":3}')
        store.remember("logs", '{"type":"logs","n":4}')
        store.remember("timer", '{"type":"timer","n":5}')

        snapshot = store.snapshot()
        decoded_types = [json.loads(item)["type"] for item in snapshot]
        self.assertEqual(
            ["timer", "logs", "reminders", "state_update"],
            decoded_types,
        )

    def test_sticky_store_overwrites_latest_event_by_type(self) -> None:
        store = StickyEventStore()
        store.remember("timer", '{"type":"timer","elapsed_seconds":10}')
        store.remember("timer", '{"type":"timer","elapsed_seconds":11}')
        snapshot = store.snapshot()

        self.assertEqual(1, len(snapshot))
        self.assertEqual(11, json.loads(snapshot[0])["elapsed_seconds"])

    def test_sticky_store_does_not_replay_errors(self) -> None:
        store = StickyEventStore()
        store.remember("error", '{"type":"error","message":"Unknown command: x"}')
        store.remember("state_update", '{"type":"state_update","state":"idle"}')

        decoded_types = [json.loads(item)["type"] for item in store.snapshot()]
        self.assertEqual(["state_update"], decoded_types)


if __name__ == "__main__":
    unittest.main()
