import logging
import time
import unittest

from app_config_schema import (
    AppConfig,
    NotificationSettings,
    ReminderSettings,
    StorageSettings,
    TrackerSettings,
    UIServerSettings,
)
from runtime.loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from state import AppStateStore

SECOND = 1000
MINUTE = 60 * SECOND


class _FakeClock:
    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []
        self.states: list[tuple[str, str | None, dict[str, object]]] = []
        self.handler = None
        self.stopped = False

    def publish(self, event_type: str, **payload) -> None:
        self.events.append((event_type, payload))

    def publish_state(self, state: str, *, message: str | None = None, **payload) -> None:
        self.states.append((state, message, payload))

    def set_message_handler(self, handler) -> None:
        self.handler = handler

    def stop(self, timeout_seconds: float = 5.0) -> None:
        self.stopped = True

    def of_type(self, event_type: str) -> list[dict[str, object]]:
        return [payload for kind, payload in self.events if kind == event_type]


def _app_config() -> AppConfig:
    return AppConfig(
        storage=StorageSettings(),
        tracker=TrackerSettings(snooze_minutes=5),
        reminders=ReminderSettings(tick_interval_seconds=0.01),
        notifications=NotificationSettings(enabled=True),
        ui_server=UIServerSettings(enabled=False),
        source_file="config.toml",
    )


class RuntimeEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeClock(50 * MINUTE)
        self.store = AppStateStore()
        self.ui_server = _UIServerStub()
        self.signal_hooks: list[RuntimeEngine] = []
        self.engine = RuntimeEngine(
            RuntimeBootstrap(
                logger=logging.getLogger("test.runtime"),
                app_config=_app_config(),
                store=self.store,
                ui_server=self.ui_server,
                hooks=RuntimeHooks(setup_signal_handlers=self.signal_hooks.append),
                clock=self.clock,
            )
        )

    def test_engine_registers_itself_as_message_handler(self) -> None:
        self.assertEqual(self.engine.enqueue_command, self.ui_server.handler)

    def test_queued_commands_run_on_drain(self) -> None:
        self.ui_server.handler({"command": "start_timer", "activity_type": "sleep"})

        self.engine._drain_commands(time.monotonic() + 0.05)

        self.assertEqual("sleep", self.store.snapshot().active_timer.activity_type)
        self.assertEqual("tracking", self.ui_server.states[-1][0])

    def test_state_changes_publish_only_changed_sections(self) -> None:
        self.engine.dispatcher.handle_command({"command": "quick_log_sleep", "minutes": 20})
        self.engine.dispatcher.handle_command(
            {"command": "set_reminder_interval", "activity_type": "feeding", "minutes": 60}
        )

        self.assertEqual(1, len(self.ui_server.of_type("logs")))
        self.assertEqual(2, len(self.ui_server.of_type("reminders")))
        self.assertEqual(60, self.ui_server.of_type("reminders")[-1]["intervals"]["feeding"])

    def test_stash_and_health_changes_publish_their_sections(self) -> None:
        self.engine.dispatcher.handle_command({"command": "add_stash_entry", "amount_ml": 100})
        self.engine.dispatcher.handle_command({"command": "toggle_milestone", "id": "m2"})

        stash_events = self.ui_server.of_type("milk_stash")
        health_events = self.ui_server.of_type("health")
        self.assertEqual(1, len(stash_events))
        self.assertEqual(100.0, stash_events[0]["total_ml"])
        self.assertEqual(2, len(health_events))
        milestones = {item["id"]: item for item in health_events[-1]["milestones"]}
        self.assertTrue(milestones["m2"]["completed"])
        self.assertFalse(milestones["m1"]["completed"])

    def test_tick_resumes_expired_snooze(self) -> None:
        self.engine.dispatcher.handle_command({"command": "start_timer", "activity_type": "sleep"})
        self.engine.dispatcher.handle_command({"command": "snooze_timer"})
        self.clock.now += 5 * MINUTE

        self.engine.tick()

        timer = self.store.snapshot().active_timer
        self.assertIsNone(timer.pause_start_ms)
        self.assertEqual("auto_resume", self.ui_server.of_type("timer")[-1]["action"])

    def test_run_after_stop_publishes_sync_and_shuts_down(self) -> None:
        self.engine.stop()

        exit_code = self.engine.run()

        self.assertEqual(0, exit_code)
        self.assertEqual([self.engine], self.signal_hooks)
        self.assertEqual("sync", self.ui_server.of_type("timer")[0]["action"])
        self.assertEqual(1, len(self.ui_server.of_type("logs")))
        self.assertIsNone(self.ui_server.handler)
        self.assertTrue(self.ui_server.stopped)


if __name__ == "__main__":
    unittest.main()
