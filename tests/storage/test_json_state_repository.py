import json
import tempfile
import unittest
from pathlib import Path

from state import AppState, BabyProfile, GrowthEntry, MilkStashEntry, ReminderConfig
from storage import JsonStateRepository, StorageReadError, StorageWriteError
from tracker import ActivityDetails, LogEntry
from tracker.types import ActiveTimer


def _sample_state() -> AppState:
    return AppState(
        logs=(
            LogEntry(
                id="abc",
                activity_type="feeding",
                start_time_ms=1_000,
                end_time_ms=61_000,
                duration_seconds=60,
                details=ActivityDetails(feeding_type="bottle", amount_ml=90.0),
            ),
            LogEntry(
                id="d1",
                activity_type="diaper",
                start_time_ms=2_000,
                details=ActivityDetails(diaper_state="wet"),
            ),
        ),
        active_timer=ActiveTimer(
            activity_type="sleep",
            start_time_ms=100_000,
            pause_start_ms=160_000,
            snooze_end_ms=460_000,
            ignored_duration_ms=5_000,
        ),
        reminders=ReminderConfig(
            enabled=True,
            intervals_minutes={"feeding": 180, "sleep": 0, "diaper": 120},
            last_notified={"feeding": 42},
        ),
        baby_profile=BabyProfile(name="Ada", gender="girl", birth_date_ms=5, weight_unit="lb"),
        growth=(GrowthEntry(id="g1", date_ms=9, weight_kg=4.2, notes="checkup"),),
        milk_stash=(MilkStashEntry(id="b1", date_ms=11, amount_ml=150.0, notes="night"),),
    )


class JsonStateRepositoryTests(unittest.TestCase):
    def test_write_then_read_restores_the_same_state(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            repository = JsonStateRepository(Path(temp_dir) / "state.json")
            state = _sample_state()

            repository.write(state)

            self.assertEqual(state, repository.read())

    def test_document_uses_camel_case_shape(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "state.json"
            JsonStateRepository(path).write(_sample_state())

            document = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual(1, document["version"])
        state = document["state"]
        self.assertEqual(
            {
                "id": "abc",
                "type": "feeding",
                "startTime": 1_000,
                "endTime": 61_000,
                "durationSeconds": 60,
                "details": {"feedingType": "bottle", "amountMl": 90.0},
            },
            state["logs"][0],
        )
        self.assertEqual(160_000, state["activeTimer"]["pauseStartTime"])
        self.assertEqual(460_000, state["activeTimer"]["snoozeEndTime"])
        self.assertEqual(5_000, state["activeTimer"]["ignoredDurationMs"])
        self.assertEqual({"feeding": 42}, state["reminders"]["lastNotified"])
        self.assertEqual(180, state["reminders"]["feeding"])

    def test_write_leaves_no_temp_file_behind(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "state.json"
            JsonStateRepository(path).write(AppState())

            self.assertTrue(path.exists())
            self.assertEqual(["state.json"], sorted(item.name for item in path.parent.iterdir()))

    def test_load_missing_file_returns_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            repository = JsonStateRepository(Path(temp_dir) / "missing.json")

            self.assertEqual(AppState(), repository.load())

    def test_load_corrupted_file_falls_back_with_warning(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "state.json"
            path.write_text("{not json", encoding="utf-8")
            repository = JsonStateRepository(path)

            with self.assertLogs("storage", level="WARNING"):
                state = repository.load()

            self.assertEqual(AppState(), state)
            with self.assertRaises(StorageReadError):
                repository.read()

    def test_load_corrupted_file_moves_it_aside_before_next_save(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "state.json"
            path.write_text("{not json", encoding="utf-8")
            repository = JsonStateRepository(path)

            with self.assertLogs("storage", level="WARNING") as captured:
                repository.load()
            repository.save(AppState())

            corrupt_path = Path(temp_dir) / "state.json.corrupt"
            self.assertEqual("{not json", corrupt_path.read_text(encoding="utf-8"))
            self.assertEqual(AppState(), repository.read())
            self.assertTrue(any("state.json.corrupt" in line for line in captured.output))

    def test_read_accepts_bare_state_object(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "state.json"
            path.write_text(
                json.dumps({"logs": [{"id": 7, "type": "sleep", "startTime": 1}]}),
                encoding="utf-8",
            )

            state = JsonStateRepository(path).read()

            self.assertEqual("7", state.logs[0].id)

    def test_read_rejects_unknown_activity_type(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "state.json"
            path.write_text(
                json.dumps({"logs": [{"id": "x", "type": "bath", "startTime": 1}]}),
                encoding="utf-8",
            )

            with self.assertRaises(StorageReadError):
                JsonStateRepository(path).read()

    def test_save_logs_write_failures_instead_of_raising(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            blocker = Path(temp_dir) / "blocker"
            blocker.write_text("", encoding="utf-8")
            repository = JsonStateRepository(blocker / "state.json")

            with self.assertRaises(StorageWriteError):
                repository.write(AppState())
            with self.assertLogs("storage", level="ERROR"):
                repository.save(AppState())


if __name__ == "__main__":
    unittest.main()
