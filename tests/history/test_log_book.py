import json
import unittest
from datetime import date, datetime, timezone

from history import LogBook, LogImportError, LogNotFoundError, LogValidationError
from state import AppStateStore, SleepGoal
from tracker import ActivityDetails

MINUTE = 60_000
HOUR = 60 * MINUTE


def _ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    moment = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def _ids():
    counter = iter(range(1, 1000))
    return lambda: f"log-{next(counter)}"


class LogBookTests(unittest.TestCase):
    def setUp(self) -> None:
        self.now = _ms(2026, 3, 10, 12)
        self.store = AppStateStore()
        self.book = LogBook(
            self.store,
            clock=lambda: self.now,
            id_factory=_ids(),
            tz=timezone.utc,
        )

    def test_manual_entry_computes_duration(self) -> None:
        entry = self.book.add_manual_entry(
            "feeding",
            self.now - 20 * MINUTE,
            self.now,
            ActivityDetails(feeding_type="bottle", amount_ml=100),
        )

        self.assertEqual("log-1", entry.id)
        self.assertEqual(1200, entry.duration_seconds)
        self.assertEqual((entry,), self.store.snapshot().logs)

    def test_manual_entry_rejects_end_before_start(self) -> None:
        with self.assertRaises(LogValidationError):
            self.book.add_manual_entry("sleep", self.now, self.now)
        self.assertEqual((), self.store.snapshot().logs)

    def test_manual_entry_rejects_unknown_type(self) -> None:
        with self.assertRaises(ValueError):
            self.book.add_manual_entry("bath", self.now - MINUTE, self.now)

    def test_log_event_defaults_to_now_without_end(self) -> None:
        entry = self.book.log_event("diaper", details=ActivityDetails(diaper_state="wet"))

        self.assertEqual(self.now, entry.start_time_ms)
        self.assertIsNone(entry.end_time_ms)
        self.assertIsNone(entry.duration_seconds)

    def test_quick_log_sleep_ends_now(self) -> None:
        entry = self.book.quick_log_sleep(45)

        self.assertEqual("sleep", entry.activity_type)
        self.assertEqual(self.now - 45 * MINUTE, entry.start_time_ms)
        self.assertEqual(self.now, entry.end_time_ms)
        self.assertEqual(45 * 60, entry.duration_seconds)

    def test_quick_log_sleep_rejects_non_positive_minutes(self) -> None:
        with self.assertRaises(LogValidationError):
            self.book.quick_log_sleep(0)

    def test_edit_recomputes_duration_from_new_end(self) -> None:
        entry = self.book.add_manual_entry("sleep", self.now - HOUR, self.now)

        updated = self.book.edit_entry(entry.id, end_time_ms=self.now - 30 * MINUTE)

        self.assertEqual(30 * 60, updated.duration_seconds)
        self.assertEqual(updated, self.store.snapshot().logs[0])

    def test_edit_changing_type_drops_feeding_details(self) -> None:
        entry = self.book.add_manual_entry(
            "feeding",
            self.now - 10 * MINUTE,
            self.now,
            ActivityDetails(feeding_type="nursing", side="left", notes="sleepy"),
        )

        updated = self.book.edit_entry(entry.id, activity_type="sleep")

        self.assertEqual("sleep", updated.activity_type)
        self.assertIsNone(updated.details.feeding_type)
        self.assertIsNone(updated.details.side)
        self.assertEqual("sleepy", updated.details.notes)

    def test_edit_to_diaper_without_end_clears_duration(self) -> None:
        entry = self.book.add_manual_entry("sleep", self.now - HOUR, self.now)

        updated = self.book.edit_entry(entry.id, activity_type="diaper", end_time_ms=None)

        self.assertIsNone(updated.end_time_ms)
        self.assertIsNone(updated.duration_seconds)

    def test_edit_rejects_end_before_start_and_keeps_state(self) -> None:
        entry = self.book.add_manual_entry("sleep", self.now - HOUR, self.now)

        with self.assertRaises(LogValidationError):
            self.book.edit_entry(entry.id, end_time_ms=self.now - 2 * HOUR)
        self.assertEqual((entry,), self.store.snapshot().logs)

    def test_edit_and_delete_unknown_id(self) -> None:
        with self.assertRaises(LogNotFoundError):
            self.book.edit_entry("missing", activity_type="sleep")
        with self.assertRaises(LogNotFoundError):
            self.book.delete_entry("missing")

    def test_delete_and_clear(self) -> None:
        first = self.book.quick_log_sleep(10)
        self.book.log_event("diaper")
        self.book.log_event("diaper")

        self.book.delete_entry(first.id)
        self.assertEqual(2, len(self.store.snapshot().logs))

        self.assertEqual(2, self.book.clear_all())
        self.assertEqual((), self.store.snapshot().logs)

    def test_entries_and_last_activities_are_newest_first(self) -> None:
        older = self.book.log_event("diaper", at_ms=self.now - 2 * HOUR)
        newer = self.book.log_event("diaper", at_ms=self.now - HOUR)
        feed = self.book.add_manual_entry("feeding", self.now - 3 * HOUR, self.now - 2 * HOUR)

        self.assertEqual([newer, older, feed], self.book.entries())
        latest = self.book.last_activities()
        self.assertEqual(newer, latest["diaper"])
        self.assertEqual(feed, latest["feeding"])
        self.assertIsNone(latest["sleep"])

    def test_filter_by_day_range_and_type(self) -> None:
        self.book.log_event("diaper", at_ms=_ms(2026, 3, 8, 9))
        kept = self.book.log_event("diaper", at_ms=_ms(2026, 3, 9, 23, 59))
        self.book.log_event("feeding", at_ms=_ms(2026, 3, 9, 8))

        result = self.book.filter_entries(
            start_day=date(2026, 3, 9),
            end_day=date(2026, 3, 9),
            activity_types=["diaper"],
        )

        self.assertEqual([kept], result)

    def test_daily_summary_counts_today_and_caps_progress(self) -> None:
        self.book.add_manual_entry("sleep", _ms(2026, 3, 10, 0), _ms(2026, 3, 10, 7))
        self.book.add_manual_entry("feeding", _ms(2026, 3, 10, 8), _ms(2026, 3, 10, 8, 20))
        self.book.log_event("diaper", at_ms=_ms(2026, 3, 10, 9))
        self.book.log_event("diaper", at_ms=_ms(2026, 3, 9, 9))

        summary = self.book.daily_summary()

        self.assertEqual(date(2026, 3, 10), summary.day)
        self.assertEqual(7 * 3600, summary.sleep_seconds)
        self.assertEqual(1, summary.feed_count)
        self.assertEqual(1, summary.diaper_count)
        self.assertEqual(50.0, summary.sleep_goal_progress_pct)

        self.book.set_sleep_goal(5)
        self.assertEqual(100.0, self.book.daily_summary().sleep_goal_progress_pct)

    def test_sleep_trend_covers_last_seven_days_oldest_first(self) -> None:
        self.book.add_manual_entry("sleep", _ms(2026, 3, 10, 1), _ms(2026, 3, 10, 4))
        self.book.add_manual_entry("sleep", _ms(2026, 3, 9, 23), _ms(2026, 3, 10, 1))
        self.book.add_manual_entry("sleep", _ms(2026, 3, 4, 13), _ms(2026, 3, 4, 14, 30))
        self.book.add_manual_entry("sleep", _ms(2026, 3, 3, 13), _ms(2026, 3, 3, 15))
        self.book.add_manual_entry("feeding", _ms(2026, 3, 10, 5), _ms(2026, 3, 10, 6))

        trend = self.book.sleep_trend()

        self.assertEqual(
            [date(2026, 3, day) for day in range(4, 11)],
            [point.day for point in trend],
        )
        self.assertEqual(3 * 3600, trend[-1].sleep_seconds)
        self.assertEqual(2.0, trend[-2].hours)
        self.assertEqual(1.5, trend[0].hours)
        self.assertEqual([0, 0, 0, 0], [point.sleep_seconds for point in trend[1:5]])

    def test_sleep_trend_custom_window(self) -> None:
        self.book.add_manual_entry("sleep", _ms(2026, 3, 1, 1), _ms(2026, 3, 1, 2))

        trend = self.book.sleep_trend(days=2, end_day=date(2026, 3, 2))

        self.assertEqual([date(2026, 3, 1), date(2026, 3, 2)], [point.day for point in trend])
        self.assertEqual([3600, 0], [point.sleep_seconds for point in trend])
        with self.assertRaises(LogValidationError):
            self.book.sleep_trend(days=0)

    def test_set_sleep_goal_validation(self) -> None:
        self.assertEqual(SleepGoal(hours=12, minutes=30), self.book.set_sleep_goal(12, 30))
        self.assertEqual(SleepGoal(hours=12, minutes=30), self.store.snapshot().sleep_goal)

        for hours, minutes in ((0, 0), (-1, 0), (10, 60)):
            with self.subTest(hours=hours, minutes=minutes):
                with self.assertRaises(LogValidationError):
                    self.book.set_sleep_goal(hours, minutes)

    def test_export_then_import_skips_known_ids(self) -> None:
        self.book.quick_log_sleep(30)
        exported = self.book.export_json()

        self.assertEqual(0, self.book.import_json(exported))

        incoming = json.loads(exported) + [
            {"id": "remote-1", "type": "diaper", "startTime": self.now, "details": {}},
        ]
        self.assertEqual(1, self.book.import_json(json.dumps(incoming)))
        self.assertEqual(2, len(self.store.snapshot().logs))

    def test_import_rejects_invalid_payloads(self) -> None:
        for payload in ("not json", '{"id": "x"}', '[{"type": "sleep"}]'):
            with self.subTest(payload=payload):
                with self.assertRaises(LogImportError):
                    self.book.import_json(payload)
        self.assertEqual((), self.store.snapshot().logs)


if __name__ == "__main__":
    unittest.main()
