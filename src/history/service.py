"""Log book operations: manual entries, edits, summaries, and JSON exchange."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Callable, Iterable, Optional

from shared.defaults import MS_PER_MINUTE, MS_PER_SECOND, now_ms
from state import AppStateStore, SleepGoal
from state.codec import log_entry_from_dict, log_entry_to_dict
from tracker import ACTIVITY_TYPES, ActivityDetails, LogEntry, generate_log_id
from tracker.constants import ACTIVITY_DIAPER, ACTIVITY_FEEDING, ACTIVITY_SLEEP
from tracker.types import validate_activity_type

from .errors import LogImportError, LogNotFoundError, LogValidationError

_UNSET: Any = object()


@dataclass(frozen=True)
class DailySummary:
    """Totals for logs that started on one calendar day."""
    day: date
    sleep_seconds: int
    feed_count: int
    diaper_count: int
    sleep_goal_progress_pct: float


@dataclass(frozen=True)
class SleepTrendDay:
    day: date
    sleep_seconds: int

    @property
    def hours(self) -> float:
        return round(self.sleep_seconds / 3600, 1)


class LogBook:
    """CRUD and exchange operations over the log collection of the state owner."""

    def __init__(
        self,
        store: AppStateStore,
        *,
        clock: Optional[Callable[[], int]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        tz: Optional[tzinfo] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._clock = clock or now_ms
        self._id_factory = id_factory or generate_log_id
        self._tz = tz
        self._logger = logger or logging.getLogger("history")

    def entries(self) -> list[LogEntry]:
        """Return all logs, newest start first."""
        return sorted(
            self._store.snapshot().logs,
            key=lambda entry: entry.start_time_ms,
            reverse=True,
        )

    def add_manual_entry(
        self,
        activity_type: str,
        start_time_ms: int,
        end_time_ms: int,
        details: Optional[ActivityDetails] = None,
    ) -> LogEntry:
        validate_activity_type(activity_type)
        if end_time_ms <= start_time_ms:
            raise LogValidationError("End time must be after start time")

        entry = LogEntry(
            id=self._id_factory(),
            activity_type=activity_type,
            start_time_ms=int(start_time_ms),
            end_time_ms=int(end_time_ms),
            duration_seconds=(end_time_ms - start_time_ms) // MS_PER_SECOND,
            details=details or ActivityDetails(),
        )
        self._append(entry)
        return entry

    def log_event(
        self,
        activity_type: str,
        *,
        at_ms: Optional[int] = None,
        details: Optional[ActivityDetails] = None,
    ) -> LogEntry:
        """Record a point-in-time event such as a diaper change."""
        validate_activity_type(activity_type)
        entry = LogEntry(
            id=self._id_factory(),
            activity_type=activity_type,
            start_time_ms=self._clock() if at_ms is None else int(at_ms),
            details=details or ActivityDetails(),
        )
        self._append(entry)
        return entry

    def quick_log_sleep(self, minutes: int) -> LogEntry:
        if minutes <= 0:
            raise LogValidationError("Sleep duration must be greater than zero")
        now = self._clock()
        entry = LogEntry(
            id=self._id_factory(),
            activity_type=ACTIVITY_SLEEP,
            start_time_ms=now - minutes * MS_PER_MINUTE,
            end_time_ms=now,
            duration_seconds=minutes * 60,
        )
        self._append(entry)
        return entry

    def edit_entry(
        self,
        entry_id: str,
        *,
        activity_type: Optional[str] = None,
        start_time_ms: Optional[int] = None,
        end_time_ms: Optional[int] = _UNSET,
        details: Optional[ActivityDetails] = None,
    ) -> LogEntry:
        """Rewrite a log; a new end time recomputes the duration from the timestamps.

        Passing `end_time_ms=None` removes the end time. Feeding and diaper
        detail fields are dropped when the entry is not of that type.
        """
        with self._store.transaction() as state:
            index = _index_of(state.logs, entry_id)
            current = state.logs[index]

            new_type = validate_activity_type(activity_type or current.activity_type)
            start = current.start_time_ms if start_time_ms is None else int(start_time_ms)
            end = current.end_time_ms if end_time_ms is _UNSET else end_time_ms

            duration = current.duration_seconds
            if end is not None:
                if end <= start:
                    raise LogValidationError("End time must be after start time")
                duration = (end - start) // MS_PER_SECOND
            elif new_type == ACTIVITY_DIAPER:
                duration = None

            updated = replace(
                current,
                activity_type=new_type,
                start_time_ms=start,
                end_time_ms=end,
                duration_seconds=duration,
                details=_sanitize_details(details or current.details, new_type),
            )
            logs = list(state.logs)
            logs[index] = updated
            state.logs = tuple(logs)

        self._logger.info("Log edited: id=%s type=%s", entry_id, updated.activity_type)
        return updated

    def delete_entry(self, entry_id: str) -> None:
        with self._store.transaction() as state:
            index = _index_of(state.logs, entry_id)
            state.logs = state.logs[:index] + state.logs[index + 1 :]
        self._logger.info("Log deleted: id=%s", entry_id)

    def clear_all(self) -> int:
        with self._store.transaction() as state:
            removed = len(state.logs)
            state.logs = ()
        self._logger.warning("Cleared %d logs", removed)
        return removed

    def filter_entries(
        self,
        *,
        start_day: Optional[date] = None,
        end_day: Optional[date] = None,
        activity_types: Optional[Iterable[str]] = None,
    ) -> list[LogEntry]:
        wanted = frozenset(activity_types) if activity_types else None
        result = []
        for entry in self.entries():
            day = self._day_of(entry.start_time_ms)
            if start_day is not None and day < start_day:
                continue
            if end_day is not None and day > end_day:
                continue
            if wanted is not None and entry.activity_type not in wanted:
                continue
            result.append(entry)
        return result

    def last_activities(self) -> dict[str, Optional[LogEntry]]:
        latest: dict[str, Optional[LogEntry]] = {name: None for name in ACTIVITY_TYPES}
        for entry in self.entries():
            if latest.get(entry.activity_type) is None:
                latest[entry.activity_type] = entry
        return latest

    def daily_summary(self, day: Optional[date] = None) -> DailySummary:
        target = day or self._day_of(self._clock())
        todays = self.filter_entries(start_day=target, end_day=target)

        sleep_seconds = sum(
            entry.duration_seconds or 0
            for entry in todays
            if entry.activity_type == ACTIVITY_SLEEP
        )
        goal_hours = self._store.snapshot().sleep_goal.total_hours
        progress = 0.0
        if goal_hours > 0:
            progress = min(100.0, (sleep_seconds / 3600) / goal_hours * 100)

        return DailySummary(
            day=target,
            sleep_seconds=sleep_seconds,
            feed_count=sum(1 for entry in todays if entry.activity_type == ACTIVITY_FEEDING),
            diaper_count=sum(1 for entry in todays if entry.activity_type == ACTIVITY_DIAPER),
            sleep_goal_progress_pct=round(progress, 1),
        )

    def sleep_trend(self, days: int = 7, end_day: Optional[date] = None) -> list[SleepTrendDay]:
        """Sleep per day for the `days` days ending on `end_day` (today), oldest first.

        A sleep counts toward the day it started on, as in `daily_summary`.
        """
        if days < 1:
            raise LogValidationError("Sleep trend needs at least one day")
        last = end_day or self._day_of(self._clock())
        first = last - timedelta(days=days - 1)

        totals = {first + timedelta(days=offset): 0 for offset in range(days)}
        for entry in self.filter_entries(
            start_day=first,
            end_day=last,
            activity_types=(ACTIVITY_SLEEP,),
        ):
            totals[self._day_of(entry.start_time_ms)] += entry.duration_seconds or 0
        return [SleepTrendDay(day=day, sleep_seconds=seconds) for day, seconds in totals.items()]

    def set_sleep_goal(self, hours: int, minutes: int = 0) -> SleepGoal:
        if hours < 0 or not 0 <= minutes < 60:
            raise LogValidationError("Sleep goal needs hours >= 0 and minutes in [0, 59]")
        if hours == 0 and minutes == 0:
            raise LogValidationError("Sleep goal must be greater than zero")
        goal = SleepGoal(hours=int(hours), minutes=int(minutes))
        with self._store.transaction() as state:
            state.sleep_goal = goal
        return goal

    def export_json(self) -> str:
        return json.dumps([log_entry_to_dict(entry) for entry in self._store.snapshot().logs])

    def import_json(self, text: str) -> int:
        """Merge logs from an exported JSON array, skipping ids already present."""
        try:
            raw = json.loads(text)
        except ValueError as error:
            raise LogImportError(f"Invalid JSON: {error}") from error
        if not isinstance(raw, list):
            raise LogImportError("Invalid data format: expected an array of logs")

        try:
            incoming = [log_entry_from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as error:
            raise LogImportError(f"Malformed log entry: {error}") from error

        with self._store.transaction() as state:
            known_ids = {entry.id for entry in state.logs}
            new_entries = []
            for entry in incoming:
                if entry.id in known_ids:
                    continue
                known_ids.add(entry.id)
                new_entries.append(entry)
            state.logs = state.logs + tuple(new_entries)

        self._logger.info("Imported %d of %d logs", len(new_entries), len(incoming))
        return len(new_entries)

    def _append(self, entry: LogEntry) -> None:
        with self._store.transaction() as state:
            state.logs = state.logs + (entry,)
        self._logger.info("Log added: id=%s type=%s", entry.id, entry.activity_type)

    def _day_of(self, timestamp_ms: int) -> date:
        return datetime.fromtimestamp(timestamp_ms / MS_PER_SECOND, tz=self._tz).date()


def _index_of(logs: tuple[LogEntry, ...], entry_id: str) -> int:
    for index, entry in enumerate(logs):
        if entry.id == str(entry_id):
            return index
    raise LogNotFoundError(f"No log with id {entry_id!r}")


def _sanitize_details(details: ActivityDetails, activity_type: str) -> ActivityDetails:
    if activity_type != ACTIVITY_FEEDING:
        details = replace(details, feeding_type=None, side=None, amount_ml=None)
    if activity_type != ACTIVITY_DIAPER:
        details = replace(details, diaper_state=None)
    return details
