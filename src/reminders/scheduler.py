"""Periodic reminder evaluation and snooze auto-resume."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from notifications import (
    PERMISSION_GRANTED,
    NotificationError,
    NotificationPermissionError,
    NotificationSink,
)
from shared.defaults import (
    DEFAULT_REMINDER_COOLDOWN_SECONDS,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    now_ms,
)
from state import REMINDER_ACTIVITY_TYPES, AppState, AppStateStore
from tracker import ActiveTimerController, LogEntry

REMINDER_TITLES: dict[str, str] = {
    "feeding": "Feeding reminder",
    "sleep": "Sleep reminder",
    "diaper": "Diaper reminder",
}

KIND_THRESHOLD = "threshold"
KIND_RESUMED = "resumed"


def format_elapsed(elapsed_ms: int) -> str:
    """Format a span as `Xh Ym`, dropping the hour part when it is zero."""
    total_minutes = max(0, int(elapsed_ms)) // MS_PER_MINUTE
    hours, minutes = divmod(total_minutes, 60)
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


@dataclass(frozen=True)
class ReminderNotification:
    kind: str
    activity_type: str
    title: str
    body: str


@dataclass(frozen=True)
class ReminderTickResult:
    """Outcome of one scheduler tick: whether a snooze ended and what was shown."""
    resumed: bool = False
    notifications: tuple[ReminderNotification, ...] = ()


class ReminderScheduler:
    """Re-evaluates snooze deadlines and reminder thresholds on every tick.

    Nothing is cached between ticks; each tick recomputes from the current
    state so remote updates and configuration changes take effect at once.
    """

    def __init__(
        self,
        store: AppStateStore,
        controller: ActiveTimerController,
        sink: NotificationSink,
        *,
        clock: Optional[Callable[[], int]] = None,
        cooldown_seconds: int = DEFAULT_REMINDER_COOLDOWN_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if cooldown_seconds < 0:
            raise ValueError("cooldown_seconds must be >= 0")

        self._store = store
        self._controller = controller
        self._sink = sink
        self._clock = clock or now_ms
        self._cooldown_ms = int(cooldown_seconds) * MS_PER_SECOND
        self._logger = logger or logging.getLogger("reminders")

    def tick(self, now: Optional[int] = None) -> ReminderTickResult:
        current = self._clock() if now is None else int(now)
        shown: list[ReminderNotification] = []

        resume_result = self._controller.resume_expired_snooze(current)
        resumed = resume_result.accepted
        if resumed and self._store.snapshot().reminders.enabled:
            activity_type = resume_result.snapshot.activity_type or ""
            notification = ReminderNotification(
                kind=KIND_RESUMED,
                activity_type=activity_type,
                title="Timer resumed",
                body=f"Snooze is over, the {activity_type} timer is running again.",
            )
            if self._deliver(notification):
                shown.append(notification)

        for notification in self._due_reminders(self._store.snapshot(), current):
            if not self._deliver(notification):
                continue
            self._record_notified(notification.activity_type, current)
            shown.append(notification)

        return ReminderTickResult(resumed=resumed, notifications=tuple(shown))

    def set_enabled(self, enabled: bool) -> bool:
        """Toggle reminders; enabling requires notification permission."""
        if enabled and self._sink.request_permission() != PERMISSION_GRANTED:
            self._logger.warning("Notification permission denied; reminders stay disabled")
            return False

        with self._store.transaction() as state:
            state.reminders = replace(state.reminders, enabled=bool(enabled))
        self._logger.info("Reminders %s", "enabled" if enabled else "disabled")
        return True

    def set_interval(self, activity_type: str, minutes: int) -> None:
        if activity_type not in REMINDER_ACTIVITY_TYPES:
            allowed = ", ".join(REMINDER_ACTIVITY_TYPES)
            raise ValueError(f"Reminders are only available for: {allowed}")
        if int(minutes) < 0:
            raise ValueError("Reminder interval must be >= 0 minutes")

        with self._store.transaction() as state:
            intervals = dict(state.reminders.intervals_minutes)
            intervals[activity_type] = int(minutes)
            state.reminders = replace(state.reminders, intervals_minutes=intervals)

    def _due_reminders(self, state: AppState, now: int) -> list[ReminderNotification]:
        reminders = state.reminders
        if not reminders.enabled:
            return []

        tracked_type = state.active_timer.activity_type if state.active_timer else None
        due: list[ReminderNotification] = []
        for activity_type in REMINDER_ACTIVITY_TYPES:
            interval_minutes = reminders.interval_minutes(activity_type)
            if interval_minutes <= 0:
                continue
            if activity_type == tracked_type:
                continue

            last_log = _most_recent_log(state.logs, activity_type)
            if last_log is None:
                continue

            elapsed = now - last_log.reference_time_ms
            if elapsed < interval_minutes * MS_PER_MINUTE:
                continue

            last_notified = reminders.last_notified.get(activity_type)
            if last_notified is not None and now - last_notified < self._cooldown_ms:
                continue

            due.append(
                ReminderNotification(
                    kind=KIND_THRESHOLD,
                    activity_type=activity_type,
                    title=REMINDER_TITLES[activity_type],
                    body=f"It's been {format_elapsed(elapsed)} since the last {activity_type}.",
                )
            )
        return due

    def _deliver(self, notification: ReminderNotification) -> bool:
        try:
            self._sink.show(notification.title, notification.body)
        except NotificationPermissionError:
            self._logger.debug("Notification suppressed, permission denied: %s", notification.title)
            return False
        except NotificationError as error:
            self._logger.warning("Notification delivery failed: %s", error)
            return False
        return True

    def _record_notified(self, activity_type: str, now: int) -> None:
        with self._store.transaction() as state:
            last_notified = dict(state.reminders.last_notified)
            last_notified[activity_type] = now
            state.reminders = replace(state.reminders, last_notified=last_notified)


def _most_recent_log(logs: tuple[LogEntry, ...], activity_type: str) -> Optional[LogEntry]:
    matching = [entry for entry in logs if entry.activity_type == activity_type]
    if not matching:
        return None
    return max(matching, key=lambda entry: entry.start_time_ms)
