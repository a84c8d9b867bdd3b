from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from contracts.ui_protocol import (
    EVENT_HEALTH,
    EVENT_LOGS,
    EVENT_MILK_STASH,
    EVENT_REMINDERS,
    EVENT_TIMER,
)
from state import HealthRecords, MilkStashEntry, ReminderConfig
from state.codec import (
    details_to_dict,
    health_records_to_dict,
    log_entry_to_dict,
    milk_stash_entry_to_dict,
)
from tracker import LogEntry, TimerSnapshot


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        ...


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        if self._ui_server:
            self._ui_server.publish_state(state, message=message, **payload)

    def publish_timer_update(
        self,
        snapshot: TimerSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        command: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "phase": snapshot.phase,
            "is_active": snapshot.is_active,
            "activity_type": snapshot.activity_type,
            "start_time": snapshot.start_time_ms,
            "elapsed_seconds": snapshot.elapsed_seconds,
            "snooze_end_time": snapshot.snooze_end_ms,
            "details": details_to_dict(snapshot.details) if snapshot.details else None,
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if command:
            payload["command"] = command
        if message:
            payload["message"] = message
        self.publish(EVENT_TIMER, **payload)

    def publish_logs(self, logs: Iterable[LogEntry]) -> None:
        ordered = sorted(logs, key=lambda entry: entry.start_time_ms, reverse=True)
        self.publish(EVENT_LOGS, logs=[log_entry_to_dict(entry) for entry in ordered])

    def publish_reminders(self, reminders: ReminderConfig) -> None:
        self.publish(
            EVENT_REMINDERS,
            enabled=reminders.enabled,
            intervals=dict(reminders.intervals_minutes),
            last_notified=dict(reminders.last_notified),
        )

    def publish_milk_stash(self, entries: Iterable[MilkStashEntry]) -> None:
        ordered = sorted(entries, key=lambda entry: entry.date_ms)
        self.publish(
            EVENT_MILK_STASH,
            entries=[milk_stash_entry_to_dict(entry) for entry in ordered],
            total_ml=sum(entry.amount_ml for entry in ordered),
        )

    def publish_health(self, records: HealthRecords) -> None:
        self.publish(EVENT_HEALTH, **health_records_to_dict(records))
