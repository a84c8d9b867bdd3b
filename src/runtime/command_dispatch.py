"""Dispatcher that executes UI commands against the tracker services."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from contracts.command_contract import (
    COMMAND_ADD_GROWTH_ENTRY,
    COMMAND_ADD_MANUAL_ENTRY,
    COMMAND_ADD_STASH_ENTRY,
    COMMAND_CLEAR_LOGS,
    COMMAND_DAILY_SUMMARY,
    COMMAND_DELETE_ENTRY,
    COMMAND_DELETE_GROWTH_ENTRY,
    COMMAND_EDIT_ENTRY,
    COMMAND_EXPORT_LOGS,
    COMMAND_GROWTH_REPORT,
    COMMAND_HEALTH_OVERVIEW,
    COMMAND_IMPORT_LOGS,
    COMMAND_LOG_EVENT,
    COMMAND_QUICK_LOG_SLEEP,
    COMMAND_SET_MILESTONE_DATE,
    COMMAND_SET_REMINDER_INTERVAL,
    COMMAND_SET_REMINDERS_ENABLED,
    COMMAND_SET_SLEEP_GOAL,
    COMMAND_SET_VACCINE_DATE,
    COMMAND_SLEEP_TREND,
    COMMAND_STASH_INVENTORY,
    COMMAND_TOGGLE_MILESTONE,
    COMMAND_TOGGLE_VACCINE,
    COMMAND_UPDATE_PROFILE,
    COMMAND_USE_STASH_ENTRY,
    GROWTH_COMMAND_NAMES,
    HEALTH_COMMAND_NAMES,
    HISTORY_COMMAND_NAMES,
    MILK_STASH_COMMAND_NAMES,
    REMINDER_COMMAND_NAMES,
    TIMER_COMMAND_TO_RUNTIME_ACTION,
)
from contracts.ui_protocol import EVENT_COMMAND_RESULT, EVENT_ERROR, STATE_ERROR
from growth import GrowthError, GrowthTracker
from health import CHECKLISTS, HealthError, HealthTracker
from history import HistoryError, LogBook
from milk_stash import MilkStash, MilkStashError
from reminders import ReminderScheduler
from shared.defaults import MS_PER_MINUTE
from state.codec import (
    growth_entry_to_dict,
    log_entry_to_dict,
    milestone_to_dict,
    milk_stash_entry_to_dict,
    vaccine_to_dict,
)
from tracker import ActiveTimerController, ActivityDetails, TimerActionResult
from tracker.constants import (
    ACTION_CANCEL,
    ACTION_EDIT_START,
    ACTION_SNOOZE,
    ACTION_START,
    ACTION_STOP,
    ACTION_TOGGLE_PAUSE,
    ACTION_UPDATE_DETAILS,
)

from .messages import default_timer_text, timer_rejection_text, timer_status_message
from .ui import RuntimeUIPublisher

REASON_OK = "ok"
REASON_UNKNOWN_COMMAND = "unknown_command"
REASON_INVALID_ARGUMENTS = "invalid_arguments"
REASON_PERMISSION_DENIED = "permission_denied"

_UNSET: Any = object()


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one UI command, mirrored to clients as `command_result`."""
    command: str
    accepted: bool
    reason: str
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)


class RuntimeCommandDispatcher:
    """Routes UI commands to the tracker services by command group."""

    def __init__(
        self,
        *,
        logger: logging.Logger,
        controller: ActiveTimerController,
        log_book: LogBook,
        scheduler: ReminderScheduler,
        growth: GrowthTracker,
        milk_stash: MilkStash,
        health: HealthTracker,
        ui: RuntimeUIPublisher,
    ):
        self._logger = logger
        self._controller = controller
        self._log_book = log_book
        self._scheduler = scheduler
        self._growth = growth
        self._milk_stash = milk_stash
        self._health = health
        self._ui = ui

    def active_runtime_message(self) -> str:
        return timer_status_message(self._controller.snapshot())

    def handle_command(self, command: Mapping[str, Any]) -> CommandResult:
        raw_name = command.get("command")
        if not isinstance(raw_name, str) or not raw_name.strip():
            return self._reject("", REASON_UNKNOWN_COMMAND, "Missing command name")
        name = raw_name.strip()

        try:
            if name in TIMER_COMMAND_TO_RUNTIME_ACTION:
                result = self._handle_timer_command(name, command)
            elif name in HISTORY_COMMAND_NAMES:
                result = self._handle_history_command(name, command)
            elif name in REMINDER_COMMAND_NAMES:
                result = self._handle_reminder_command(name, command)
            elif name in GROWTH_COMMAND_NAMES:
                result = self._handle_growth_command(name, command)
            elif name in MILK_STASH_COMMAND_NAMES:
                result = self._handle_milk_stash_command(name, command)
            elif name in HEALTH_COMMAND_NAMES:
                result = self._handle_health_command(name, command)
            else:
                self._logger.warning("Unsupported command: %s", name)
                return self._reject(name, REASON_UNKNOWN_COMMAND, f"Unknown command: {name}")
        except (
            HistoryError,
            GrowthError,
            MilkStashError,
            HealthError,
            KeyError,
            TypeError,
            ValueError,
        ) as error:
            self._logger.warning("Command %s failed: %s", name, error)
            return self._reject(name, REASON_INVALID_ARGUMENTS, str(error))

        self._ui.publish(EVENT_COMMAND_RESULT, **asdict(result))
        return result

    def _handle_timer_command(
        self,
        name: str,
        arguments: Mapping[str, Any],
    ) -> CommandResult:
        action = TIMER_COMMAND_TO_RUNTIME_ACTION[name]
        timer_result = self._apply_timer_action(action, arguments)

        if timer_result.accepted:
            message = default_timer_text(action, timer_result.reason, timer_result.snapshot)
        else:
            message = timer_rejection_text(action, timer_result.reason)
        self._ui.publish_timer_update(
            timer_result.snapshot,
            action=action,
            accepted=timer_result.accepted,
            reason=timer_result.reason,
            command=name,
            message=message,
        )

        data: dict[str, Any] = {}
        if timer_result.log_entry is not None:
            data["log"] = log_entry_to_dict(timer_result.log_entry)
        return CommandResult(
            command=name,
            accepted=timer_result.accepted,
            reason=timer_result.reason,
            message=message,
            data=data,
        )

    def _apply_timer_action(
        self,
        action: str,
        arguments: Mapping[str, Any],
    ) -> TimerActionResult:
        if action == ACTION_START:
            return self._controller.start(
                _required_str(arguments, "activity_type"),
                details=_details_argument(arguments),
            )
        if action == ACTION_TOGGLE_PAUSE:
            return self._controller.toggle_pause()
        if action == ACTION_SNOOZE:
            minutes = _optional_int(arguments, "minutes")
            window_ms = minutes * MS_PER_MINUTE if minutes is not None else None
            return self._controller.snooze(window_ms)
        if action == ACTION_UPDATE_DETAILS:
            changes = arguments.get("details")
            if not isinstance(changes, Mapping):
                raise ValueError("details must be an object")
            return self._controller.update_details(**changes)
        if action == ACTION_EDIT_START:
            return self._controller.edit_start_time(_required_int(arguments, "start_time"))
        if action == ACTION_STOP:
            return self._controller.stop()
        if action == ACTION_CANCEL:
            return self._controller.cancel()
        raise ValueError(f"Unsupported timer action: {action}")

    def _handle_history_command(
        self,
        name: str,
        arguments: Mapping[str, Any],
    ) -> CommandResult:
        book = self._log_book
        data: dict[str, Any] = {}

        if name == COMMAND_ADD_MANUAL_ENTRY:
            entry = book.add_manual_entry(
                _required_str(arguments, "activity_type"),
                _required_int(arguments, "start_time"),
                _required_int(arguments, "end_time"),
                details=_details_argument(arguments),
            )
            data["log"] = log_entry_to_dict(entry)
            message = f"Added {entry.activity_type} entry."
        elif name == COMMAND_LOG_EVENT:
            entry = book.log_event(
                _required_str(arguments, "activity_type"),
                at_ms=_optional_int(arguments, "at"),
                details=_details_argument(arguments),
            )
            data["log"] = log_entry_to_dict(entry)
            message = f"Logged {entry.activity_type}."
        elif name == COMMAND_QUICK_LOG_SLEEP:
            entry = book.quick_log_sleep(_required_int(arguments, "minutes"))
            data["log"] = log_entry_to_dict(entry)
            message = "Sleep logged."
        elif name == COMMAND_EDIT_ENTRY:
            end_time = arguments["end_time"] if "end_time" in arguments else _UNSET
            if end_time is not _UNSET and end_time is not None:
                end_time = _as_int(end_time, "end_time")
            edit_kwargs: dict[str, Any] = {
                "activity_type": _optional_str(arguments, "activity_type"),
                "start_time_ms": _optional_int(arguments, "start_time"),
                "details": _details_argument(arguments),
            }
            if end_time is not _UNSET:
                edit_kwargs["end_time_ms"] = end_time
            entry = book.edit_entry(_required_str(arguments, "id"), **edit_kwargs)
            data["log"] = log_entry_to_dict(entry)
            message = "Entry updated."
        elif name == COMMAND_DELETE_ENTRY:
            book.delete_entry(_required_str(arguments, "id"))
            message = "Entry deleted."
        elif name == COMMAND_CLEAR_LOGS:
            data["removed"] = book.clear_all()
            message = "All logs cleared."
        elif name == COMMAND_IMPORT_LOGS:
            raw = arguments.get("data")
            text = raw if isinstance(raw, str) else json.dumps(raw)
            data["imported"] = book.import_json(text)
            message = f"Imported {data['imported']} entries."
        elif name == COMMAND_EXPORT_LOGS:
            data["data"] = book.export_json()
            message = "Logs exported."
        elif name == COMMAND_DAILY_SUMMARY:
            raw_day = _optional_str(arguments, "day")
            summary = book.daily_summary(date.fromisoformat(raw_day) if raw_day else None)
            data["summary"] = {**asdict(summary), "day": summary.day.isoformat()}
            message = f"Summary for {summary.day.isoformat()}."
        elif name == COMMAND_SLEEP_TREND:
            raw_day = _optional_str(arguments, "end_day")
            days = _optional_int(arguments, "days")
            trend = book.sleep_trend(
                7 if days is None else days,
                date.fromisoformat(raw_day) if raw_day else None,
            )
            data["trend"] = [
                {
                    "day": point.day.isoformat(),
                    "sleep_seconds": point.sleep_seconds,
                    "hours": point.hours,
                }
                for point in trend
            ]
            message = f"Sleep trend for {len(trend)} days."
        elif name == COMMAND_SET_SLEEP_GOAL:
            goal = book.set_sleep_goal(
                _required_int(arguments, "hours"),
                _optional_int(arguments, "minutes") or 0,
            )
            data["sleep_goal"] = asdict(goal)
            message = f"Sleep goal set to {goal.hours}h {goal.minutes}m."
        else:
            raise ValueError(f"Unsupported history command: {name}")

        return CommandResult(name, True, REASON_OK, message, data)

    def _handle_reminder_command(
        self,
        name: str,
        arguments: Mapping[str, Any],
    ) -> CommandResult:
        if name == COMMAND_SET_REMINDERS_ENABLED:
            enabled = arguments.get("enabled")
            if not isinstance(enabled, bool):
                raise ValueError("enabled must be a boolean")
            if not self._scheduler.set_enabled(enabled):
                message = "Notifications are blocked, reminders stay off."
                self._ui.publish(EVENT_ERROR, state=STATE_ERROR, message=message, command=name)
                return CommandResult(name, False, REASON_PERMISSION_DENIED, message)
            return CommandResult(
                name,
                True,
                REASON_OK,
                "Reminders enabled." if enabled else "Reminders disabled.",
            )

        if name == COMMAND_SET_REMINDER_INTERVAL:
            activity_type = _required_str(arguments, "activity_type")
            minutes = _required_int(arguments, "minutes")
            self._scheduler.set_interval(activity_type, minutes)
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"{activity_type.capitalize()} reminder set to {minutes} minutes.",
            )

        raise ValueError(f"Unsupported reminder command: {name}")

    def _handle_growth_command(
        self,
        name: str,
        arguments: Mapping[str, Any],
    ) -> CommandResult:
        if name == COMMAND_ADD_GROWTH_ENTRY:
            entry = self._growth.save_entry(
                _required_int(arguments, "date"),
                weight=_optional_float(arguments, "weight"),
                length=_optional_float(arguments, "length"),
                head_circumference=_optional_float(arguments, "head_circumference"),
                notes=_optional_str(arguments, "notes"),
                entry_id=_optional_str(arguments, "id"),
            )
            return CommandResult(
                name,
                True,
                REASON_OK,
                "Measurement saved.",
                {"entry": growth_entry_to_dict(entry)},
            )

        if name == COMMAND_UPDATE_PROFILE:
            changes = arguments.get("profile")
            if not isinstance(changes, Mapping):
                raise ValueError("profile must be an object")
            profile = self._growth.update_profile(**changes)
            return CommandResult(
                name,
                True,
                REASON_OK,
                "Profile updated.",
                {"profile": asdict(profile)},
            )

        if name == COMMAND_DELETE_GROWTH_ENTRY:
            self._growth.delete_entry(_required_str(arguments, "id"))
            return CommandResult(name, True, REASON_OK, "Measurement deleted.")

        if name == COMMAND_GROWTH_REPORT:
            comparisons = [asdict(item) for item in self._growth.report()]
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"{len(comparisons)} measurements compared.",
                {"comparisons": comparisons},
            )

        raise ValueError(f"Unsupported growth command: {name}")

    def _handle_milk_stash_command(
        self,
        name: str,
        arguments: Mapping[str, Any],
    ) -> CommandResult:
        if name == COMMAND_ADD_STASH_ENTRY:
            entry = self._milk_stash.add(
                _optional_float(arguments, "amount_ml"),
                date_ms=_optional_int(arguments, "date"),
                notes=_optional_str(arguments, "notes"),
            )
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"Stored {entry.amount_ml:.0f} ml.",
                {"entry": milk_stash_entry_to_dict(entry)},
            )

        if name == COMMAND_USE_STASH_ENTRY:
            entry = self._milk_stash.use(_required_str(arguments, "id"))
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"Used {entry.amount_ml:.0f} ml from the stash.",
                {"entry": milk_stash_entry_to_dict(entry)},
            )

        if name == COMMAND_STASH_INVENTORY:
            inventory = self._milk_stash.inventory()
            items = [
                {
                    **milk_stash_entry_to_dict(item.entry),
                    "expires_at": item.expires_at_ms,
                    "expired": item.expired,
                    "expiring": item.expiring,
                }
                for item in inventory.items
            ]
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"{len(items)} bags, {inventory.total_ml:.0f} ml in stash.",
                {"items": items, "total_ml": inventory.total_ml},
            )

        raise ValueError(f"Unsupported milk stash command: {name}")

    def _handle_health_command(
        self,
        name: str,
        arguments: Mapping[str, Any],
    ) -> CommandResult:
        health = self._health

        if name == COMMAND_TOGGLE_VACCINE:
            vaccine = health.toggle_vaccine(_required_str(arguments, "id"))
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"{vaccine.name} marked {'done' if vaccine.completed else 'not done'}.",
                {"vaccine": vaccine_to_dict(vaccine)},
            )

        if name == COMMAND_SET_VACCINE_DATE:
            vaccine = health.set_vaccine_date(
                _required_str(arguments, "id"),
                _required_int(arguments, "date"),
            )
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"{vaccine.name} date updated.",
                {"vaccine": vaccine_to_dict(vaccine)},
            )

        if name == COMMAND_TOGGLE_MILESTONE:
            milestone = health.toggle_milestone(_required_str(arguments, "id"))
            return CommandResult(
                name,
                True,
                REASON_OK,
                f"Milestone marked {'done' if milestone.completed else 'not done'}.",
                {"milestone": milestone_to_dict(milestone)},
            )

        if name == COMMAND_SET_MILESTONE_DATE:
            milestone = health.set_milestone_date(
                _required_str(arguments, "id"),
                _required_int(arguments, "date"),
            )
            return CommandResult(
                name,
                True,
                REASON_OK,
                "Milestone date updated.",
                {"milestone": milestone_to_dict(milestone)},
            )

        if name == COMMAND_HEALTH_OVERVIEW:
            progress = health.progress()
            data = {
                checklist: {
                    "progress": asdict(progress[checklist]),
                    "by_age": [
                        {
                            "age_months": group.age_months,
                            "completed": group.progress.completed,
                            "total": group.progress.total,
                            "ids": [item.id for item in group.items],
                        }
                        for group in health.by_age(checklist)
                    ],
                }
                for checklist in CHECKLISTS
            }
            return CommandResult(
                name,
                True,
                REASON_OK,
                ", ".join(
                    f"{checklist}: {progress[checklist].completed}/{progress[checklist].total}"
                    for checklist in CHECKLISTS
                ),
                data,
            )

        raise ValueError(f"Unsupported health command: {name}")

    def _reject(self, name: str, reason: str, message: str) -> CommandResult:
        result = CommandResult(command=name, accepted=False, reason=reason, message=message)
        self._ui.publish(EVENT_ERROR, state=STATE_ERROR, message=message, command=name)
        self._ui.publish(EVENT_COMMAND_RESULT, **asdict(result))
        return result


def _details_argument(arguments: Mapping[str, Any]) -> Optional[ActivityDetails]:
    raw = arguments.get("details")
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ValueError("details must be an object")
    return ActivityDetails().merged(raw)


def _required_str(arguments: Mapping[str, Any], name: str) -> str:
    text = _optional_str(arguments, name)
    if not text:
        raise ValueError(f"{name} is required")
    return text


def _optional_str(arguments: Mapping[str, Any], name: str) -> Optional[str]:
    value = arguments.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value.strip() or None


def _required_int(arguments: Mapping[str, Any], name: str) -> int:
    value = _optional_int(arguments, name)
    if value is None:
        raise ValueError(f"{name} is required")
    return value


def _optional_int(arguments: Mapping[str, Any], name: str) -> Optional[int]:
    value = arguments.get(name)
    if value is None:
        return None
    return _as_int(value, name)


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    return int(value)


def _optional_float(arguments: Mapping[str, Any], name: str) -> Optional[float]:
    value = arguments.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    return float(value)
