"""Document codec for `AppState` using the camelCase shape of exported data."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from tracker.types import ActiveTimer, ActivityDetails, LogEntry, validate_activity_type

from .health_records import HealthRecords, Milestone, Vaccine
from .models import (
    REMINDER_ACTIVITY_TYPES,
    AppState,
    BabyProfile,
    GrowthEntry,
    MilkStashEntry,
    ReminderConfig,
    SleepGoal,
)

_DETAIL_KEYS: tuple[tuple[str, str], ...] = (
    ("feeding_type", "feedingType"),
    ("side", "side"),
    ("amount_ml", "amountMl"),
    ("diaper_state", "diaperState"),
    ("reaction", "reaction"),
    ("notes", "notes"),
)


def details_to_dict(details: ActivityDetails) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for attr, key in _DETAIL_KEYS:
        value = getattr(details, attr)
        if value is not None:
            payload[key] = value
    if details.foods:
        payload["foods"] = list(details.foods)
    return payload


def details_from_dict(raw: Optional[Mapping[str, Any]]) -> ActivityDetails:
    if not raw:
        return ActivityDetails()
    values: dict[str, Any] = {}
    for attr, key in _DETAIL_KEYS:
        value = raw.get(key)
        if value is not None and value != "":
            values[attr] = value
    if "amount_ml" in values:
        values["amount_ml"] = float(values["amount_ml"])
    foods = raw.get("foods")
    if isinstance(foods, (list, tuple)):
        values["foods"] = tuple(str(item) for item in foods)
    return ActivityDetails(**values)


def log_entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": entry.id,
        "type": entry.activity_type,
        "startTime": entry.start_time_ms,
        "details": details_to_dict(entry.details),
    }
    if entry.end_time_ms is not None:
        payload["endTime"] = entry.end_time_ms
    if entry.duration_seconds is not None:
        payload["durationSeconds"] = entry.duration_seconds
    return payload


def log_entry_from_dict(raw: Mapping[str, Any]) -> LogEntry:
    end_time = raw.get("endTime")
    duration = raw.get("durationSeconds")
    return LogEntry(
        id=str(raw["id"]),
        activity_type=validate_activity_type(raw.get("type")),
        start_time_ms=int(raw["startTime"]),
        end_time_ms=int(end_time) if end_time is not None else None,
        duration_seconds=int(duration) if duration is not None else None,
        details=details_from_dict(raw.get("details")),
    )


def active_timer_to_dict(timer: ActiveTimer) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "type": timer.activity_type,
        "startTime": timer.start_time_ms,
        "details": details_to_dict(timer.details),
        "ignoredDurationMs": timer.ignored_duration_ms,
    }
    if timer.pause_start_ms is not None:
        payload["pauseStartTime"] = timer.pause_start_ms
    if timer.snooze_end_ms is not None:
        payload["snoozeEndTime"] = timer.snooze_end_ms
    return payload


def active_timer_from_dict(raw: Optional[Mapping[str, Any]]) -> Optional[ActiveTimer]:
    if not raw:
        return None
    pause_start = raw.get("pauseStartTime")
    snooze_end = raw.get("snoozeEndTime")
    return ActiveTimer(
        activity_type=validate_activity_type(raw.get("type")),
        start_time_ms=int(raw["startTime"]),
        details=details_from_dict(raw.get("details")),
        pause_start_ms=int(pause_start) if pause_start is not None else None,
        snooze_end_ms=int(snooze_end) if snooze_end is not None else None,
        ignored_duration_ms=int(raw.get("ignoredDurationMs") or 0),
    )


def growth_entry_to_dict(entry: GrowthEntry) -> dict[str, Any]:
    payload: dict[str, Any] = {"id": entry.id, "date": entry.date_ms}
    if entry.weight_kg is not None:
        payload["weight"] = entry.weight_kg
    if entry.length_cm is not None:
        payload["length"] = entry.length_cm
    if entry.head_circumference_cm is not None:
        payload["headCircumference"] = entry.head_circumference_cm
    if entry.notes:
        payload["notes"] = entry.notes
    return payload


def growth_entry_from_dict(raw: Mapping[str, Any]) -> GrowthEntry:
    return GrowthEntry(
        id=str(raw["id"]),
        date_ms=int(raw["date"]),
        weight_kg=_optional_float(raw.get("weight")),
        length_cm=_optional_float(raw.get("length")),
        head_circumference_cm=_optional_float(raw.get("headCircumference")),
        notes=raw.get("notes") or None,
    )


def milk_stash_entry_to_dict(entry: MilkStashEntry) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": entry.id,
        "date": entry.date_ms,
        "amountMl": entry.amount_ml,
        "isFrozen": entry.is_frozen,
    }
    if entry.notes:
        payload["notes"] = entry.notes
    return payload


def milk_stash_entry_from_dict(raw: Mapping[str, Any]) -> MilkStashEntry:
    return MilkStashEntry(
        id=str(raw["id"]),
        date_ms=int(raw["date"]),
        amount_ml=float(raw["amountMl"]),
        notes=raw.get("notes") or None,
        is_frozen=bool(raw.get("isFrozen", True)),
    )


def vaccine_to_dict(vaccine: Vaccine) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": vaccine.id,
        "name": vaccine.name,
        "ageMonths": vaccine.age_months,
        "completed": vaccine.completed,
    }
    if vaccine.date_ms is not None:
        payload["date"] = vaccine.date_ms
    if vaccine.notes:
        payload["notes"] = vaccine.notes
    return payload


def vaccine_from_dict(raw: Mapping[str, Any]) -> Vaccine:
    return Vaccine(
        id=str(raw["id"]),
        name=str(raw["name"]),
        age_months=int(raw["ageMonths"]),
        completed=bool(raw.get("completed", False)),
        date_ms=_optional_int(raw.get("date")),
        notes=raw.get("notes") or None,
    )


def milestone_to_dict(milestone: Milestone) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": milestone.id,
        "category": milestone.category,
        "description": milestone.description,
        "ageMonths": milestone.age_months,
        "completed": milestone.completed,
    }
    if milestone.date_ms is not None:
        payload["date"] = milestone.date_ms
    return payload


def milestone_from_dict(raw: Mapping[str, Any]) -> Milestone:
    return Milestone(
        id=str(raw["id"]),
        category=str(raw["category"]),
        description=str(raw["description"]),
        age_months=int(raw["ageMonths"]),
        completed=bool(raw.get("completed", False)),
        date_ms=_optional_int(raw.get("date")),
    )


def health_records_to_dict(records: HealthRecords) -> dict[str, Any]:
    return {
        "vaccines": [vaccine_to_dict(item) for item in records.vaccines],
        "milestones": [milestone_to_dict(item) for item in records.milestones],
    }


def health_records_from_dict(raw: Optional[Mapping[str, Any]]) -> HealthRecords:
    """Decode the health block; a missing list falls back to the default schedule."""
    defaults = HealthRecords()
    if not raw:
        return defaults
    if not isinstance(raw, Mapping):
        raise TypeError("health must be an object")
    vaccines = raw.get("vaccines")
    milestones = raw.get("milestones")
    return HealthRecords(
        vaccines=(
            tuple(vaccine_from_dict(item) for item in vaccines)
            if vaccines is not None
            else defaults.vaccines
        ),
        milestones=(
            tuple(milestone_from_dict(item) for item in milestones)
            if milestones is not None
            else defaults.milestones
        ),
    )


def app_state_to_dict(state: AppState) -> dict[str, Any]:
    reminders = state.reminders
    return {
        "logs": [log_entry_to_dict(entry) for entry in state.logs],
        "activeTimer": (
            active_timer_to_dict(state.active_timer) if state.active_timer else None
        ),
        "reminders": {
            "enabled": reminders.enabled,
            **{
                activity_type: reminders.interval_minutes(activity_type)
                for activity_type in REMINDER_ACTIVITY_TYPES
            },
            "lastNotified": dict(reminders.last_notified),
        },
        "sleepGoal": {
            "hours": state.sleep_goal.hours,
            "minutes": state.sleep_goal.minutes,
        },
        "babyProfile": {
            "name": state.baby_profile.name,
            "gender": state.baby_profile.gender,
            "birthDate": state.baby_profile.birth_date_ms,
            "weightUnit": state.baby_profile.weight_unit,
            "lengthUnit": state.baby_profile.length_unit,
        },
        "growth": [growth_entry_to_dict(entry) for entry in state.growth],
        "milkStash": [milk_stash_entry_to_dict(entry) for entry in state.milk_stash],
        "health": health_records_to_dict(state.health),
    }


def app_state_from_dict(raw: Mapping[str, Any]) -> AppState:
    """Decode a persisted document; raises `KeyError`/`TypeError`/`ValueError` on bad shape."""
    reminders_raw = raw.get("reminders") or {}
    sleep_goal_raw = raw.get("sleepGoal") or {}
    profile_raw = raw.get("babyProfile") or {}
    defaults = BabyProfile()

    reminders = ReminderConfig(
        enabled=bool(reminders_raw.get("enabled", False)),
        intervals_minutes={
            activity_type: max(0, int(reminders_raw.get(activity_type) or 0))
            for activity_type in REMINDER_ACTIVITY_TYPES
        },
        last_notified={
            str(key): int(value)
            for key, value in (reminders_raw.get("lastNotified") or {}).items()
        },
    )

    return AppState(
        logs=tuple(log_entry_from_dict(item) for item in raw.get("logs") or ()),
        active_timer=active_timer_from_dict(raw.get("activeTimer")),
        reminders=reminders,
        sleep_goal=SleepGoal(
            hours=int(sleep_goal_raw.get("hours", SleepGoal().hours)),
            minutes=int(sleep_goal_raw.get("minutes", 0)),
        ),
        baby_profile=BabyProfile(
            name=str(profile_raw.get("name", defaults.name)),
            gender=profile_raw.get("gender", defaults.gender),
            birth_date_ms=int(profile_raw.get("birthDate", defaults.birth_date_ms)),
            weight_unit=profile_raw.get("weightUnit", defaults.weight_unit),
            length_unit=profile_raw.get("lengthUnit", defaults.length_unit),
        ),
        growth=tuple(growth_entry_from_dict(item) for item in raw.get("growth") or ()),
        milk_stash=tuple(
            milk_stash_entry_from_dict(item) for item in raw.get("milkStash") or ()
        ),
        health=health_records_from_dict(raw.get("health")),
    )


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)
