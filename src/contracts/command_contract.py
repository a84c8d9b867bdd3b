"""Canonical UI command names and their mapping onto runtime actions."""

from __future__ import annotations

from tracker.constants import (
    ACTION_CANCEL,
    ACTION_EDIT_START,
    ACTION_SNOOZE,
    ACTION_START,
    ACTION_STOP,
    ACTION_TOGGLE_PAUSE,
    ACTION_UPDATE_DETAILS,
)

# Active timer commands.
COMMAND_START_TIMER = "start_timer"
COMMAND_TOGGLE_PAUSE = "toggle_pause"
COMMAND_SNOOZE_TIMER = "snooze_timer"
COMMAND_STOP_TIMER = "stop_timer"
COMMAND_CANCEL_TIMER = "cancel_timer"
COMMAND_UPDATE_TIMER_DETAILS = "update_timer_details"
COMMAND_EDIT_TIMER_START = "edit_timer_start"

# Log history commands.
COMMAND_ADD_MANUAL_ENTRY = "add_manual_entry"
COMMAND_LOG_EVENT = "log_event"
COMMAND_QUICK_LOG_SLEEP = "quick_log_sleep"
COMMAND_EDIT_ENTRY = "edit_entry"
COMMAND_DELETE_ENTRY = "delete_entry"
COMMAND_CLEAR_LOGS = "clear_logs"
COMMAND_IMPORT_LOGS = "import_logs"
COMMAND_EXPORT_LOGS = "export_logs"
COMMAND_DAILY_SUMMARY = "daily_summary"
COMMAND_SET_SLEEP_GOAL = "set_sleep_goal"
COMMAND_SLEEP_TREND = "sleep_trend"

# Reminder commands.
COMMAND_SET_REMINDERS_ENABLED = "set_reminders_enabled"
COMMAND_SET_REMINDER_INTERVAL = "set_reminder_interval"

# Growth commands.
COMMAND_ADD_GROWTH_ENTRY = "add_growth_entry"
COMMAND_DELETE_GROWTH_ENTRY = "delete_growth_entry"
COMMAND_GROWTH_REPORT = "growth_report"
COMMAND_UPDATE_PROFILE = "update_profile"

# Milk stash commands.
COMMAND_ADD_STASH_ENTRY = "add_stash_entry"
COMMAND_USE_STASH_ENTRY = "use_stash_entry"
COMMAND_STASH_INVENTORY = "stash_inventory"

# Vaccine and milestone commands.
COMMAND_TOGGLE_VACCINE = "toggle_vaccine"
COMMAND_SET_VACCINE_DATE = "set_vaccine_date"
COMMAND_TOGGLE_MILESTONE = "toggle_milestone"
COMMAND_SET_MILESTONE_DATE = "set_milestone_date"
COMMAND_HEALTH_OVERVIEW = "health_overview"

TIMER_COMMAND_TO_RUNTIME_ACTION: dict[str, str] = {
    COMMAND_START_TIMER: ACTION_START,
    COMMAND_TOGGLE_PAUSE: ACTION_TOGGLE_PAUSE,
    COMMAND_SNOOZE_TIMER: ACTION_SNOOZE,
    COMMAND_STOP_TIMER: ACTION_STOP,
    COMMAND_CANCEL_TIMER: ACTION_CANCEL,
    COMMAND_UPDATE_TIMER_DETAILS: ACTION_UPDATE_DETAILS,
    COMMAND_EDIT_TIMER_START: ACTION_EDIT_START,
}

HISTORY_COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_ADD_MANUAL_ENTRY,
        COMMAND_LOG_EVENT,
        COMMAND_QUICK_LOG_SLEEP,
        COMMAND_EDIT_ENTRY,
        COMMAND_DELETE_ENTRY,
        COMMAND_CLEAR_LOGS,
        COMMAND_IMPORT_LOGS,
        COMMAND_EXPORT_LOGS,
        COMMAND_DAILY_SUMMARY,
        COMMAND_SET_SLEEP_GOAL,
        COMMAND_SLEEP_TREND,
    }
)

REMINDER_COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_SET_REMINDERS_ENABLED,
        COMMAND_SET_REMINDER_INTERVAL,
    }
)

GROWTH_COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_ADD_GROWTH_ENTRY,
        COMMAND_DELETE_GROWTH_ENTRY,
        COMMAND_GROWTH_REPORT,
        COMMAND_UPDATE_PROFILE,
    }
)

MILK_STASH_COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_ADD_STASH_ENTRY,
        COMMAND_USE_STASH_ENTRY,
        COMMAND_STASH_INVENTORY,
    }
)

HEALTH_COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_TOGGLE_VACCINE,
        COMMAND_SET_VACCINE_DATE,
        COMMAND_TOGGLE_MILESTONE,
        COMMAND_SET_MILESTONE_DATE,
        COMMAND_HEALTH_OVERVIEW,
    }
)

COMMAND_NAMES: frozenset[str] = (
    frozenset(TIMER_COMMAND_TO_RUNTIME_ACTION)
    | HISTORY_COMMAND_NAMES
    | REMINDER_COMMAND_NAMES
    | GROWTH_COMMAND_NAMES
    | MILK_STASH_COMMAND_NAMES
    | HEALTH_COMMAND_NAMES
)
