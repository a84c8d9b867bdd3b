"""Status and response text builders for timer and history flows."""

from __future__ import annotations

from tracker import TimerSnapshot
from tracker.constants import (
    ACTION_AUTO_RESUME,
    ACTION_CANCEL,
    ACTION_EDIT_START,
    ACTION_SNOOZE,
    ACTION_START,
    ACTION_STOP,
    ACTION_UPDATE_DETAILS,
    PHASE_PAUSED,
    PHASE_RUNNING,
    PHASE_SNOOZED,
    REASON_ALREADY_SNOOZED,
    REASON_NOT_ACTIVE,
    REASON_PAUSED,
    REASON_RESUMED,
    REASON_TIMER_ACTIVE,
    REASON_TOO_SHORT,
)


def format_clock(seconds: int) -> str:
    """Format an elapsed duration in seconds as `HH:MM:SS`."""
    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def timer_status_message(snapshot: TimerSnapshot) -> str:
    if snapshot.phase == PHASE_RUNNING:
        return f"Tracking {snapshot.activity_type} ({format_clock(snapshot.elapsed_seconds)})"
    if snapshot.phase == PHASE_PAUSED:
        return f"{snapshot.activity_type} paused ({format_clock(snapshot.elapsed_seconds)})"
    if snapshot.phase == PHASE_SNOOZED:
        return f"{snapshot.activity_type} snoozed ({format_clock(snapshot.elapsed_seconds)})"
    return "Ready"


def default_timer_text(action: str, reason: str, snapshot: TimerSnapshot) -> str:
    """Return the message shown for an accepted timer action."""
    activity = snapshot.activity_type or "timer"
    if action == ACTION_START:
        return f"Started {activity}."
    if reason == REASON_PAUSED:
        return f"Paused {activity}."
    if action == ACTION_AUTO_RESUME:
        return f"Snooze is over, {activity} is running again."
    if reason == REASON_RESUMED:
        return f"Resumed {activity}."
    if reason == REASON_ALREADY_SNOOZED:
        return f"{activity.capitalize()} is already snoozed."
    if action == ACTION_SNOOZE:
        return f"Snoozed {activity}."
    if action == ACTION_UPDATE_DETAILS:
        return "Details updated."
    if action == ACTION_EDIT_START:
        return "Start time updated."
    if reason == REASON_TOO_SHORT:
        return "Timer was too short and was not logged."
    if action == ACTION_STOP:
        return "Activity logged."
    if action == ACTION_CANCEL:
        return "Timer cancelled."
    return "Timer updated."


def timer_rejection_text(action: str, reason: str) -> str:
    if reason == REASON_TIMER_ACTIVE:
        return "Another activity is already being tracked. Stop it first."
    if reason == REASON_NOT_ACTIVE:
        return "No activity is being tracked."
    return f"The timer cannot {action.replace('_', ' ')} right now."
