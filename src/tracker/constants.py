"""State, action, and reason constants used by the activity timer."""

from __future__ import annotations

ACTIVITY_FEEDING = "feeding"
ACTIVITY_SLEEP = "sleep"
ACTIVITY_DIAPER = "diaper"
ACTIVITY_PUMPING = "pumping"
ACTIVITY_SOLIDS = "solids"

ACTIVITY_TYPES: tuple[str, ...] = (
    ACTIVITY_FEEDING,
    ACTIVITY_SLEEP,
    ACTIVITY_DIAPER,
    ACTIVITY_PUMPING,
    ACTIVITY_SOLIDS,
)

FEEDING_TYPES: frozenset[str] = frozenset({"nursing", "bottle"})
FEEDING_SIDES: frozenset[str] = frozenset({"left", "right", "both"})
DIAPER_STATES: frozenset[str] = frozenset({"wet", "dirty", "mixed"})

PHASE_IDLE = "idle"
PHASE_RUNNING = "running"
PHASE_PAUSED = "paused"
PHASE_SNOOZED = "snoozed"

ACTIVE_PHASES: frozenset[str] = frozenset({PHASE_RUNNING, PHASE_PAUSED, PHASE_SNOOZED})

ACTION_START = "start"
ACTION_UPDATE_DETAILS = "update_details"
ACTION_TOGGLE_PAUSE = "toggle_pause"
ACTION_SNOOZE = "snooze"
ACTION_EDIT_START = "edit_start"
ACTION_STOP = "stop"
ACTION_CANCEL = "cancel"
ACTION_AUTO_RESUME = "auto_resume"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"

REASON_STARTED = "started"
REASON_UPDATED = "updated"
REASON_PAUSED = "paused"
REASON_RESUMED = "resumed"
REASON_SNOOZED = "snoozed"
REASON_ALREADY_SNOOZED = "already_snoozed"
REASON_START_EDITED = "start_edited"
REASON_LOGGED = "logged"
REASON_TOO_SHORT = "too_short"
REASON_CANCELLED = "cancelled"
REASON_TIMER_ACTIVE = "timer_active"
REASON_NOT_ACTIVE = "not_active"
REASON_NOT_SNOOZED = "not_snoozed"
REASON_SNOOZE_PENDING = "snooze_pending"
REASON_TICK = "tick"
REASON_STARTUP = "startup"
