"""Web UI websocket event and state constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_STATE_UPDATE = "state_update"
EVENT_TIMER = "timer"
EVENT_LOGS = "logs"
EVENT_REMINDERS = "reminders"
EVENT_MILK_STASH = "milk_stash"
EVENT_HEALTH = "health"
EVENT_NOTIFICATION = "notification"
EVENT_COMMAND_RESULT = "command_result"
EVENT_ERROR = "error"

# UI runtime states
STATE_IDLE = "idle"
STATE_TRACKING = "tracking"
STATE_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_STATE_UPDATE,
        EVENT_TIMER,
        EVENT_LOGS,
        EVENT_REMINDERS,
        EVENT_MILK_STASH,
        EVENT_HEALTH,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_TIMER,
    EVENT_LOGS,
    EVENT_REMINDERS,
    EVENT_MILK_STASH,
    EVENT_HEALTH,
    EVENT_STATE_UPDATE,
)
