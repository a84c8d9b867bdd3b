from .scheduler import (
    ReminderNotification,
    ReminderScheduler,
    ReminderTickResult,
    format_elapsed,
)

__all__ = [
    "ReminderNotification",
    "ReminderScheduler",
    "ReminderTickResult",
    "format_elapsed",
]
