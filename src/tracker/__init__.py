from .constants import ACTIVITY_TYPES
from .service import ActiveTimerController, generate_log_id
from .types import (
    ActiveTimer,
    ActivityDetails,
    ActivityType,
    LogEntry,
    TimerActionResult,
    TimerPhase,
    TimerSnapshot,
)

__all__ = [
    "ACTIVITY_TYPES",
    "ActiveTimer",
    "ActiveTimerController",
    "ActivityDetails",
    "ActivityType",
    "LogEntry",
    "TimerActionResult",
    "TimerPhase",
    "TimerSnapshot",
    "generate_log_id",
]
