"""Shared default values used across tracker, reminder, and runtime modules."""

from __future__ import annotations

import time

DEFAULT_SNOOZE_SECONDS = 5 * 60
DEFAULT_REMINDER_COOLDOWN_SECONDS = 5 * 60
MIN_LOG_DURATION_SECONDS = 2

DEFAULT_SLEEP_GOAL_HOURS = 14
DEFAULT_BABY_NAME = "Baby"

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_DAY = 24 * 60 * MS_PER_MINUTE


def now_ms() -> int:
    """Return the current wall-clock instant in epoch milliseconds."""
    return int(time.time() * MS_PER_SECOND)
