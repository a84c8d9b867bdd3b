"""Application state records owned by `AppStateStore`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from shared.defaults import DEFAULT_BABY_NAME, DEFAULT_SLEEP_GOAL_HOURS
from tracker.constants import ACTIVITY_DIAPER, ACTIVITY_FEEDING, ACTIVITY_SLEEP
from tracker.types import ActiveTimer, LogEntry

from .health_records import HealthRecords

REMINDER_ACTIVITY_TYPES: tuple[str, ...] = (
    ACTIVITY_FEEDING,
    ACTIVITY_SLEEP,
    ACTIVITY_DIAPER,
)

Gender = Literal["boy", "girl"]
WeightUnit = Literal["kg", "lb"]
LengthUnit = Literal["cm", "in"]


def _default_intervals() -> dict[str, int]:
    return {activity_type: 0 for activity_type in REMINDER_ACTIVITY_TYPES}


@dataclass(frozen=True)
class ReminderConfig:
    """Reminder toggle, per-type intervals in minutes (0 disables), and dedup stamps."""
    enabled: bool = False
    intervals_minutes: dict[str, int] = field(default_factory=_default_intervals)
    last_notified: dict[str, int] = field(default_factory=dict)

    def interval_minutes(self, activity_type: str) -> int:
        return int(self.intervals_minutes.get(activity_type, 0))


@dataclass(frozen=True)
class SleepGoal:
    hours: int = DEFAULT_SLEEP_GOAL_HOURS
    minutes: int = 0

    @property
    def total_hours(self) -> float:
        return self.hours + self.minutes / 60


@dataclass(frozen=True)
class BabyProfile:
    name: str = DEFAULT_BABY_NAME
    gender: Gender = "boy"
    birth_date_ms: int = 0
    weight_unit: WeightUnit = "kg"
    length_unit: LengthUnit = "cm"


@dataclass(frozen=True)
class GrowthEntry:
    """Growth measurement; weight is stored in kg, lengths in cm."""
    id: str
    date_ms: int
    weight_kg: Optional[float] = None
    length_cm: Optional[float] = None
    head_circumference_cm: Optional[float] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class MilkStashEntry:
    """A stored bag of expressed milk, kept until it is used."""
    id: str
    date_ms: int
    amount_ml: float
    notes: Optional[str] = None
    is_frozen: bool = True


@dataclass
class AppState:
    """Process-wide application record; fields hold immutable values only."""
    logs: tuple[LogEntry, ...] = ()
    active_timer: Optional[ActiveTimer] = None
    reminders: ReminderConfig = field(default_factory=ReminderConfig)
    sleep_goal: SleepGoal = field(default_factory=SleepGoal)
    baby_profile: BabyProfile = field(default_factory=BabyProfile)
    growth: tuple[GrowthEntry, ...] = ()
    milk_stash: tuple[MilkStashEntry, ...] = ()
    health: HealthRecords = field(default_factory=HealthRecords)
