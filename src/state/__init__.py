"""Application state record, its owner, and the document codec."""

from .health_records import (
    DEFAULT_MILESTONES,
    DEFAULT_VACCINES,
    MILESTONE_CATEGORIES,
    HealthRecords,
    Milestone,
    Vaccine,
)
from .models import (
    REMINDER_ACTIVITY_TYPES,
    AppState,
    BabyProfile,
    GrowthEntry,
    MilkStashEntry,
    ReminderConfig,
    SleepGoal,
)
from .store import AppStateStore

__all__ = [
    "DEFAULT_MILESTONES",
    "DEFAULT_VACCINES",
    "MILESTONE_CATEGORIES",
    "REMINDER_ACTIVITY_TYPES",
    "AppState",
    "AppStateStore",
    "BabyProfile",
    "GrowthEntry",
    "HealthRecords",
    "MilkStashEntry",
    "Milestone",
    "ReminderConfig",
    "SleepGoal",
    "Vaccine",
]
