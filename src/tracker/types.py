"""Immutable activity, timer, and log records shared by tracker services."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal, Mapping, Optional

from .constants import (
    ACTIVITY_FEEDING,
    ACTIVITY_PUMPING,
    ACTIVITY_TYPES,
    DIAPER_STATES,
    FEEDING_SIDES,
    FEEDING_TYPES,
    ACTIVE_PHASES,
)

ActivityType = Literal["feeding", "sleep", "diaper", "pumping", "solids"]
TimerPhase = Literal["idle", "running", "paused", "snoozed"]


def validate_activity_type(value: Any) -> str:
    if value not in ACTIVITY_TYPES:
        allowed = ", ".join(ACTIVITY_TYPES)
        raise ValueError(f"activity type must be one of: {allowed}; got {value!r}")
    return value


@dataclass(frozen=True)
class ActivityDetails:
    """Activity-specific payload; which fields apply depends on the activity type."""
    feeding_type: Optional[str] = None
    side: Optional[str] = None
    amount_ml: Optional[float] = None
    diaper_state: Optional[str] = None
    foods: tuple[str, ...] = ()
    reaction: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.feeding_type is not None and self.feeding_type not in FEEDING_TYPES:
            raise ValueError(f"Invalid feeding_type: {self.feeding_type!r}")
        if self.side is not None and self.side not in FEEDING_SIDES:
            raise ValueError(f"Invalid side: {self.side!r}")
        if self.diaper_state is not None and self.diaper_state not in DIAPER_STATES:
            raise ValueError(f"Invalid diaper_state: {self.diaper_state!r}")
        if self.amount_ml is not None and self.amount_ml < 0:
            raise ValueError("amount_ml must be >= 0")
        if isinstance(self.foods, str):
            raise ValueError("foods must be a list of food names, not a string")
        if not isinstance(self.foods, tuple):
            object.__setattr__(self, "foods", tuple(self.foods))

    @classmethod
    def defaults_for(cls, activity_type: str) -> "ActivityDetails":
        if activity_type == ACTIVITY_FEEDING:
            return cls(feeding_type="nursing", side="left")
        if activity_type == ACTIVITY_PUMPING:
            return cls(side="left")
        return cls()

    def merged(self, changes: Mapping[str, Any]) -> "ActivityDetails":
        known = {item.name for item in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValueError(f"Unknown detail fields: {', '.join(unknown)}")
        return replace(self, **dict(changes))


@dataclass(frozen=True)
class ActiveTimer:
    """The single in-progress activity session, if any."""
    activity_type: str
    start_time_ms: int
    details: ActivityDetails = field(default_factory=ActivityDetails)
    pause_start_ms: Optional[int] = None
    snooze_end_ms: Optional[int] = None
    ignored_duration_ms: int = 0

    def __post_init__(self) -> None:
        if self.snooze_end_ms is not None and self.pause_start_ms is None:
            raise ValueError("snooze_end_ms requires pause_start_ms")

    @property
    def is_paused(self) -> bool:
        return self.pause_start_ms is not None

    @property
    def is_snoozed(self) -> bool:
        return self.snooze_end_ms is not None

    @property
    def phase(self) -> TimerPhase:
        if self.is_snoozed:
            return "snoozed"
        if self.is_paused:
            return "paused"
        return "running"

    def elapsed_ms(self, now_ms: int) -> int:
        effective_now = self.pause_start_ms if self.pause_start_ms is not None else now_ms
        return effective_now - self.start_time_ms - self.ignored_duration_ms

    def resumed(self, now_ms: int) -> "ActiveTimer":
        """Fold the current pause into ignored time and clear pause and snooze."""
        if self.pause_start_ms is None:
            return self
        paused_for = now_ms - self.pause_start_ms
        return replace(
            self,
            pause_start_ms=None,
            snooze_end_ms=None,
            ignored_duration_ms=self.ignored_duration_ms + paused_for,
        )


@dataclass(frozen=True)
class LogEntry:
    """A finalized activity record."""
    id: str
    activity_type: str
    start_time_ms: int
    end_time_ms: Optional[int] = None
    duration_seconds: Optional[int] = None
    details: ActivityDetails = field(default_factory=ActivityDetails)

    @property
    def reference_time_ms(self) -> int:
        return self.end_time_ms if self.end_time_ms is not None else self.start_time_ms


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable timer view exposed to runtime and UI publishers."""
    phase: TimerPhase
    activity_type: Optional[str] = None
    start_time_ms: Optional[int] = None
    elapsed_seconds: int = 0
    snooze_end_ms: Optional[int] = None
    details: Optional[ActivityDetails] = None

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES


@dataclass(frozen=True)
class TimerActionResult:
    """Result envelope returned after applying a timer action."""
    action: str
    accepted: bool
    reason: str
    snapshot: TimerSnapshot
    log_entry: Optional[LogEntry] = None
