"""Growth measurements, unit handling, and WHO reference comparison."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Optional

from shared.defaults import MS_PER_DAY
from state import AppStateStore, BabyProfile, GrowthEntry
from tracker import generate_log_id

from .errors import GrowthEntryNotFoundError
from .standards import (
    METRIC_HEAD_CIRCUMFERENCE,
    METRIC_LENGTH,
    METRIC_WEIGHT,
    METRICS,
    SEXES,
    ReferenceRow,
    reference_series,
)

DAYS_PER_MONTH = 30.437
LB_PER_KG = 2.20462
CM_PER_INCH = 2.54

WEIGHT_UNITS: tuple[str, ...] = ("kg", "lb")
LENGTH_UNITS: tuple[str, ...] = ("cm", "in")

BAND_BELOW_P3 = "below_p3"
BAND_NORMAL = "normal"
BAND_ABOVE_P97 = "above_p97"


def kg_to_lb(kg: float) -> float:
    return kg * LB_PER_KG


def lb_to_kg(lb: float) -> float:
    return lb / LB_PER_KG


def cm_to_in(cm: float) -> float:
    return cm / CM_PER_INCH


def in_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def format_weight(kg: float, unit: str) -> str:
    if unit == "kg":
        return f"{kg:.2f}kg"
    return f"{kg_to_lb(kg):.2f}lb"


def format_length(cm: float, unit: str) -> str:
    if unit == "cm":
        return f"{cm:.1f}cm"
    return f"{cm_to_in(cm):.1f}in"


def age_in_months(birth_ms: int, target_ms: int) -> float:
    """Fractional age in months using the average month length."""
    return (target_ms - birth_ms) / MS_PER_DAY / DAYS_PER_MONTH


@dataclass(frozen=True)
class ReferenceComparison:
    """A measurement placed against the WHO row at or below its age."""
    metric: str
    value: float
    age_months: float
    reference: ReferenceRow
    band: str


def compare_to_reference(
    metric: str,
    sex: str,
    age_months: float,
    value: float,
) -> ReferenceComparison:
    rows = reference_series(metric, sex)
    reference = rows[0]
    for row in rows:
        if row.month > age_months:
            break
        reference = row

    if value < reference.p3:
        band = BAND_BELOW_P3
    elif value > reference.p97:
        band = BAND_ABOVE_P97
    else:
        band = BAND_NORMAL
    return ReferenceComparison(
        metric=metric,
        value=value,
        age_months=age_months,
        reference=reference,
        band=band,
    )


def measurement_of(entry: GrowthEntry, metric: str) -> Optional[float]:
    if metric == METRIC_WEIGHT:
        return entry.weight_kg
    if metric == METRIC_LENGTH:
        return entry.length_cm
    if metric == METRIC_HEAD_CIRCUMFERENCE:
        return entry.head_circumference_cm
    raise ValueError(f"Unknown growth metric: {metric!r}")


class GrowthTracker:
    """Stores measurements in canonical kg/cm and compares them to WHO rows."""

    def __init__(
        self,
        store: AppStateStore,
        *,
        id_factory: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._id_factory = id_factory or generate_log_id
        self._logger = logger or logging.getLogger("growth")

    def update_profile(self, **changes: Any) -> BabyProfile:
        """Change name, gender, birth date, or display units of the baby profile."""
        allowed = {item.name for item in fields(BabyProfile)}
        unknown = sorted(set(changes) - allowed)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(unknown)}")

        if "birth_date_ms" in changes:
            changes["birth_date_ms"] = _birth_date_ms(changes["birth_date_ms"])
        if "name" in changes and not isinstance(changes["name"], str):
            raise ValueError("name must be a string")

        with self._store.transaction() as state:
            profile = replace(state.baby_profile, **changes)
            if profile.gender not in SEXES:
                raise ValueError(f"gender must be one of: {', '.join(SEXES)}")
            if profile.weight_unit not in WEIGHT_UNITS:
                raise ValueError(f"weight_unit must be one of: {', '.join(WEIGHT_UNITS)}")
            if profile.length_unit not in LENGTH_UNITS:
                raise ValueError(f"length_unit must be one of: {', '.join(LENGTH_UNITS)}")
            if not profile.name.strip():
                raise ValueError("name must not be empty")
            state.baby_profile = profile
        return profile

    def entries(self) -> list[GrowthEntry]:
        return sorted(self._store.snapshot().growth, key=lambda entry: entry.date_ms)

    def save_entry(
        self,
        date_ms: int,
        *,
        weight: Optional[float] = None,
        length: Optional[float] = None,
        head_circumference: Optional[float] = None,
        notes: Optional[str] = None,
        entry_id: Optional[str] = None,
    ) -> GrowthEntry:
        """Add a measurement, or replace `entry_id`; inputs use the profile's units."""
        if weight is None and length is None and head_circumference is None:
            raise ValueError("At least one measurement is required")
        with self._store.transaction() as state:
            profile = state.baby_profile
            entry = GrowthEntry(
                id=entry_id or self._id_factory(),
                date_ms=int(date_ms),
                weight_kg=_weight_to_kg(weight, profile),
                length_cm=_length_to_cm(length, profile),
                head_circumference_cm=_length_to_cm(head_circumference, profile),
                notes=(notes or "").strip() or None,
            )
            if entry_id is None:
                state.growth = state.growth + (entry,)
            else:
                if not any(item.id == entry_id for item in state.growth):
                    raise GrowthEntryNotFoundError(f"No growth entry with id {entry_id!r}")
                state.growth = tuple(
                    entry if item.id == entry_id else item for item in state.growth
                )

        self._logger.info("Growth entry saved: id=%s", entry.id)
        return entry

    def delete_entry(self, entry_id: str) -> None:
        with self._store.transaction() as state:
            remaining = tuple(item for item in state.growth if item.id != entry_id)
            if len(remaining) == len(state.growth):
                raise GrowthEntryNotFoundError(f"No growth entry with id {entry_id!r}")
            state.growth = remaining
        self._logger.info("Growth entry deleted: id=%s", entry_id)

    def latest_measurement(self, metric: str) -> Optional[GrowthEntry]:
        for entry in reversed(self.entries()):
            if measurement_of(entry, metric) is not None:
                return entry
        return None

    def report(self) -> list[ReferenceComparison]:
        """Compare the latest value of every metric with the reference for its age."""
        profile = self._store.snapshot().baby_profile
        comparisons = []
        for metric in METRICS:
            entry = self.latest_measurement(metric)
            if entry is None:
                continue
            value = measurement_of(entry, metric)
            comparisons.append(
                compare_to_reference(
                    metric,
                    profile.gender,
                    age_in_months(profile.birth_date_ms, entry.date_ms),
                    value,
                )
            )
        return comparisons


def _birth_date_ms(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("birth_date_ms must be an epoch-ms number")
    return int(value)


def _weight_to_kg(value: Optional[float], profile: BabyProfile) -> Optional[float]:
    if value is None:
        return None
    return lb_to_kg(value) if profile.weight_unit == "lb" else float(value)


def _length_to_cm(value: Optional[float], profile: BabyProfile) -> Optional[float]:
    if value is None:
        return None
    return in_to_cm(value) if profile.length_unit == "in" else float(value)
