"""Vaccine and developmental milestone checklists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, TypeVar, Union

from shared.defaults import now_ms
from state import AppStateStore, Milestone, Vaccine

from .errors import HealthItemNotFoundError, HealthValidationError

CHECKLIST_VACCINES = "vaccines"
CHECKLIST_MILESTONES = "milestones"
CHECKLISTS: tuple[str, ...] = (CHECKLIST_VACCINES, CHECKLIST_MILESTONES)

HealthItem = Union[Vaccine, Milestone]
_Item = TypeVar("_Item", Vaccine, Milestone)


@dataclass(frozen=True)
class ChecklistProgress:
    completed: int
    total: int


@dataclass(frozen=True)
class AgeGroup:
    """Checklist items due at one age, with how many are done."""
    age_months: int
    items: tuple[HealthItem, ...]
    progress: ChecklistProgress


class HealthTracker:
    """Marks scheduled vaccines and milestones done and records when."""

    def __init__(
        self,
        store: AppStateStore,
        *,
        clock: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._clock = clock or now_ms
        self._logger = logger or logging.getLogger("health")

    def vaccines(self) -> list[Vaccine]:
        return sorted(self._store.snapshot().health.vaccines, key=lambda item: item.age_months)

    def milestones(self) -> list[Milestone]:
        return sorted(
            self._store.snapshot().health.milestones,
            key=lambda item: item.age_months,
        )

    def toggle_vaccine(self, vaccine_id: str) -> Vaccine:
        return self._update(CHECKLIST_VACCINES, vaccine_id, self._toggled)

    def toggle_milestone(self, milestone_id: str) -> Milestone:
        return self._update(CHECKLIST_MILESTONES, milestone_id, self._toggled)

    def set_vaccine_date(self, vaccine_id: str, date_ms: int) -> Vaccine:
        return self._update(CHECKLIST_VACCINES, vaccine_id, _dated(date_ms))

    def set_milestone_date(self, milestone_id: str, date_ms: int) -> Milestone:
        return self._update(CHECKLIST_MILESTONES, milestone_id, _dated(date_ms))

    def progress(self) -> dict[str, ChecklistProgress]:
        records = self._store.snapshot().health
        return {
            CHECKLIST_VACCINES: _progress_of(records.vaccines),
            CHECKLIST_MILESTONES: _progress_of(records.milestones),
        }

    def by_age(self, checklist: str) -> list[AgeGroup]:
        """Group one checklist by scheduled age, youngest first."""
        if checklist == CHECKLIST_VACCINES:
            items: list[HealthItem] = list(self.vaccines())
        elif checklist == CHECKLIST_MILESTONES:
            items = list(self.milestones())
        else:
            raise HealthValidationError(f"checklist must be one of: {', '.join(CHECKLISTS)}")

        groups: dict[int, list[HealthItem]] = {}
        for item in items:
            groups.setdefault(item.age_months, []).append(item)
        return [
            AgeGroup(age_months=age, items=tuple(group), progress=_progress_of(group))
            for age, group in sorted(groups.items())
        ]

    def _toggled(self, item: _Item) -> _Item:
        if item.completed:
            return replace(item, completed=False, date_ms=None)
        return replace(item, completed=True, date_ms=self._clock())

    def _update(
        self,
        checklist: str,
        item_id: str,
        change: Callable[[_Item], _Item],
    ) -> _Item:
        with self._store.transaction() as state:
            items = getattr(state.health, checklist)
            index = _index_of(items, item_id)
            updated = change(items[index])
            replaced = items[:index] + (updated,) + items[index + 1 :]
            state.health = replace(state.health, **{checklist: replaced})

        self._logger.info(
            "Health item updated: %s id=%s completed=%s",
            checklist,
            item_id,
            updated.completed,
        )
        return updated


def _dated(date_ms: int) -> Callable[[_Item], _Item]:
    def change(item: _Item) -> _Item:
        if not item.completed:
            raise HealthValidationError(f"{item.id} must be completed before it gets a date")
        return replace(item, date_ms=int(date_ms))

    return change


def _index_of(items: tuple[HealthItem, ...], item_id: str) -> int:
    for index, item in enumerate(items):
        if item.id == str(item_id):
            return index
    raise HealthItemNotFoundError(f"No health item with id {item_id!r}")


def _progress_of(items) -> ChecklistProgress:
    items = list(items)
    return ChecklistProgress(
        completed=sum(1 for item in items if item.completed),
        total=len(items),
    )