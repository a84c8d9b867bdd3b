"""Stored breast milk inventory, used oldest first."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from shared.defaults import MS_PER_DAY, now_ms
from state import AppStateStore, MilkStashEntry
from tracker import generate_log_id

from .errors import StashEntryNotFoundError, StashValidationError

SHELF_LIFE_DAYS = 90
EXPIRY_WARNING_DAYS = 7


@dataclass(frozen=True)
class StashItem:
    entry: MilkStashEntry
    expires_at_ms: int
    expired: bool
    expiring: bool


@dataclass(frozen=True)
class StashInventory:
    """Stash contents oldest first, with the total volume and expiry flags."""
    items: tuple[StashItem, ...]
    total_ml: float

    @property
    def expiring_count(self) -> int:
        return sum(1 for item in self.items if item.expiring)


def expiry_of(entry: MilkStashEntry) -> int:
    return entry.date_ms + SHELF_LIFE_DAYS * MS_PER_DAY


class MilkStash:
    def __init__(
        self,
        store: AppStateStore,
        *,
        clock: Optional[Callable[[], int]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._clock = clock or now_ms
        self._id_factory = id_factory or generate_log_id
        self._logger = logger or logging.getLogger("milk_stash")

    def entries(self) -> list[MilkStashEntry]:
        return sorted(self._store.snapshot().milk_stash, key=lambda entry: entry.date_ms)

    def total_ml(self) -> float:
        return sum(entry.amount_ml for entry in self._store.snapshot().milk_stash)

    def add(
        self,
        amount_ml: Any,
        *,
        date_ms: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> MilkStashEntry:
        """Store a frozen bag; `date_ms` is when it was expressed and defaults to now."""
        if isinstance(amount_ml, bool) or not isinstance(amount_ml, (int, float)):
            raise StashValidationError("amount_ml must be a number")
        if amount_ml <= 0:
            raise StashValidationError("amount_ml must be greater than zero")

        entry = MilkStashEntry(
            id=self._id_factory(),
            date_ms=self._clock() if date_ms is None else int(date_ms),
            amount_ml=float(amount_ml),
            notes=(notes or "").strip() or None,
            is_frozen=True,
        )
        with self._store.transaction() as state:
            state.milk_stash = state.milk_stash + (entry,)
        self._logger.info("Stash entry added: id=%s amount=%.0fml", entry.id, entry.amount_ml)
        return entry

    def use(self, entry_id: str) -> MilkStashEntry:
        """Take an entry out of the stash and return it."""
        with self._store.transaction() as state:
            for index, entry in enumerate(state.milk_stash):
                if entry.id == str(entry_id):
                    state.milk_stash = state.milk_stash[:index] + state.milk_stash[index + 1 :]
                    break
            else:
                raise StashEntryNotFoundError(f"No stash entry with id {entry_id!r}")
        self._logger.info("Stash entry used: id=%s", entry.id)
        return entry

    def inventory(self) -> StashInventory:
        now = self._clock()
        warn_before = now + EXPIRY_WARNING_DAYS * MS_PER_DAY
        entries = self.entries()
        items = []
        for entry in entries:
            expires_at = expiry_of(entry)
            items.append(
                StashItem(
                    entry=entry,
                    expires_at_ms=expires_at,
                    expired=expires_at <= now,
                    expiring=expires_at < warn_before,
                )
            )
        return StashInventory(
            items=tuple(items),
            total_ml=sum(entry.amount_ml for entry in entries),
        )
