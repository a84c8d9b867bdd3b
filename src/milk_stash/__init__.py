"""Milk stash inventory."""

from .errors import MilkStashError, StashEntryNotFoundError, StashValidationError
from .service import (
    EXPIRY_WARNING_DAYS,
    SHELF_LIFE_DAYS,
    MilkStash,
    StashInventory,
    StashItem,
    expiry_of,
)

__all__ = [
    "EXPIRY_WARNING_DAYS",
    "SHELF_LIFE_DAYS",
    "MilkStash",
    "MilkStashError",
    "StashEntryNotFoundError",
    "StashInventory",
    "StashItem",
    "StashValidationError",
    "expiry_of",
]
