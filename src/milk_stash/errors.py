class MilkStashError(Exception):
    """Base exception for milk stash operations."""


class StashEntryNotFoundError(MilkStashError):
    """Raised when a stash entry id does not exist."""


class StashValidationError(MilkStashError):
    """Raised when a stash entry would be invalid (e.g. a non-positive amount)."""
