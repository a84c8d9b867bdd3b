class GrowthError(Exception):
    """Base exception for growth and profile operations."""


class GrowthEntryNotFoundError(GrowthError):
    """Raised when a growth entry id does not exist."""
