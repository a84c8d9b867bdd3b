class HealthError(Exception):
    """Base exception for vaccine and milestone checklist operations."""


class HealthItemNotFoundError(HealthError):
    """Raised when a vaccine or milestone id does not exist."""


class HealthValidationError(HealthError):
    """Raised when a checklist change is not allowed."""
