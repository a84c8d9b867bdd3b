class HistoryError(Exception):
    """Base exception for log book operations."""


class LogValidationError(HistoryError):
    """Raised when a log entry would be inconsistent (e.g. ends before it starts)."""


class LogNotFoundError(HistoryError):
    """Raised when a log id does not exist."""


class LogImportError(HistoryError):
    """Raised when imported log data cannot be parsed."""
