"""Log book over the shared activity history."""

from .errors import HistoryError, LogImportError, LogNotFoundError, LogValidationError
from .service import DailySummary, LogBook, SleepTrendDay

__all__ = [
    "DailySummary",
    "HistoryError",
    "LogBook",
    "LogImportError",
    "LogNotFoundError",
    "LogValidationError",
    "SleepTrendDay",
]
