class StorageError(Exception):
    """Base exception for state persistence."""


class StorageReadError(StorageError):
    """Raised when a persisted state document cannot be read or decoded."""


class StorageWriteError(StorageError):
    """Raised when the state document cannot be written."""
