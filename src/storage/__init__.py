"""State persistence collaborators."""

from .errors import StorageError, StorageReadError, StorageWriteError
from .json_store import JsonStateRepository

__all__ = [
    "JsonStateRepository",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
