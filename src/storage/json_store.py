"""Whole-document JSON persistence for the application state."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from state import AppState
from state.codec import app_state_from_dict, app_state_to_dict

from .errors import StorageReadError, StorageWriteError

DOCUMENT_VERSION = 1


class JsonStateRepository:
    """Reads the state once at startup and rewrites it after each mutation."""

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger("storage")

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> AppState:
        """Decode the stored document, raising `StorageReadError` on any failure."""
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as error:
            raise StorageReadError(f"Failed to read {self._path}: {error}") from error

        if not isinstance(raw, dict):
            raise StorageReadError(f"State document must be an object: {self._path}")

        try:
            return app_state_from_dict(raw.get("state", raw))
        except (KeyError, TypeError, ValueError) as error:
            raise StorageReadError(f"Malformed state document {self._path}: {error}") from error

    def load(self) -> AppState:
        """Return the stored state, or defaults when it is missing or corrupted."""
        if not self._path.exists():
            self._logger.info("No state file at %s, starting with defaults", self._path)
            return AppState()

        try:
            state = self.read()
        except StorageReadError as error:
            self._logger.warning("%s; falling back to defaults", error)
            self._set_aside_corrupt_file()
            return AppState()

        self._logger.info(
            "Loaded state from %s (%d logs, timer=%s)",
            self._path,
            len(state.logs),
            state.active_timer.activity_type if state.active_timer else None,
        )
        return state

    def write(self, state: AppState) -> None:
        document = {"version": DOCUMENT_VERSION, "state": app_state_to_dict(state)}
        # Temp file + atomic rename so a crash never leaves a truncated document.
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as error:
            raise StorageWriteError(f"Failed to write {self._path}: {error}") from error

    def _set_aside_corrupt_file(self) -> None:
        # The next save would overwrite the unreadable document otherwise.
        corrupt_path = self._path.with_suffix(self._path.suffix + ".corrupt")
        try:
            self._path.replace(corrupt_path)
        except OSError as error:
            self._logger.error("Failed to move %s aside: %s", self._path, error)
            return
        self._logger.warning("Moved unreadable state file to %s", corrupt_path)

    def save(self, state: AppState) -> None:
        """Fire-and-forget write used as a state listener; failures are logged only."""
        try:
            self.write(state)
        except StorageWriteError as error:
            self._logger.error("%s", error)
