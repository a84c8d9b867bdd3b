"""Thread-safe owner of the shared application state record."""

from __future__ import annotations

import contextlib
import copy
import logging
import threading
from typing import Callable, Iterable, Iterator, Optional

from tracker.types import ActiveTimer, LogEntry

from .models import AppState

StateListener = Callable[[AppState], None]


class AppStateStore:
    """Single owner of `AppState`; every mutation runs inside `transaction()`.

    A transaction works on a shallow copy of the record and commits it only
    when the block exits cleanly, so a rejected operation never leaves a
    partial change behind. Listeners (persistence, UI sync) are called after
    the lock is released with the committed record, and only when the record
    actually changed.
    """

    def __init__(
        self,
        state: Optional[AppState] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._state = state if state is not None else AppState()
        self._logger = logger or logging.getLogger("state")
        self._lock = threading.Lock()
        self._listeners: list[StateListener] = []

    def snapshot(self) -> AppState:
        with self._lock:
            return copy.copy(self._state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @contextlib.contextmanager
    def transaction(self) -> Iterator[AppState]:
        with self._lock:
            draft = copy.copy(self._state)
            yield draft
            if draft == self._state:
                return
            self._state = draft
            committed = copy.copy(draft)
            listeners = tuple(self._listeners)
        self._notify(listeners, committed)

    def apply_remote_logs(self, logs: Iterable[LogEntry]) -> None:
        """Replace the log collection with a remote snapshot (last writer wins)."""
        with self.transaction() as state:
            state.logs = tuple(logs)
        self._logger.debug("Applied remote log snapshot")

    def apply_remote_active_timer(self, timer: Optional[ActiveTimer]) -> None:
        """Replace the active-timer slot with a remote snapshot (last writer wins)."""
        with self.transaction() as state:
            state.active_timer = timer
        self._logger.debug(
            "Applied remote active timer: %s",
            timer.activity_type if timer else None,
        )

    def _notify(self, listeners: tuple[StateListener, ...], state: AppState) -> None:
        for listener in listeners:
            try:
                listener(state)
            except Exception as error:
                self._logger.error("State listener failed: %s", error, exc_info=True)
