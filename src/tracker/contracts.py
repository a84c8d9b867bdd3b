"""Protocols describing the state owner used by tracker services."""

from __future__ import annotations

from typing import Any, ContextManager, Optional, Protocol

from .types import ActiveTimer, LogEntry


class TrackerStateLike(Protocol):
    """Subset of the application record touched by the timer controller."""
    active_timer: Optional[ActiveTimer]
    logs: tuple[LogEntry, ...]


class StateOwnerLike(Protocol):
    """State owner interface expected by the timer controller."""
    def snapshot(self) -> Any:
        ...

    def transaction(self) -> ContextManager[Any]:
        ...
