"""Activity timer state machine over the shared application state."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any, Callable, Optional

from shared.defaults import (
    DEFAULT_SNOOZE_SECONDS,
    MIN_LOG_DURATION_SECONDS,
    MS_PER_SECOND,
    now_ms,
)

from .constants import (
    ACTION_AUTO_RESUME,
    ACTION_CANCEL,
    ACTION_EDIT_START,
    ACTION_SNOOZE,
    ACTION_START,
    ACTION_STOP,
    ACTION_TOGGLE_PAUSE,
    ACTION_UPDATE_DETAILS,
    PHASE_IDLE,
    REASON_ALREADY_SNOOZED,
    REASON_CANCELLED,
    REASON_LOGGED,
    REASON_NOT_ACTIVE,
    REASON_NOT_SNOOZED,
    REASON_PAUSED,
    REASON_RESUMED,
    REASON_SNOOZE_PENDING,
    REASON_SNOOZED,
    REASON_START_EDITED,
    REASON_STARTED,
    REASON_TIMER_ACTIVE,
    REASON_TOO_SHORT,
    REASON_UPDATED,
)
from .contracts import StateOwnerLike, TrackerStateLike
from .types import (
    ActiveTimer,
    ActivityDetails,
    LogEntry,
    TimerActionResult,
    TimerSnapshot,
    validate_activity_type,
)


def generate_log_id() -> str:
    return uuid.uuid4().hex[:12]


class ActiveTimerController:
    """Owns the lifecycle of at most one running activity session.

    The controller keeps no timer of its own: every operation re-reads the
    active-timer slot from the state owner inside a transaction, so a slot
    replaced by a remote snapshot between calls is always honored.
    """

    def __init__(
        self,
        store: StateOwnerLike,
        *,
        clock: Optional[Callable[[], int]] = None,
        snooze_seconds: int = DEFAULT_SNOOZE_SECONDS,
        min_log_duration_seconds: int = MIN_LOG_DURATION_SECONDS,
        id_factory: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if snooze_seconds <= 0:
            raise ValueError("snooze_seconds must be greater than zero")

        self._store = store
        self._clock = clock or now_ms
        self._snooze_ms = int(snooze_seconds) * MS_PER_SECOND
        self._min_log_duration_seconds = int(min_log_duration_seconds)
        self._id_factory = id_factory or generate_log_id
        self._logger = logger or logging.getLogger("tracker")

    def snapshot(self, now: Optional[int] = None) -> TimerSnapshot:
        timer = self._store.snapshot().active_timer
        return _snapshot_of(timer, self._now(now))

    def elapsed_seconds(self, now: Optional[int] = None) -> int:
        timer = self._store.snapshot().active_timer
        if timer is None:
            return 0
        return timer.elapsed_ms(self._now(now)) // MS_PER_SECOND

    def start(
        self,
        activity_type: str,
        *,
        details: Optional[ActivityDetails] = None,
    ) -> TimerActionResult:
        validate_activity_type(activity_type)
        now = self._clock()
        with self._store.transaction() as state:
            if state.active_timer is not None:
                return _result(ACTION_START, False, REASON_TIMER_ACTIVE, state, now)

            state.active_timer = ActiveTimer(
                activity_type=activity_type,
                start_time_ms=now,
                details=details or ActivityDetails.defaults_for(activity_type),
                ignored_duration_ms=0,
            )
            self._logger.info("Timer started: type=%s", activity_type)
            return _result(ACTION_START, True, REASON_STARTED, state, now)

    def update_details(self, **changes: Any) -> TimerActionResult:
        now = self._clock()
        with self._store.transaction() as state:
            timer = state.active_timer
            if timer is None:
                return _result(ACTION_UPDATE_DETAILS, False, REASON_NOT_ACTIVE, state, now)

            state.active_timer = replace(timer, details=timer.details.merged(changes))
            return _result(ACTION_UPDATE_DETAILS, True, REASON_UPDATED, state, now)

    def toggle_pause(self) -> TimerActionResult:
        now = self._clock()
        with self._store.transaction() as state:
            timer = state.active_timer
            if timer is None:
                return _result(ACTION_TOGGLE_PAUSE, False, REASON_NOT_ACTIVE, state, now)

            if timer.is_paused:
                state.active_timer = timer.resumed(now)
                self._logger.info(
                    "Timer resumed: type=%s ignored=%sms",
                    timer.activity_type,
                    state.active_timer.ignored_duration_ms,
                )
                return _result(ACTION_TOGGLE_PAUSE, True, REASON_RESUMED, state, now)

            state.active_timer = replace(timer, pause_start_ms=now)
            self._logger.info("Timer paused: type=%s", timer.activity_type)
            return _result(ACTION_TOGGLE_PAUSE, True, REASON_PAUSED, state, now)

    def snooze(self, window_ms: Optional[int] = None) -> TimerActionResult:
        now = self._clock()
        window = self._snooze_ms if window_ms is None else int(window_ms)
        if window <= 0:
            raise ValueError("window_ms must be greater than zero")

        with self._store.transaction() as state:
            timer = state.active_timer
            if timer is None:
                return _result(ACTION_SNOOZE, False, REASON_NOT_ACTIVE, state, now)
            if timer.is_snoozed:
                return _result(ACTION_SNOOZE, True, REASON_ALREADY_SNOOZED, state, now)

            pause_start = timer.pause_start_ms if timer.is_paused else now
            state.active_timer = replace(
                timer,
                pause_start_ms=pause_start,
                snooze_end_ms=now + window,
            )
            self._logger.info(
                "Timer snoozed: type=%s until=%s",
                timer.activity_type,
                now + window,
            )
            return _result(ACTION_SNOOZE, True, REASON_SNOOZED, state, now)

    def edit_start_time(self, start_time_ms: int) -> TimerActionResult:
        """Move the session start; previously ignored pause time is kept as is."""
        now = self._clock()
        with self._store.transaction() as state:
            timer = state.active_timer
            if timer is None:
                return _result(ACTION_EDIT_START, False, REASON_NOT_ACTIVE, state, now)

            state.active_timer = replace(timer, start_time_ms=int(start_time_ms))
            return _result(ACTION_EDIT_START, True, REASON_START_EDITED, state, now)

    def stop(self) -> TimerActionResult:
        now = self._clock()
        with self._store.transaction() as state:
            timer = state.active_timer
            if timer is None:
                return _result(ACTION_STOP, False, REASON_NOT_ACTIVE, state, now)

            effective_end = timer.pause_start_ms if timer.is_paused else now
            duration_seconds = (
                effective_end - timer.start_time_ms - timer.ignored_duration_ms
            ) // MS_PER_SECOND
            state.active_timer = None

            if duration_seconds <= self._min_log_duration_seconds:
                self._logger.info(
                    "Timer discarded as accidental start: type=%s duration=%ss",
                    timer.activity_type,
                    duration_seconds,
                )
                return _result(ACTION_STOP, True, REASON_TOO_SHORT, state, now)

            entry = LogEntry(
                id=self._id_factory(),
                activity_type=timer.activity_type,
                start_time_ms=timer.start_time_ms,
                end_time_ms=effective_end,
                duration_seconds=duration_seconds,
                details=timer.details,
            )
            state.logs = state.logs + (entry,)
            self._logger.info(
                "Timer stopped: type=%s duration=%ss",
                timer.activity_type,
                duration_seconds,
            )
            return _result(ACTION_STOP, True, REASON_LOGGED, state, now, log_entry=entry)

    def cancel(self) -> TimerActionResult:
        now = self._clock()
        with self._store.transaction() as state:
            timer = state.active_timer
            if timer is None:
                return _result(ACTION_CANCEL, False, REASON_NOT_ACTIVE, state, now)

            state.active_timer = None
            self._logger.info("Timer cancelled: type=%s", timer.activity_type)
            return _result(ACTION_CANCEL, True, REASON_CANCELLED, state, now)

    def resume_expired_snooze(self, now: Optional[int] = None) -> TimerActionResult:
        current = self._now(now)
        with self._store.transaction() as state:
            timer = state.active_timer
            if timer is None:
                return _result(ACTION_AUTO_RESUME, False, REASON_NOT_ACTIVE, state, current)
            if timer.snooze_end_ms is None or timer.pause_start_ms is None:
                return _result(ACTION_AUTO_RESUME, False, REASON_NOT_SNOOZED, state, current)
            if current < timer.snooze_end_ms:
                return _result(ACTION_AUTO_RESUME, False, REASON_SNOOZE_PENDING, state, current)

            state.active_timer = timer.resumed(current)
            self._logger.info("Snooze elapsed, timer resumed: type=%s", timer.activity_type)
            return _result(ACTION_AUTO_RESUME, True, REASON_RESUMED, state, current)

    def _now(self, now: Optional[int]) -> int:
        return self._clock() if now is None else int(now)


def _result(
    action: str,
    accepted: bool,
    reason: str,
    state: TrackerStateLike,
    now: int,
    *,
    log_entry: Optional[LogEntry] = None,
) -> TimerActionResult:
    return TimerActionResult(
        action=action,
        accepted=accepted,
        reason=reason,
        snapshot=_snapshot_of(state.active_timer, now),
        log_entry=log_entry,
    )


def _snapshot_of(timer: Optional[ActiveTimer], now: int) -> TimerSnapshot:
    if timer is None:
        return TimerSnapshot(phase=PHASE_IDLE)
    return TimerSnapshot(
        phase=timer.phase,
        activity_type=timer.activity_type,
        start_time_ms=timer.start_time_ms,
        elapsed_seconds=timer.elapsed_ms(now) // MS_PER_SECOND,
        snooze_end_ms=timer.snooze_end_ms,
        details=timer.details,
    )
