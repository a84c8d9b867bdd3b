"""Tick handlers that publish timer progress, snooze expiry, and reminder updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from reminders import ReminderTickResult
from tracker import TimerSnapshot
from tracker.constants import (
    ACTION_AUTO_RESUME,
    ACTION_TICK,
    REASON_RESUMED,
    REASON_TICK,
)
from contracts.ui_protocol import STATE_TRACKING

from .messages import default_timer_text, timer_status_message
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing scheduler tick results."""
    logger: logging.Logger
    ui: RuntimeUIPublisher


class TickProcessor:
    """Handles tick side effects such as UI updates after a snooze ends."""

    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_tick(self, tick: ReminderTickResult, snapshot: TimerSnapshot) -> None:
        deps = self._dependencies
        for notification in tick.notifications:
            deps.logger.info(
                "Reminder shown: kind=%s type=%s",
                notification.kind,
                notification.activity_type,
            )

        if tick.resumed:
            deps.ui.publish_timer_update(
                snapshot,
                action=ACTION_AUTO_RESUME,
                accepted=True,
                reason=REASON_RESUMED,
                message=default_timer_text(ACTION_AUTO_RESUME, REASON_RESUMED, snapshot),
            )
            deps.ui.publish_state(STATE_TRACKING, message=timer_status_message(snapshot))
            return

        if not snapshot.is_active:
            return

        deps.ui.publish_timer_update(
            snapshot,
            action=ACTION_TICK,
            accepted=True,
            reason=REASON_TICK,
        )
