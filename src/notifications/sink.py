"""Notification sinks used by the reminder scheduler."""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional, Protocol

from contracts.ui_protocol import EVENT_NOTIFICATION

from .errors import NotificationPermissionError

PermissionState = Literal["granted", "denied"]

PERMISSION_GRANTED: PermissionState = "granted"
PERMISSION_DENIED: PermissionState = "denied"


class NotificationSink(Protocol):
    """Platform notification interface; `show` is fire-and-forget."""
    def request_permission(self) -> PermissionState:
        ...

    def show(self, title: str, body: str) -> None:
        ...


class EventPublisherLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class UINotificationSink:
    """Delivers notifications to connected browser clients as websocket events."""

    def __init__(
        self,
        publisher: EventPublisherLike,
        *,
        enabled: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        self._publisher = publisher
        self._enabled = enabled
        self._logger = logger or logging.getLogger("notifications")

    def request_permission(self) -> PermissionState:
        return PERMISSION_GRANTED if self._enabled else PERMISSION_DENIED

    def show(self, title: str, body: str) -> None:
        if not self._enabled:
            raise NotificationPermissionError("Notifications are disabled in config.toml")
        self._logger.info("Notification: %s - %s", title, body)
        self._publisher.publish(EVENT_NOTIFICATION, title=title, body=body)
