"""Notification sinks and errors."""

from .errors import NotificationError, NotificationPermissionError
from .sink import (
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    NotificationSink,
    PermissionState,
    UINotificationSink,
)

__all__ = [
    "NotificationError",
    "NotificationPermissionError",
    "NotificationSink",
    "PERMISSION_DENIED",
    "PERMISSION_GRANTED",
    "PermissionState",
    "UINotificationSink",
]
