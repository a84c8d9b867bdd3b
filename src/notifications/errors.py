class NotificationError(Exception):
    """Base exception for notification delivery."""


class NotificationPermissionError(NotificationError):
    """Raised when the platform refuses to show notifications."""
