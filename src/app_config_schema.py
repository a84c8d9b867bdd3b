"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_DATA_FILE = "baby_tracker_state.json"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class StorageSettings:
    """State document location from `[storage]`."""
    data_file: str = DEFAULT_DATA_FILE


@dataclass(frozen=True)
class TrackerSettings:
    """Active timer tuning from `[tracker]`."""
    snooze_minutes: int = 5
    min_log_duration_seconds: int = 2


@dataclass(frozen=True)
class ReminderSettings:
    """Tick cadence, cooldown, and initial per-activity intervals from `[reminders]`.

    Intervals seed a fresh state only; once the user changes them the stored
    values win.
    """
    tick_interval_seconds: float = 1.0
    cooldown_minutes: int = 5
    feeding: int = 0
    sleep: int = 0
    diaper: int = 0


@dataclass(frozen=True)
class NotificationSettings:
    enabled: bool = True


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    storage: StorageSettings
    tracker: TrackerSettings
    reminders: ReminderSettings
    notifications: NotificationSettings
    ui_server: UIServerSettings
    source_file: str
