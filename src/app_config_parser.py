"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    DEFAULT_DATA_FILE,
    AppConfig,
    AppConfigurationError,
    NotificationSettings,
    ReminderSettings,
    StorageSettings,
    TrackerSettings,
    UIServerSettings,
)

_KNOWN_SECTIONS = {"storage", "tracker", "reminders", "notifications", "ui_server"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    unknown = sorted(key for key in raw if key not in _KNOWN_SECTIONS)
    if unknown:
        raise AppConfigurationError(f"Unknown config sections: {', '.join(unknown)}.")

    return AppConfig(
        storage=_parse_storage_settings(_section(raw, "storage"), base_dir=base_dir),
        tracker=_parse_tracker_settings(_section(raw, "tracker")),
        reminders=_parse_reminder_settings(_section(raw, "reminders")),
        notifications=_parse_notification_settings(_section(raw, "notifications")),
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir),
        source_file=source_file,
    )


def _parse_storage_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> StorageSettings:
    data_file = _as_str(section.get("data_file", DEFAULT_DATA_FILE), "storage.data_file")
    if not data_file:
        raise AppConfigurationError("storage.data_file must not be empty.")
    return StorageSettings(data_file=_resolve_path(base_dir, data_file))


def _parse_tracker_settings(section: Mapping[str, Any]) -> TrackerSettings:
    snooze_minutes = _as_int(section.get("snooze_minutes", 5), "tracker.snooze_minutes")
    if snooze_minutes <= 0:
        raise AppConfigurationError("tracker.snooze_minutes must be > 0.")
    return TrackerSettings(
        snooze_minutes=snooze_minutes,
        min_log_duration_seconds=_as_non_negative_int(
            section.get("min_log_duration_seconds", 2),
            "tracker.min_log_duration_seconds",
        ),
    )


def _parse_reminder_settings(section: Mapping[str, Any]) -> ReminderSettings:
    tick_interval = _as_float(
        section.get("tick_interval_seconds", 1.0),
        "reminders.tick_interval_seconds",
    )
    if tick_interval <= 0:
        raise AppConfigurationError("reminders.tick_interval_seconds must be > 0.")
    return ReminderSettings(
        tick_interval_seconds=tick_interval,
        cooldown_minutes=_as_non_negative_int(
            section.get("cooldown_minutes", 5),
            "reminders.cooldown_minutes",
        ),
        feeding=_as_non_negative_int(section.get("feeding", 0), "reminders.feeding"),
        sleep=_as_non_negative_int(section.get("sleep", 0), "reminders.sleep"),
        diaper=_as_non_negative_int(section.get("diaper", 0), "reminders.diaper"),
    )


def _parse_notification_settings(section: Mapping[str, Any]) -> NotificationSettings:
    return NotificationSettings(
        enabled=_as_bool(section.get("enabled", True), "notifications.enabled"),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_non_negative_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number < 0:
        raise AppConfigurationError(f"{field} must be >= 0.")
    return number


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
