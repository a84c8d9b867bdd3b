import os
import sys
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_resolves_relative_paths(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [storage]
                    data_file = "data/state.json"

                    [ui_server]
                    index_file = "web/index.html"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual(
                str((root / "data/state.json").resolve()),
                app_config.storage.data_file,
            )
            self.assertEqual(
                str((root / "web/index.html").resolve()),
                app_config.ui_server.index_file,
            )

    def test_missing_sections_fall_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "")

            app_config = load_app_config(str(config_path))

            self.assertEqual(5, app_config.tracker.snooze_minutes)
            self.assertEqual(2, app_config.tracker.min_log_duration_seconds)
            self.assertEqual(1.0, app_config.reminders.tick_interval_seconds)
            self.assertEqual(5, app_config.reminders.cooldown_minutes)
            self.assertEqual(0, app_config.reminders.feeding)
            self.assertTrue(app_config.notifications.enabled)
            self.assertTrue(app_config.ui_server.enabled)
            self.assertEqual("", app_config.ui_server.index_file)
            self.assertTrue(app_config.storage.data_file.endswith("baby_tracker_state.json"))

    def test_reminder_and_tracker_values_are_parsed(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [tracker]
                    snooze_minutes = 10

                    [reminders]
                    tick_interval_seconds = 0.5
                    feeding = 180
                    diaper = 240

                    [notifications]
                    enabled = false
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(10, app_config.tracker.snooze_minutes)
            self.assertEqual(0.5, app_config.reminders.tick_interval_seconds)
            self.assertEqual(180, app_config.reminders.feeding)
            self.assertEqual(240, app_config.reminders.diaper)
            self.assertFalse(app_config.notifications.enabled)

    def test_invalid_values_are_rejected(self) -> None:
        cases = {
            "[tracker]\nsnooze_minutes = 0\n": "tracker.snooze_minutes",
            "[tracker]\nsnooze_minutes = true\n": "tracker.snooze_minutes",
            "[reminders]\nfeeding = -1\n": "reminders.feeding",
            "[reminders]\ntick_interval_seconds = 0\n": "reminders.tick_interval_seconds",
            "[storage]\ndata_file = \"  \"\n": "storage.data_file",
            "[notifications]\nenabled = \"maybe\"\n": "notifications.enabled",
            "ui_server = 3\n": "[ui_server]",
        }
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            for content, expected in cases.items():
                with self.subTest(expected=expected):
                    _write_text(config_path, content)
                    with self.assertRaises(AppConfigurationError) as context:
                        load_app_config(str(config_path))
                    self.assertIn(expected, str(context.exception))

    def test_unknown_sections_are_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[alarm]\nvolume = 3\n")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path))

            self.assertIn("alarm", str(context.exception))

    def test_missing_file_and_broken_toml_raise(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(Path(temp_dir) / "absent.toml"))

            broken = Path(temp_dir) / "broken.toml"
            _write_text(broken, "[storage\n")
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(broken))

    def test_resolve_config_path_prefers_environment_variable(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "custom.toml"
            _write_text(config_path, "")

            with patch.dict(os.environ, {"APP_CONFIG_FILE": str(config_path)}, clear=True):
                resolved = resolve_config_path()

            self.assertEqual(config_path, resolved)

    def test_resolve_config_path_uses_bundle_fallback(self) -> None:
        with tempfile.TemporaryDirectory() as cwd_dir, tempfile.TemporaryDirectory() as bundle_dir:
            bundled_config = Path(bundle_dir) / "config.toml"
            _write_text(bundled_config, "")

            with patch.dict(os.environ, {}, clear=True):
                with patch("app_config.Path.cwd", return_value=Path(cwd_dir)):
                    with patch.object(sys, "_MEIPASS", bundle_dir, create=True):
                        resolved = resolve_config_path()

            self.assertEqual(bundled_config, resolved)


if __name__ == "__main__":
    unittest.main()
