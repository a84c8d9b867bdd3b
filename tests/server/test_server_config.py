import sys
import tempfile
import types
import unittest
from pathlib import Path

from app_config_schema import UIServerSettings

# Import server.config without executing src/server/__init__.py.
_SERVER_DIR = Path(__file__).resolve().parents[2] / "src" / "server"
if "server" not in sys.modules:
    _pkg = types.ModuleType("server")
    _pkg.__path__ = [str(_SERVER_DIR)]  # type: ignore[attr-defined]
    sys.modules["server"] = _pkg

from server.config import ServerConfigurationError, UIServerConfig


class UIServerConfigTests(unittest.TestCase):
    def test_from_settings_uses_bundled_index_file(self) -> None:
        settings = UIServerSettings(enabled=True, host="127.0.0.1", port=8765, index_file="")

        config = UIServerConfig.from_settings(settings)

        self.assertEqual(("web_ui", "index.html"), Path(config.index_file).parts[-2:])
        self.assertTrue(Path(config.index_file).is_file())
        self.assertEqual("/ws", config.websocket_path)

    def test_from_settings_prefers_explicit_index_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            custom = Path(temp_dir) / "index.html"
            custom.write_text("<html></html>", encoding="utf-8")

            settings = UIServerSettings(
                enabled=True,
                host="127.0.0.1",
                port=8765,
                index_file=str(custom),
            )

            config = UIServerConfig.from_settings(settings)
            self.assertEqual(str(custom), config.index_file)

    def test_rejects_out_of_range_port_and_empty_host(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(enabled=False, port=0)
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(enabled=False, port=70000)
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(enabled=False, host="  ")

    def test_enabled_server_requires_existing_index_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(ServerConfigurationError):
                UIServerConfig(index_file=str(Path(temp_dir) / "missing.html"))
            with self.assertRaises(ServerConfigurationError):
                UIServerConfig(index_file=temp_dir)

    def test_disabled_server_skips_index_validation(self) -> None:
        config = UIServerConfig(enabled=False, index_file="")

        self.assertFalse(config.enabled)


if __name__ == "__main__":
    unittest.main()
