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
    def test_load_app_config_parses_sections_and_resolves_paths(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [ui_server]
                    host = "0.0.0.0"
                    port = "9000"
                    index_file = "web/index.html"

                    [notifications]
                    enabled = "off"

                    [logging]
                    level = "debug"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual("0.0.0.0", app_config.ui_server.host)
            self.assertEqual(9000, app_config.ui_server.port)
            self.assertEqual(
                str((root / "web/index.html").resolve()),
                app_config.ui_server.index_file,
            )
            self.assertFalse(app_config.notifications.enabled)
            self.assertEqual("DEBUG", app_config.logging.level)

    def test_load_app_config_defaults_for_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "")

            app_config = load_app_config(str(config_path))

            self.assertTrue(app_config.ui_server.enabled)
            self.assertEqual("127.0.0.1", app_config.ui_server.host)
            self.assertEqual(8765, app_config.ui_server.port)
            self.assertEqual("", app_config.ui_server.index_file)
            self.assertTrue(app_config.notifications.enabled)
            self.assertEqual("INFO", app_config.logging.level)

    def test_missing_optional_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "absent.toml"
            app_config = load_app_config(str(missing))

        self.assertEqual("", app_config.source_file)
        self.assertEqual(8765, app_config.ui_server.port)

    def test_missing_required_config_raises(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "absent.toml"
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(missing), required=True)

    def test_invalid_toml_raises(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[ui_server\nport = 1")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path))

            self.assertIn("Failed to parse config TOML", str(context.exception))

    def test_rejects_invalid_field_types(self) -> None:
        cases = (
            ("[ui_server]\nport = true\n", "ui_server.port"),
            ("[ui_server]\nenabled = \"maybe\"\n", "ui_server.enabled"),
            ("[notifications]\nenabled = 3\n", "notifications.enabled"),
            ("[logging]\nlevel = \"chatty\"\n", "logging.level"),
            ("ui_server = 5\n", "[ui_server]"),
        )
        for content, field in cases:
            with self.subTest(field=field):
                with tempfile.TemporaryDirectory() as temp_dir:
                    config_path = Path(temp_dir) / "config.toml"
                    _write_text(config_path, content)

                    with self.assertRaises(AppConfigurationError) as context:
                        load_app_config(str(config_path))

                    self.assertIn(field, str(context.exception))

    def test_resolve_config_path_prefers_environment_variable(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            env_config = Path(temp_dir) / "custom.toml"
            _write_text(env_config, "")

            with patch.dict(os.environ, {"APP_CONFIG_FILE": str(env_config)}, clear=True):
                resolved = resolve_config_path()

            self.assertEqual(env_config, resolved)

    def test_resolve_config_path_uses_bundle_fallback(self) -> None:
        with tempfile.TemporaryDirectory() as cwd_dir, tempfile.TemporaryDirectory() as bundle_dir:
            bundled_config = Path(bundle_dir) / "config.toml"
            _write_text(bundled_config, "[logging]\nlevel = 'INFO'\n")

            with patch.dict(os.environ, {}, clear=True):
                with patch("app_config.Path.cwd", return_value=Path(cwd_dir)):
                    with patch.object(sys, "_MEIPASS", bundle_dir, create=True):
                        resolved = resolve_config_path()

            self.assertEqual(bundled_config, resolved)


if __name__ == "__main__":
    unittest.main()
