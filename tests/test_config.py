"""Tests for settings loading"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from devscan_cli.config import Settings, get_config_file, load_settings
from devscan_cli.errors import ConfigError


def clean_env(**values) -> dict:
    """Current environment without DEVSCAN_* variables, plus overrides"""
    env = {k: v for k, v in os.environ.items() if not k.startswith("DEVSCAN_")}
    env.update(values)
    return env


class TestLoadSettings(unittest.TestCase):
    """Tests for load_settings()"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.temp_dir.name) / "config.yml"

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_defaults_without_file(self):
        with patch.dict(os.environ, clean_env(), clear=True):
            settings = load_settings(self.config_path)

        self.assertEqual(settings, Settings())
        self.assertEqual(settings.backend, "auto")
        self.assertEqual(settings.reserved_ports, (1420,))
        self.assertEqual(settings.extra_processes, ())
        self.assertEqual(settings.scan_timeout, 30)
        self.assertIsNone(settings.source)

    def test_yaml_file(self):
        self.config_path.write_text(
            """
backend: psutil
reserved_ports: [1420, 3333]
extra_processes:
  - java
  - uvicorn
scan_timeout: 10
""",
            encoding="utf-8",
        )
        with patch.dict(os.environ, clean_env(), clear=True):
            settings = load_settings(self.config_path)

        self.assertEqual(settings.backend, "psutil")
        self.assertEqual(settings.reserved_ports, (1420, 3333))
        self.assertEqual(settings.extra_processes, ("java", "uvicorn"))
        self.assertEqual(settings.scan_timeout, 10)
        self.assertEqual(settings.source, self.config_path)

    def test_env_overrides_file(self):
        self.config_path.write_text("backend: psutil\nscan_timeout: 10\n", encoding="utf-8")
        env = clean_env(
            DEVSCAN_BACKEND="LSOF",
            DEVSCAN_RESERVED_PORTS="1420, 9999",
            DEVSCAN_EXTRA_PROCESSES="java,beam",
        )
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings(self.config_path)

        self.assertEqual(settings.backend, "lsof")
        self.assertEqual(settings.reserved_ports, (1420, 9999))
        self.assertEqual(settings.extra_processes, ("java", "beam"))
        self.assertEqual(settings.scan_timeout, 10)

    def test_empty_reserved_list_disables_exclusion(self):
        self.config_path.write_text("reserved_ports: []\n", encoding="utf-8")
        with patch.dict(os.environ, clean_env(), clear=True):
            self.assertEqual(load_settings(self.config_path).reserved_ports, ())

    def test_invalid_backend(self):
        with patch.dict(os.environ, clean_env(DEVSCAN_BACKEND="ss"), clear=True):
            with self.assertRaises(ConfigError):
                load_settings(self.config_path)

    def test_invalid_port(self):
        with patch.dict(os.environ, clean_env(DEVSCAN_RESERVED_PORTS="1420,70000"), clear=True):
            with self.assertRaises(ConfigError):
                load_settings(self.config_path)

    def test_invalid_timeout(self):
        for value in ("0", "-5", "soon"):
            with patch.dict(os.environ, clean_env(DEVSCAN_SCAN_TIMEOUT=value), clear=True):
                with self.assertRaises(ConfigError):
                    load_settings(self.config_path)

    def test_malformed_yaml(self):
        self.config_path.write_text("backend: [unclosed\n", encoding="utf-8")
        with patch.dict(os.environ, clean_env(), clear=True):
            with self.assertRaises(ConfigError) as ctx:
                load_settings(self.config_path)
        self.assertIn(str(self.config_path), str(ctx.exception))

    def test_non_mapping_yaml(self):
        self.config_path.write_text("- just\n- a list\n", encoding="utf-8")
        with patch.dict(os.environ, clean_env(), clear=True):
            with self.assertRaises(ConfigError):
                load_settings(self.config_path)

    def test_config_path_from_env(self):
        with patch.dict(os.environ, clean_env(DEVSCAN_CONFIG=str(self.config_path)), clear=True):
            self.assertEqual(get_config_file(), self.config_path)


if __name__ == "__main__":
    unittest.main()
