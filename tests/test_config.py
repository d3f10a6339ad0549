import unittest
from unittest.mock import patch, mock_open
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typed_emitter.config import (
    AppConfig,
    EmitterConfig,
    LoggingConfig,
    ConfigError,
    safe_load_dataclass,
)


class TestConfig(unittest.TestCase):
    def test_load_config_success(self):
        yaml_content = """
emitter:
  prune_empty: true
  log_emits: true
logging:
  level: "DEBUG"
"""
        with patch("pathlib.Path.open", mock_open(read_data=yaml_content)):
            with patch("pathlib.Path.exists", return_value=True):
                config = AppConfig.load("config.yaml")
                self.assertTrue(config.emitter.prune_empty)
                self.assertTrue(config.emitter.log_emits)
                self.assertEqual(config.logging.level, "DEBUG")

    def test_load_config_missing_sections_use_defaults(self):
        with patch("pathlib.Path.open", mock_open(read_data="")):
            with patch("pathlib.Path.exists", return_value=True):
                config = AppConfig.load("config.yaml")
                self.assertEqual(config, AppConfig.default())

    def test_load_config_not_found(self):
        with patch("pathlib.Path.exists", return_value=False):
            with self.assertRaises(ConfigError):
                AppConfig.load("missing.yaml")

    def test_load_config_invalid_yaml(self):
        with patch("pathlib.Path.open", mock_open(read_data="emitter: [unclosed")):
            with patch("pathlib.Path.exists", return_value=True):
                with self.assertRaises(ConfigError):
                    AppConfig.load("config.yaml")

    def test_load_config_not_a_mapping(self):
        with patch("pathlib.Path.open", mock_open(read_data="- just\n- a list\n")):
            with patch("pathlib.Path.exists", return_value=True):
                with self.assertRaises(ConfigError):
                    AppConfig.load("config.yaml")

    def test_load_config_bad_section(self):
        with patch("pathlib.Path.open", mock_open(read_data="emitter: [1, 2]\n")):
            with patch("pathlib.Path.exists", return_value=True):
                with self.assertRaises(ConfigError):
                    AppConfig.load("config.yaml")

    def test_unknown_keys_ignored_with_warning(self):
        with self.assertLogs('typed_emitter.config.models', level='WARNING') as logs:
            config = safe_load_dataclass(
                EmitterConfig, {'prune_empty': True, 'colour': 'red'}, 'emitter'
            )

        self.assertEqual(config, EmitterConfig(prune_empty=True))
        self.assertIn("Unknown key 'colour' in section 'emitter'", logs.output[0])

    def test_defaults(self):
        config = AppConfig.default()
        self.assertEqual(config.emitter, EmitterConfig(prune_empty=False, log_emits=False))
        self.assertEqual(config.logging, LoggingConfig(level="INFO"))


if __name__ == '__main__':
    unittest.main()
