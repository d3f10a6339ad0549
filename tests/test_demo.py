import unittest
from unittest.mock import patch
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import emitter_demo
from emitter_demo import DemoEvents, initialize_app, run_walkthrough
from typed_emitter import EventEmitter
from typed_emitter.config import AppConfig, ConfigError


class TestDemo(unittest.TestCase):
    def test_walkthrough_leaves_expected_registrations(self):
        emitter = EventEmitter(schema=DemoEvents)

        with patch.object(emitter_demo, 'print_info') as print_info:
            run_walkthrough(emitter)

        messages = [c.args[0] for c in print_info.call_args_list]
        self.assertIn("offTest event fired with message: hello 3", messages)
        self.assertNotIn("offTest event fired with message: hello 2", messages)
        self.assertEqual(
            sum(1 for m in messages if m.startswith("once fired")), 1
        )
        self.assertEqual(emitter.event_names(), ['test', 'offTest'])
        self.assertEqual(emitter.listener_count('test'), 1)
        self.assertEqual(emitter.listener_count('offTest'), 1)

    def test_initialize_app_uses_env_path(self):
        with patch.object(emitter_demo, 'load_dotenv'):
            with patch.dict(os.environ, {'EMITTER_CONFIG': 'does-not-exist.yaml'}):
                with self.assertRaises(ConfigError):
                    initialize_app()

    def test_initialize_app_defaults(self):
        with patch.object(emitter_demo, 'load_dotenv'):
            with patch.dict(os.environ, {}, clear=True):
                with patch("pathlib.Path.exists", return_value=False):
                    self.assertEqual(initialize_app(), AppConfig.default())


if __name__ == '__main__':
    unittest.main()
