import os
import shutil
import sys
import tempfile
import unittest

import yaml

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import SETTINGS_ENV, YamlConfig
from settings_schema import SettingsSchema, load_settings, validate_settings


class ConfigTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "settings.yaml")

    def tearDown(self) -> None:
        shutil.rmtree(self.tmpdir)
        os.environ.pop(SETTINGS_ENV, None)

    def test_missing_file(self) -> None:
        self.assertEqual(YamlConfig(self.path).load(), {})
        settings = load_settings(self.path)
        self.assertEqual(settings.data_path, "./data/workout-data.json")
        self.assertEqual(settings.log_level, "INFO")
        self.assertIsNone(settings.log_file)

    def test_save_and_load(self) -> None:
        cfg = YamlConfig(self.path)
        cfg.save({"data_path": "plan.json", "log_level": "debug"})
        self.assertEqual(cfg.load()["data_path"], "plan.json")
        settings = load_settings(self.path)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_env_selects_file(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"data_path": "from_env.json"}, f)
        os.environ[SETTINGS_ENV] = self.path
        self.assertEqual(YamlConfig().path, self.path)
        self.assertEqual(load_settings().data_path, "from_env.json")

    def test_non_mapping_rejected(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("- a\n- b\n")
        with self.assertRaises(ValueError):
            YamlConfig(self.path).load()

    def test_validation(self) -> None:
        validate_settings({"log_level": "warning"})
        with self.assertRaises(ValueError):
            validate_settings({"log_level": "LOUD"})
        with self.assertRaises(ValueError):
            validate_settings({"data_path": ["not", "a", "path"]})
        self.assertEqual(SettingsSchema(log_level="error").log_level, "ERROR")


if __name__ == "__main__":
    unittest.main()
