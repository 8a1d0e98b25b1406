import os
import tempfile
import unittest

from star_tracker.config import (
    DEFAULT_CONFIG,
    deep_merge,
    load_config,
    profile_from_config,
)
from star_tracker.errors import ConfigurationError, InvalidMountProfileError
from star_tracker.motion import MountProfile


class TestConfig(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".yaml")
        os.close(fd)

    def tearDown(self):
        os.remove(self.path)

    def write(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_defaults(self):
        config = load_config()
        self.assertEqual(config["mount"]["steps_per_revolution"], 2048)
        self.assertIn("url", config["actuator"])

    def test_defaults_are_not_mutated(self):
        self.write("mount:\n  steps_per_revolution: 4096\n")
        load_config(self.path)
        self.assertEqual(DEFAULT_CONFIG["mount"]["steps_per_revolution"], 2048)

    def test_override(self):
        self.write(
            "observer:\n  latitude: 50.06\n  longitude: 19.94\n"
            "mount:\n  shortest_path: true\n"
        )
        config = load_config(self.path)
        self.assertEqual(config["observer"]["latitude"], 50.06)
        self.assertTrue(config["mount"]["shortest_path"])
        self.assertEqual(config["mount"]["steps_per_revolution"], 2048)
        self.assertEqual(profile_from_config(config), MountProfile(2048, True))

    def test_empty_file(self):
        self.write("")
        self.assertEqual(
            load_config(self.path)["mount"], DEFAULT_CONFIG["mount"]
        )

    def test_malformed(self):
        self.write("mount: [unclosed\n")
        with self.assertRaises(ConfigurationError):
            load_config(self.path)
        self.write("- just\n- a list\n")
        with self.assertRaises(ConfigurationError):
            load_config(self.path)

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError) as ctx:
            load_config(self.path + ".missing")
        self.assertEqual(ctx.exception.config_file, self.path + ".missing")

    def test_invalid_profile(self):
        with self.assertRaises(InvalidMountProfileError):
            profile_from_config({"mount": {"steps_per_revolution": 0}})

    def test_deep_merge(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        deep_merge(base, {"a": {"c": 20}, "e": 5})
        self.assertEqual(base, {"a": {"b": 1, "c": 20}, "d": 3, "e": 5})


if __name__ == "__main__":
    unittest.main()
