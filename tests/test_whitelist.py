from __future__ import annotations

import unittest

from magicscan.config import MagicNumberConfig
from magicscan.whitelist import is_path_whitelisted, is_value_whitelisted


class PathWhitelistTests(unittest.TestCase):
    def test_default_entries(self) -> None:
        config = MagicNumberConfig()
        self.assertTrue(is_path_whitelisted("src/config.rs", config))
        self.assertTrue(is_path_whitelisted("crate/tests/it.rs", config))
        self.assertTrue(is_path_whitelisted("benches/speed.rs", config))
        self.assertFalse(is_path_whitelisted("src/main.rs", config))

    def test_substring_match(self) -> None:
        config = MagicNumberConfig(whitelist_paths=("generated",))
        self.assertTrue(is_path_whitelisted("src/generated_tables.rs", config))

    def test_scan_config_files_skips_config_entries_only(self) -> None:
        config = MagicNumberConfig(
            whitelist_paths=("src/config.rs", "config/", "tests/"),
            scan_config_files=True,
        )
        self.assertFalse(is_path_whitelisted("src/config.rs", config))
        self.assertFalse(is_path_whitelisted("app/config/limits.rs", config))
        self.assertTrue(is_path_whitelisted("tests/config.rs", config))


class ValueWhitelistTests(unittest.TestCase):
    def test_default_values(self) -> None:
        config = MagicNumberConfig()
        for value in ("0", "1", "2", "100", "1000", "1e-10"):
            self.assertTrue(is_value_whitelisted(value, config))
        self.assertFalse(is_value_whitelisted("3", config))

    def test_no_numeric_normalization(self) -> None:
        config = MagicNumberConfig(whitelist_values=frozenset({"0.5"}))
        self.assertTrue(is_value_whitelisted("0.5", config))
        self.assertFalse(is_value_whitelisted("0.50", config))


if __name__ == "__main__":
    unittest.main()
