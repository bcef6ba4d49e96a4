from __future__ import annotations

from magicscan.config import MagicNumberConfig

CONFIG_PATH_MARKERS = ("config.rs", "config/")


def is_path_whitelisted(file_path: str, config: MagicNumberConfig) -> bool:
    for pattern in config.whitelist_paths:
        if config.scan_config_files and _references_config_file(pattern):
            continue
        if pattern in file_path:
            return True
    return False


def is_value_whitelisted(value: str, config: MagicNumberConfig) -> bool:
    return value in config.whitelist_values


def _references_config_file(pattern: str) -> bool:
    return any(marker in pattern for marker in CONFIG_PATH_MARKERS)
