from __future__ import annotations

from magicscan.config import DetectConfig, MagicNumberConfig
from magicscan.models import Alert
from magicscan.rules import GenericRuleEngine, MagicNumberRuleEngine
from magicscan.whitelist import is_path_whitelisted


def scan(text: str, config: DetectConfig) -> list[Alert]:
    return GenericRuleEngine().run(text, config)


def scan_magic_numbers(text: str, file_path: str, config: MagicNumberConfig) -> list[Alert]:
    if is_path_whitelisted(file_path, config):
        return []
    alerts = MagicNumberRuleEngine().run(text, config)
    return [alert for alert in alerts if alert.confidence >= config.confidence_threshold]


def validate_catalog() -> None:
    GenericRuleEngine().compile()
    MagicNumberRuleEngine().compile()
