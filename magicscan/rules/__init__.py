from magicscan.rules.generic import GenericRuleEngine
from magicscan.rules.magic_numbers import MagicNumberRuleEngine

__all__ = [
    "GenericRuleEngine",
    "MagicNumberRuleEngine",
]
