from magicscan.config import DetectConfig, MagicNumberConfig
from magicscan.engine import scan, scan_magic_numbers, validate_catalog
from magicscan.errors import PatternConstructionError
from magicscan.models import Alert, AlertType

__version__ = "0.1.0"

__all__ = [
    "Alert",
    "AlertType",
    "DetectConfig",
    "MagicNumberConfig",
    "PatternConstructionError",
    "scan",
    "scan_magic_numbers",
    "validate_catalog",
]
