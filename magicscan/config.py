from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
import math
from pathlib import Path
from typing import Any
try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib


DEFAULT_CONFIG_FILE = "magicscan.toml"
DEFAULT_CONFIDENCE_THRESHOLD = 0.618
DEFAULT_MAX_SNIPPET_LENGTH = 500
DEFAULT_WHITELIST_PATHS = ("src/config.rs", "tests/", "benches/")
DEFAULT_WHITELIST_VALUES = frozenset({"0", "1", "2", "100", "1000", "1e-10"})
DEFAULT_EXTENSIONS = (".rs",)
DEFAULT_EXCLUDES = ("target", "tests")

ENV_WHITELIST_PATHS = "MAGICSCAN_WHITELIST_PATHS"
ENV_WHITELIST_VALUES = "MAGICSCAN_WHITELIST_VALUES"
ENV_CONFIDENCE_THRESHOLD = "MAGICSCAN_CONFIDENCE_THRESHOLD"
ENV_SCAN_CONFIG_FILES = "MAGICSCAN_SCAN_CONFIG_FILES"
TRUTHY_VALUES = {"1", "true", "yes", "on"}
OUTPUT_FORMATS = ("text", "json", "markdown")


def _validate_threshold(value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"confidence_threshold must be between 0 and 1, got {value}")


@dataclass(frozen=True, slots=True)
class DetectConfig:
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    max_snippet_length: int = DEFAULT_MAX_SNIPPET_LENGTH

    def __post_init__(self) -> None:
        _validate_threshold(self.confidence_threshold)
        if self.max_snippet_length <= 0:
            raise ValueError(f"max_snippet_length must be positive, got {self.max_snippet_length}")


@dataclass(frozen=True, slots=True)
class MagicNumberConfig:
    whitelist_paths: tuple[str, ...] = DEFAULT_WHITELIST_PATHS
    whitelist_values: frozenset[str] = DEFAULT_WHITELIST_VALUES
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    scan_config_files: bool = False

    def __post_init__(self) -> None:
        _validate_threshold(self.confidence_threshold)
        object.__setattr__(self, "whitelist_paths", tuple(self.whitelist_paths))
        object.__setattr__(self, "whitelist_values", frozenset(self.whitelist_values))


@dataclass(slots=True)
class DiscoveryConfig:
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))


@dataclass(slots=True)
class ReportConfig:
    output_format: str = "text"
    out: str | None = None


@dataclass(slots=True)
class Config:
    detect: DetectConfig = field(default_factory=DetectConfig)
    magic: MagicNumberConfig = field(default_factory=MagicNumberConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(path: str | None) -> Config:
    if path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.exists():
            return Config()
        path = str(default)

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    with cfg_path.open("rb") as fh:
        payload = tomllib.load(fh)
    return config_from_mapping(payload)


def config_from_mapping(payload: Mapping[str, Any]) -> Config:
    detect = payload.get("detect", {})
    magic = payload.get("magic", {})
    discovery = payload.get("discovery", {})
    report = payload.get("report", {})

    config = Config()
    config.detect = DetectConfig(
        confidence_threshold=float(detect.get("confidence_threshold", config.detect.confidence_threshold)),
        max_snippet_length=int(detect.get("max_snippet_length", config.detect.max_snippet_length)),
    )
    config.magic = MagicNumberConfig(
        whitelist_paths=tuple(str(item) for item in magic.get("whitelist_paths", config.magic.whitelist_paths)),
        whitelist_values=frozenset(str(item) for item in magic.get("whitelist_values", config.magic.whitelist_values)),
        confidence_threshold=float(magic.get("confidence_threshold", config.magic.confidence_threshold)),
        scan_config_files=bool(magic.get("scan_config_files", config.magic.scan_config_files)),
    )
    config.discovery.extensions = list(discovery.get("extensions", config.discovery.extensions))
    config.discovery.exclude = list(discovery.get("exclude", config.discovery.exclude))
    config.report.output_format = report.get("format", config.report.output_format)
    config.report.out = report.get("out")
    return config


def apply_env_overrides(config: MagicNumberConfig, environ: Mapping[str, str]) -> MagicNumberConfig:
    overrides: dict[str, Any] = {}

    paths = environ.get(ENV_WHITELIST_PATHS)
    if paths is not None:
        overrides["whitelist_paths"] = tuple(_split_list(paths))

    values = environ.get(ENV_WHITELIST_VALUES)
    if values is not None:
        overrides["whitelist_values"] = frozenset(_split_list(values))

    threshold = environ.get(ENV_CONFIDENCE_THRESHOLD)
    if threshold is not None:
        try:
            parsed = float(threshold)
        except ValueError:
            parsed = None
        if parsed is not None and not math.isnan(parsed):
            overrides["confidence_threshold"] = min(1.0, max(0.0, parsed))

    scan_config_files = environ.get(ENV_SCAN_CONFIG_FILES)
    if scan_config_files is not None:
        overrides["scan_config_files"] = scan_config_files.strip().lower() in TRUTHY_VALUES

    if not overrides:
        return config
    return replace(config, **overrides)


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]
