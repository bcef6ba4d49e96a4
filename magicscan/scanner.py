from __future__ import annotations

from collections.abc import Sequence
import os
from pathlib import Path
import sys
from typing import Literal

from magicscan.config import DEFAULT_EXCLUDES, DEFAULT_EXTENSIONS, DetectConfig, MagicNumberConfig
from magicscan.engine import scan, scan_magic_numbers
from magicscan.models import MAGIC_NUMBER_TYPES, Alert, FileAlerts, ScanResult

ScanMode = Literal["all", "magic"]


def _should_exclude(path: Path, excludes: Sequence[str]) -> bool:
    return any(ex in path.parts for ex in excludes)


def _has_allowed_extension(path: Path, extensions: set[str]) -> bool:
    return path.is_file() and path.suffix.lower() in extensions


def collect_files(
    root: str,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    excludes: Sequence[str] = DEFAULT_EXCLUDES,
) -> list[Path]:
    root_path = Path(root)
    ext_set = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}

    if root_path.is_file():
        return [root_path]
    if not root_path.is_dir():
        return []

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_path, topdown=True, followlinks=False):
        dir_path = Path(dirpath)
        dirnames[:] = sorted(name for name in dirnames if name not in excludes)
        for filename in sorted(filenames):
            file_path = dir_path / filename
            if _should_exclude(file_path.relative_to(root_path), excludes):
                continue
            if not _has_allowed_extension(file_path, ext_set):
                continue
            files.append(file_path)
    return files


def scan_file(
    source: str,
    file_path: str,
    mode: ScanMode,
    detect_config: DetectConfig,
    magic_config: MagicNumberConfig,
) -> list[Alert]:
    alerts = scan(source, detect_config)
    if mode == "magic":
        alerts = [alert for alert in alerts if alert.category in MAGIC_NUMBER_TYPES]
        alerts.extend(scan_magic_numbers(source, file_path, magic_config))
    for alert in alerts:
        alert.with_path_prefix(file_path)
    return alerts


def scan_path(
    root: str,
    mode: ScanMode = "all",
    detect_config: DetectConfig | None = None,
    magic_config: MagicNumberConfig | None = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    excludes: Sequence[str] = DEFAULT_EXCLUDES,
) -> ScanResult:
    detect_config = detect_config or DetectConfig()
    magic_config = magic_config or MagicNumberConfig()
    alerts: list[Alert] = []
    file_alerts: list[FileAlerts] = []
    files_scanned = 0

    for file_path in collect_files(root, extensions=extensions, excludes=excludes):
        try:
            source = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            print(f"[scan] unable to read {file_path}: {exc}", file=sys.stderr)
            continue
        files_scanned += 1
        found = scan_file(source, str(file_path), mode, detect_config, magic_config)
        file_alerts.append(FileAlerts(file_path=str(file_path), alerts=found))
        alerts.extend(found)

    return ScanResult(alerts=alerts, files_scanned=files_scanned, file_alerts=file_alerts)
