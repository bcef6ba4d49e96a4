from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import replace
import os
import sys

from magicscan import __version__
from magicscan.config import OUTPUT_FORMATS, Config, apply_env_overrides, load_config
from magicscan.engine import validate_catalog
from magicscan.errors import PatternConstructionError
from magicscan.models import ScanResult
from magicscan.reporters import band_counts, to_json_report, to_markdown_report, to_text_report, write_report
from magicscan.scanner import scan_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="magicscan", description="Fast detector for magic numbers and code smells."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan code for all code smells.")
    _add_common_arguments(scan)

    scan_magic = subparsers.add_parser("scan-magic", help="Scan code for magic numbers and hardcoded values.")
    _add_common_arguments(scan_magic)
    scan_magic.add_argument("-t", "--threshold", type=float, help="Confidence threshold (0.0-1.0).")
    scan_magic.add_argument(
        "--scan-config-files",
        action="store_true",
        help="Scan config files even when they are listed in the path whitelist.",
    )

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", nargs="?", default=".", help="Directory or file to scan.")
    parser.add_argument("--config", help="Path to magicscan TOML config.")
    parser.add_argument("-o", "--output", choices=list(OUTPUT_FORMATS), help="Report output format.")
    parser.add_argument("--out", help="Write report to file. Defaults to stdout.")
    parser.add_argument("--exclude", action="append", default=[], help="Extra exclude directory names.")
    parser.add_argument("--include-ext", action="append", default=[], help="Extension to include (repeatable).")


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    raise SystemExit(run_scan(args, os.environ))


def run_scan(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    try:
        config = merge_cli_with_config(args, load_config(args.config), environ)
    except (FileNotFoundError, ValueError) as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return 2

    try:
        validate_catalog()
    except PatternConstructionError as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return 2

    mode = "magic" if args.command == "scan-magic" else "all"
    result = scan_path(
        args.path,
        mode=mode,
        detect_config=config.detect,
        magic_config=config.magic,
        extensions=config.discovery.extensions,
        excludes=config.discovery.exclude,
    )
    write_report(render_report(result, config.report.output_format), config.report.out)
    print_summary(result)
    return 0


def merge_cli_with_config(args: argparse.Namespace, config: Config, environ: Mapping[str, str]) -> Config:
    merged = config
    merged.magic = apply_env_overrides(merged.magic, environ)
    if args.exclude:
        merged.discovery.exclude = list(dict.fromkeys([*merged.discovery.exclude, *args.exclude]))
    if args.include_ext:
        merged.discovery.extensions = list(dict.fromkeys([*merged.discovery.extensions, *args.include_ext]))
    if args.output:
        merged.report.output_format = args.output
    if args.out:
        merged.report.out = args.out
    if getattr(args, "threshold", None) is not None:
        merged.detect = replace(merged.detect, confidence_threshold=args.threshold)
        merged.magic = replace(merged.magic, confidence_threshold=args.threshold)
    if getattr(args, "scan_config_files", False):
        merged.magic = replace(merged.magic, scan_config_files=True)
    if merged.report.output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported report format: {merged.report.output_format}")
    return merged


def render_report(result: ScanResult, output_format: str):
    if output_format == "json":
        return to_json_report(result.alerts)
    if output_format == "markdown":
        return to_markdown_report(result.file_alerts)
    if output_format == "text":
        return to_text_report(result.alerts)
    raise ValueError(f"Unsupported report format: {output_format}")


def print_summary(result: ScanResult) -> None:
    counts = band_counts(result.alerts)
    print(
        f"[summary] files={result.files_scanned} alerts={len(result.alerts)} "
        f"critical={counts['critical']} high={counts['high']} medium={counts['medium']}",
        file=sys.stderr,
    )


if __name__ == "__main__":
    main()
