from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Literal

from magicscan.models import Alert, FileAlerts

SeverityBand = Literal["critical", "high", "medium"]

BAND_ORDER: tuple[SeverityBand, ...] = ("critical", "high", "medium")
BAND_HEADINGS: dict[SeverityBand, str] = {
    "critical": "CRITICAL",
    "high": "HIGH",
    "medium": "MEDIUM",
}
CRITICAL_SEVERITY = 0.9
HIGH_SEVERITY = 0.75
NEXT_STEPS = (
    "Review each magic number and determine if it should be in config",
    "Add appropriate fields to `RuntimeConfig` in `src/config.rs`",
    "Replace hardcoded values with config reads",
    "Add tests to verify config-driven behavior",
    "Re-run the scan and confirm the remaining findings are intentional",
)


def severity_band(alert: Alert) -> SeverityBand:
    if alert.severity >= CRITICAL_SEVERITY:
        return "critical"
    if alert.severity >= HIGH_SEVERITY:
        return "high"
    return "medium"


def band_counts(alerts: Sequence[Alert]) -> dict[SeverityBand, int]:
    counts = Counter(severity_band(alert) for alert in alerts)
    return {band: counts.get(band, 0) for band in BAND_ORDER}


def alert_to_dict(alert: Alert) -> dict[str, Any]:
    return {
        "issue_type": str(alert.category),
        "confidence": alert.confidence,
        "location": [alert.line, alert.column],
        "context_snippet": alert.context_snippet,
        "why_bs": alert.explanation,
        "sug": alert.suggestion,
        "severity": alert.severity,
    }


def to_json_report(alerts: Sequence[Alert]) -> list[dict[str, Any]]:
    return [alert_to_dict(alert) for alert in alerts]


def to_text_report(alerts: Sequence[Alert]) -> str:
    grouped: dict[SeverityBand, list[Alert]] = {band: [] for band in BAND_ORDER}
    for alert in alerts:
        grouped[severity_band(alert)].append(alert)

    lines = ["", "Magicscan Results", "", f"Found {len(alerts)} issues:", ""]
    for band in BAND_ORDER:
        band_alerts = grouped[band]
        if not band_alerts:
            continue
        lines.append(f"{BAND_HEADINGS[band]} ({len(band_alerts)} issues):")
        for alert in band_alerts:
            lines.extend(_format_alert(alert))
        lines.append("")
    lines.append("Scan complete!")
    return "\n".join(lines)


def to_markdown_report(file_alerts: Sequence[FileAlerts], generated_at: datetime | None = None) -> str:
    generated_at = generated_at or datetime.now(timezone.utc)
    total_alerts = sum(len(entry.alerts) for entry in file_alerts)
    lines = [
        "# Magic Number Detection Report",
        "",
        f"Generated: {generated_at.isoformat()}",
        "",
        "## Summary",
        f"- Files scanned: {len(file_alerts)}",
        f"- Total magic numbers found: {total_alerts}",
        "",
        "## Files with Magic Numbers",
        "",
    ]
    for entry in file_alerts:
        if not entry.alerts:
            continue
        lines.append(f"### {entry.file_path}")
        lines.append("")
        lines.append(f"Found {len(entry.alerts)} magic numbers:")
        lines.append("")
        for idx, alert in enumerate(entry.alerts, start=1):
            lines.append(f"{idx}. **{alert.category}** at line {alert.line}:{alert.column}")
            lines.append(f"   - **Why**: {alert.explanation}")
            lines.append(f"   - **Suggestion**: {alert.suggestion}")
            lines.append(f"   - **Confidence**: {alert.confidence:.2f}")
            lines.append(f"   - **Code**: `{alert.context_snippet}`")
            lines.append("")

    lines.append("## Next Steps")
    lines.append("")
    lines.extend(f"{idx}. {step}" for idx, step in enumerate(NEXT_STEPS, start=1))
    return "\n".join(lines) + "\n"


def write_report(payload: Any, out: str | None) -> None:
    rendered = payload if isinstance(payload, str) else json.dumps(payload, indent=2)
    if out is None:
        print(rendered)
        return
    output_path = Path(out)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")


def _format_alert(alert: Alert) -> list[str]:
    snippet_lines = alert.context_snippet.splitlines()
    first_line = snippet_lines[0] if snippet_lines else ""
    return [
        f"  {alert.category} at line {alert.line}",
        f"    {first_line}",
        f"    Why: {alert.explanation}",
        f"    Fix: {alert.suggestion}",
        f"    Confidence: {alert.confidence * 100.0:.0f}%",
        "",
    ]
