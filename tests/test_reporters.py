from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
import tempfile
import unittest

from magicscan.models import Alert, AlertType, FileAlerts
from magicscan.reporters import (
    alert_to_dict,
    band_counts,
    severity_band,
    to_json_report,
    to_markdown_report,
    to_text_report,
    write_report,
)


def _alert(category: AlertType, confidence: float, line: int = 1, snippet: str = "x") -> Alert:
    return Alert(
        category=category,
        confidence=confidence,
        location=(line, 5),
        context_snippet=snippet,
        explanation="why",
        suggestion="fix",
        severity=confidence,
    )


class ReporterTests(unittest.TestCase):
    def test_severity_bands(self) -> None:
        self.assertEqual(severity_band(_alert(AlertType.MAGIC_NUMBER, 0.9)), "critical")
        self.assertEqual(severity_band(_alert(AlertType.MAGIC_NUMBER, 0.85)), "high")
        self.assertEqual(severity_band(_alert(AlertType.MAGIC_NUMBER, 0.75)), "high")
        self.assertEqual(severity_band(_alert(AlertType.MAGIC_NUMBER, 0.7)), "medium")

    def test_band_counts(self) -> None:
        alerts = [_alert(AlertType.MAGIC_NUMBER, 0.95), _alert(AlertType.DELAY_ABUSE, 0.75)]
        self.assertEqual(band_counts(alerts), {"critical": 1, "high": 1, "medium": 0})

    def test_alert_serialization_field_names(self) -> None:
        payload = alert_to_dict(_alert(AlertType.HARDCODED_THRESHOLD, 0.85, line=3))

        self.assertEqual(
            set(payload),
            {"issue_type", "confidence", "location", "context_snippet", "why_bs", "sug", "severity"},
        )
        self.assertEqual(payload["issue_type"], "HardcodedThreshold")
        self.assertEqual(payload["location"], [3, 5])
        self.assertEqual(payload["why_bs"], "why")
        self.assertEqual(payload["sug"], "fix")

    def test_json_report_is_serializable_list(self) -> None:
        rendered = json.dumps(to_json_report([_alert(AlertType.MAGIC_NUMBER, 0.75)]))
        self.assertIn('"issue_type": "MagicNumber"', rendered)

    def test_text_report_groups_by_severity_in_production_order(self) -> None:
        alerts = [
            _alert(AlertType.UNHANDLED_RESULT_ABUSE, 0.7, line=4),
            _alert(AlertType.MAGIC_NUMBER, 0.9, line=2, snippet="if x > 0.9 {\n  y();"),
            _alert(AlertType.DELAY_ABUSE, 0.75, line=7),
            _alert(AlertType.HARDCODED_THRESHOLD, 0.85, line=9),
        ]

        rendered = to_text_report(alerts)

        self.assertIn("Found 4 issues:", rendered)
        self.assertIn("CRITICAL (1 issues):", rendered)
        self.assertIn("HIGH (2 issues):", rendered)
        self.assertIn("MEDIUM (1 issues):", rendered)
        self.assertLess(rendered.index("CRITICAL"), rendered.index("HIGH"))
        self.assertLess(rendered.index("HIGH"), rendered.index("MEDIUM"))
        self.assertLess(rendered.index("DelayAbuse at line 7"), rendered.index("HardcodedThreshold at line 9"))
        self.assertIn("    if x > 0.9 {", rendered)
        self.assertNotIn("y();", rendered)
        self.assertIn("Confidence: 90%", rendered)

    def test_text_report_omits_empty_bands(self) -> None:
        rendered = to_text_report([_alert(AlertType.MAGIC_NUMBER, 0.7)])
        self.assertNotIn("CRITICAL", rendered)
        self.assertIn("MEDIUM (1 issues):", rendered)

    def test_markdown_report(self) -> None:
        file_alerts = [
            FileAlerts("src/lib.rs", [_alert(AlertType.MAGIC_NUMBER, 0.8, line=12, snippet="let a = 0.4;")]),
            FileAlerts("src/clean.rs", []),
        ]

        rendered = to_markdown_report(file_alerts, generated_at=datetime(2025, 1, 2, tzinfo=timezone.utc))

        self.assertIn("Generated: 2025-01-02T00:00:00+00:00", rendered)
        self.assertIn("- Files scanned: 2", rendered)
        self.assertIn("- Total magic numbers found: 1", rendered)
        self.assertIn("### src/lib.rs", rendered)
        self.assertNotIn("### src/clean.rs", rendered)
        self.assertIn("1. **MagicNumber** at line 12:5", rendered)
        self.assertIn("   - **Confidence**: 0.80", rendered)
        self.assertIn("   - **Code**: `let a = 0.4;`", rendered)
        self.assertIn("## Next Steps", rendered)

    def test_write_report_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "nested" / "report.json"
            write_report([{"issue_type": "MagicNumber"}], str(out))
            self.assertEqual(json.loads(out.read_text(encoding="utf-8")), [{"issue_type": "MagicNumber"}])

            text_out = Path(tmp) / "report.md"
            write_report("# title\n", str(text_out))
            self.assertEqual(text_out.read_text(encoding="utf-8"), "# title\n")


if __name__ == "__main__":
    unittest.main()
