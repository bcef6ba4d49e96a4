from __future__ import annotations

import re

from magicscan.config import DetectConfig
from magicscan.errors import compile_pattern
from magicscan.models import Alert
from magicscan.rules.catalog import PATTERN_CATALOG, PatternRule, base_confidence, suggestion_for
from magicscan.text import extract_snippet, find_line_column


class GenericRuleEngine:
    def __init__(self, catalog: tuple[PatternRule, ...] = PATTERN_CATALOG) -> None:
        self._catalog = catalog

    def compile(self) -> list[tuple[PatternRule, re.Pattern[str]]]:
        return [(rule, compile_pattern(rule.pattern)) for rule in self._catalog]

    def run(self, source: str, config: DetectConfig) -> list[Alert]:
        compiled = self.compile()
        alerts: list[Alert] = []
        for rule, regex in compiled:
            confidence = base_confidence(rule.category)
            if confidence < config.confidence_threshold:
                continue
            for match in regex.finditer(source):
                alerts.append(
                    Alert(
                        category=rule.category,
                        confidence=confidence,
                        location=find_line_column(source, match.start()),
                        context_snippet=extract_snippet(
                            source, match.start(), match.end(), config.max_snippet_length
                        ),
                        explanation=f"Pattern match: {rule.pattern}",
                        suggestion=suggestion_for(rule.category),
                        severity=confidence,
                    )
                )
        return alerts
