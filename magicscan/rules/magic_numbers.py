from __future__ import annotations

import re

from magicscan.config import MagicNumberConfig
from magicscan.errors import compile_pattern
from magicscan.models import Alert, AlertType
from magicscan.text import enclosing_line, find_line_column
from magicscan.whitelist import is_value_whitelisted


NUMERIC_LITERAL = r"\d+\.?\d*(?:[eE][+-]?\d+)?"
WIDTH_SUFFIXES = ("f32", "f64")
SUFFIXED_LITERAL = NUMERIC_LITERAL + r"(?:f32|f64)?"

# Anchors use [ \t] so a match never spans lines.
CONDITIONAL_PATTERNS = (
    rf"^[ \t]*(if|while)[ \t]+.*?([<>=!]+)[ \t]*({NUMERIC_LITERAL})",
    rf"^[ \t]*}}[ \t]*else[ \t]+if[ \t]+.*?([<>=!]+)[ \t]*({NUMERIC_LITERAL})",
    rf"^[ \t]*\|[ \t]*\w+[ \t]+if[ \t]+.*?([<>=!]+)[ \t]*({NUMERIC_LITERAL})",
)
ASSIGNMENT_PATTERNS = (
    rf"^[ \t]*let[ \t]+(\w+)[ \t]*=[ \t]*({SUFFIXED_LITERAL})[ \t]*;",
    rf"^[ \t]*(\w+)[ \t]*=[ \t]*({SUFFIXED_LITERAL})[ \t]*;",
)
CALL_HEAD_PATTERN = r"\b(\w+)\s*\("
ARG_LITERAL_PATTERN = SUFFIXED_LITERAL

THRESHOLD_KEYWORDS = (
    "threshold",
    "limit",
    "bound",
    "min",
    "max",
    "tolerance",
    "entropy",
    "yawn",
    "healing",
    "spectral",
    "knot",
    "persistence",
    "quality",
    "gate",
    "circuit",
    "similarity",
    "cosine",
)
CONFIG_NAME_KEYWORDS = (
    "entropy",
    "yawn",
    "healing",
    "knot",
    "spectral",
    "persistence",
    "quality",
    "similarity",
)
DEFAULT_CONFIG_NAME = "behavioral"
ASSIGNMENT_KEYWORDS = (
    "threshold",
    "limit",
    "bound",
    "weight",
    "ratio",
    "factor",
    "radius",
    "width",
    "height",
    "size",
    "count",
    "max",
    "min",
    "alpha",
    "beta",
    "gamma",
    "epsilon",
    "delta",
)
INDENT_PREFIXES = ("    ", "\t")

THRESHOLD_BASE_CONFIDENCE = 0.5
THRESHOLD_KEYWORD_BONUS = 0.15
THRESHOLD_UNIT_INTERVAL_BONUS = 0.2
THRESHOLD_MIN_CONFIDENCE = 0.5
ASSIGNMENT_BASE_CONFIDENCE = 0.4
ASSIGNMENT_KEYWORD_BONUS = 0.25
ASSIGNMENT_SUFFIX_BONUS = 0.15
ASSIGNMENT_INDENT_BONUS = 0.15
ASSIGNMENT_MIN_CONFIDENCE = 0.6
FUNCTION_ARG_CONFIDENCE = 0.75
FUNCTION_ARG_MIN_LITERALS = 2
MAX_CONFIDENCE = 0.95


class MagicNumberRuleEngine:
    def compile(self) -> dict[str, list[re.Pattern[str]]]:
        return {
            "conditional": [compile_pattern(pattern, re.MULTILINE) for pattern in CONDITIONAL_PATTERNS],
            "assignment": [compile_pattern(pattern, re.MULTILINE) for pattern in ASSIGNMENT_PATTERNS],
            "function_arg": [compile_pattern(CALL_HEAD_PATTERN), compile_pattern(ARG_LITERAL_PATTERN)],
        }

    def run(self, source: str, config: MagicNumberConfig) -> list[Alert]:
        compiled = self.compile()
        alerts: list[Alert] = []
        alerts.extend(self._find_conditional_thresholds(source, compiled["conditional"]))
        alerts.extend(self._find_assignment_literals(source, config, compiled["assignment"]))
        call_regex, literal_regex = compiled["function_arg"]
        alerts.extend(self._find_function_arg_literals(source, config, call_regex, literal_regex))
        return alerts

    def _find_conditional_thresholds(self, source: str, patterns: list[re.Pattern[str]]) -> list[Alert]:
        alerts: list[Alert] = []
        for regex in patterns:
            for match in regex.finditer(source):
                value_group = regex.groups
                value = match.group(value_group)
                position = match.start(value_group)
                snippet = enclosing_line(source, position).strip()
                confidence = threshold_confidence(snippet, value)
                if confidence <= THRESHOLD_MIN_CONFIDENCE:
                    continue
                alerts.append(
                    Alert(
                        category=AlertType.HARDCODED_THRESHOLD,
                        confidence=confidence,
                        location=find_line_column(source, position),
                        context_snippet=snippet,
                        explanation=f"Hardcoded threshold {value} in conditional - should be in RuntimeConfig",
                        suggestion=(
                            f"Move {value} to config and use self.config.{infer_config_name(snippet)}_threshold"
                        ),
                        severity=confidence,
                    )
                )
        return alerts

    def _find_assignment_literals(
        self, source: str, config: MagicNumberConfig, patterns: list[re.Pattern[str]]
    ) -> list[Alert]:
        alerts: list[Alert] = []
        for regex in patterns:
            for match in regex.finditer(source):
                var_name = match.group(1)
                value = match.group(2)
                if is_value_whitelisted(value, config):
                    continue
                position = match.start(2)
                line = enclosing_line(source, position)
                confidence = assignment_confidence(var_name, value, line)
                if confidence <= ASSIGNMENT_MIN_CONFIDENCE:
                    continue
                alerts.append(
                    Alert(
                        category=AlertType.MAGIC_NUMBER,
                        confidence=confidence,
                        location=find_line_column(source, position),
                        context_snippet=line.strip(),
                        explanation=f"Magic number {value} assigned to {var_name} - should be in config",
                        suggestion=f"Add {var_name} to RuntimeConfig and initialize from config",
                        severity=confidence,
                    )
                )
        return alerts

    def _find_function_arg_literals(
        self,
        source: str,
        config: MagicNumberConfig,
        call_regex: re.Pattern[str],
        literal_regex: re.Pattern[str],
    ) -> list[Alert]:
        alerts: list[Alert] = []
        search_from = 0
        close = -1
        while True:
            head = call_regex.search(source, search_from)
            if head is None:
                break
            search_from = head.end()
            # Arguments end at the first ")" after the head, nested calls included.
            if close < head.end():
                close = source.find(")", head.end())
                if close < 0:
                    break
            raw_args = source[head.end() : close]
            found = [literal.group(0) for literal in literal_regex.finditer(raw_args)]
            if not found:
                continue
            search_from = close + 1
            literals = [value for value in found if not is_value_whitelisted(value, config)]
            if len(literals) < FUNCTION_ARG_MIN_LITERALS:
                continue
            func_name = head.group(1)
            position = head.end() + len(raw_args) - len(raw_args.lstrip())
            alerts.append(
                Alert(
                    category=AlertType.MAGIC_NUMBER,
                    confidence=FUNCTION_ARG_CONFIDENCE,
                    location=find_line_column(source, position),
                    context_snippet=enclosing_line(source, position).strip(),
                    explanation=f"Function {func_name} called with {len(literals)} hardcoded numeric arguments",
                    suggestion="Pass config values instead of hardcoded literals",
                    severity=FUNCTION_ARG_CONFIDENCE,
                )
            )
        return alerts


def threshold_confidence(snippet: str, value: str) -> float:
    confidence = THRESHOLD_BASE_CONFIDENCE
    lowered = snippet.lower()
    for keyword in THRESHOLD_KEYWORDS:
        if keyword in lowered:
            confidence += THRESHOLD_KEYWORD_BONUS

    try:
        numeric = float(value)
    except ValueError:
        numeric = None
    if numeric is not None and 0.0 < numeric < 1.0:
        confidence += THRESHOLD_UNIT_INTERVAL_BONUS

    return min(confidence, MAX_CONFIDENCE)


def assignment_confidence(var_name: str, value: str, line: str) -> float:
    confidence = ASSIGNMENT_BASE_CONFIDENCE
    lowered = var_name.lower()
    for keyword in ASSIGNMENT_KEYWORDS:
        if keyword in lowered:
            confidence += ASSIGNMENT_KEYWORD_BONUS

    if value.endswith(WIDTH_SUFFIXES):
        confidence += ASSIGNMENT_SUFFIX_BONUS

    # Indented lines sit inside a function body rather than at module level.
    if line.startswith(INDENT_PREFIXES):
        confidence += ASSIGNMENT_INDENT_BONUS

    return min(confidence, MAX_CONFIDENCE)


def infer_config_name(snippet: str) -> str:
    lowered = snippet.lower()
    for keyword in CONFIG_NAME_KEYWORDS:
        if keyword in lowered:
            return keyword
    return DEFAULT_CONFIG_NAME
