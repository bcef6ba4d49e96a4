from __future__ import annotations

from dataclasses import dataclass

from magicscan.models import AlertType


@dataclass(frozen=True, slots=True)
class PatternRule:
    pattern: str
    category: AlertType


PATTERN_CATALOG: tuple[PatternRule, ...] = (
    PatternRule(r"Arc<RwLock<.*>>", AlertType.OVER_ENGINEERING),
    PatternRule(r"Mutex<HashMap<.*>>", AlertType.OVER_ENGINEERING),
    PatternRule(r"std::thread::sleep", AlertType.DELAY_ABUSE),
    PatternRule(r"tokio::time::sleep", AlertType.DELAY_ABUSE),
    PatternRule(r"\.unwrap\(\)", AlertType.UNHANDLED_RESULT_ABUSE),
    PatternRule(r"\.clone\(\)", AlertType.DUPLICATION_ABUSE),
    PatternRule(r"if\s+.*\s*[<>=]+\s*0\.[3-9][0-9]*", AlertType.MAGIC_NUMBER),
    PatternRule(r"Duration::from_secs\(\d{2,}\)", AlertType.HARDCODED_THRESHOLD),
)

DEFAULT_BASE_CONFIDENCE = 0.7
BASE_CONFIDENCE: dict[AlertType, float] = {
    AlertType.OVER_ENGINEERING: 0.8,
    AlertType.CONCURRENCY_WRAPPER_ABUSE: 0.8,
    AlertType.DELAY_ABUSE: 0.75,
    AlertType.MAGIC_NUMBER: 0.9,
    AlertType.HARDCODED_THRESHOLD: 0.85,
}

SUGGESTIONS: dict[AlertType, str] = {
    AlertType.OVER_ENGINEERING: "Simplify with owned types or references",
    AlertType.CONCURRENCY_WRAPPER_ABUSE: "Use Arc only for shared ownership across threads",
    AlertType.LOCK_ABUSE: "Consider if read/write locks are necessary",
    AlertType.DELAY_ABUSE: "Use async delays or remove blocking sleeps",
    AlertType.UNHANDLED_RESULT_ABUSE: "Handle errors properly with ? or match",
    AlertType.POLYMORPHISM_ABUSE: "Use concrete types when possible",
    AlertType.DUPLICATION_ABUSE: "Avoid unnecessary cloning of data",
    AlertType.MUTEX_ABUSE: "Consider if mutex is needed for this use case",
    AlertType.FAKE_COMPLEXITY: "Break down into smaller, focused functions",
    AlertType.CARGO_CULT: "Import only what you actually use",
    AlertType.MAGIC_NUMBER: "Extract to constant or config",
    AlertType.HARDCODED_THRESHOLD: "Move to configuration struct",
}

if set(SUGGESTIONS) != set(AlertType):  # pragma: no cover
    raise RuntimeError("SUGGESTIONS must cover every AlertType member")


def base_confidence(category: AlertType) -> float:
    return BASE_CONFIDENCE.get(category, DEFAULT_BASE_CONFIDENCE)


def suggestion_for(category: AlertType) -> str:
    return SUGGESTIONS[category]
