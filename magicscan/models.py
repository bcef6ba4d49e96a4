from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AlertType(str, Enum):
    FAKE_COMPLEXITY = "FakeComplexity"
    CARGO_CULT = "CargoCult"
    OVER_ENGINEERING = "OverEngineering"
    CONCURRENCY_WRAPPER_ABUSE = "ConcurrencyWrapperAbuse"
    LOCK_ABUSE = "LockAbuse"
    DELAY_ABUSE = "DelayAbuse"
    UNHANDLED_RESULT_ABUSE = "UnhandledResultAbuse"
    POLYMORPHISM_ABUSE = "PolymorphismAbuse"
    DUPLICATION_ABUSE = "DuplicationAbuse"
    MUTEX_ABUSE = "MutexAbuse"
    MAGIC_NUMBER = "MagicNumber"
    HARDCODED_THRESHOLD = "HardcodedThreshold"

    def __str__(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[AlertType, str] = {
    AlertType.FAKE_COMPLEXITY: "FakeComplexity",
    AlertType.CARGO_CULT: "CargoCult",
    AlertType.OVER_ENGINEERING: "OverEngineering",
    AlertType.CONCURRENCY_WRAPPER_ABUSE: "ConcurrencyWrapperAbuse",
    AlertType.LOCK_ABUSE: "LockAbuse",
    AlertType.DELAY_ABUSE: "DelayAbuse",
    AlertType.UNHANDLED_RESULT_ABUSE: "UnhandledResultAbuse",
    AlertType.POLYMORPHISM_ABUSE: "PolymorphismAbuse",
    AlertType.DUPLICATION_ABUSE: "DuplicationAbuse",
    AlertType.MUTEX_ABUSE: "MutexAbuse",
    AlertType.MAGIC_NUMBER: "MagicNumber",
    AlertType.HARDCODED_THRESHOLD: "HardcodedThreshold",
}

MAGIC_NUMBER_TYPES: frozenset[AlertType] = frozenset({AlertType.MAGIC_NUMBER, AlertType.HARDCODED_THRESHOLD})

if set(CATEGORY_LABELS) != set(AlertType):  # pragma: no cover
    raise RuntimeError("CATEGORY_LABELS must cover every AlertType member")


@dataclass(slots=True)
class Alert:
    category: AlertType
    confidence: float
    location: tuple[int, int]
    context_snippet: str
    explanation: str
    suggestion: str
    severity: float

    @property
    def line(self) -> int:
        return self.location[0]

    @property
    def column(self) -> int:
        return self.location[1]

    def with_path_prefix(self, file_path: str) -> None:
        self.context_snippet = f"{file_path}:{self.context_snippet}"


@dataclass(slots=True)
class FileAlerts:
    file_path: str
    alerts: list[Alert]


@dataclass(slots=True)
class ScanResult:
    alerts: list[Alert]
    files_scanned: int
    file_alerts: list[FileAlerts] = field(default_factory=list)
