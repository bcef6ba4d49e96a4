from __future__ import annotations

from functools import lru_cache
import re


class PatternConstructionError(ValueError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid detection pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


@lru_cache(maxsize=None)
def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternConstructionError(pattern, str(exc)) from exc
