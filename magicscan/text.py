from __future__ import annotations

SNIPPET_WINDOW = 50
ELLIPSIS = "..."


def find_line_column(text: str, offset: int) -> tuple[int, int]:
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    last_newline = text.rfind("\n", 0, offset)
    return (line, offset - last_newline)


def extract_snippet(text: str, start: int, end: int, max_length: int) -> str:
    snippet_start = max(0, start - SNIPPET_WINDOW)
    snippet_end = min(len(text), end + SNIPPET_WINDOW)
    snippet = text[snippet_start:snippet_end]
    if len(snippet) <= max_length:
        return snippet
    if max_length <= len(ELLIPSIS):
        return snippet[:max_length]
    return snippet[: max_length - len(ELLIPSIS)] + ELLIPSIS


def enclosing_line(text: str, offset: int) -> str:
    line_start = text.rfind("\n", 0, offset) + 1
    line_end = text.find("\n", offset)
    if line_end < 0:
        line_end = len(text)
    return text[line_start:line_end]
