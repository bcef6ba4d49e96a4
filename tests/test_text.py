from __future__ import annotations

import unittest

from magicscan.text import enclosing_line, extract_snippet, find_line_column


class LocationTests(unittest.TestCase):
    def test_start_of_text(self) -> None:
        self.assertEqual(find_line_column("abc", 0), (1, 1))

    def test_after_newline(self) -> None:
        self.assertEqual(find_line_column("a\nbc", 3), (2, 2))
        self.assertEqual(find_line_column("a\n\nb", 3), (3, 1))

    def test_multibyte_characters_count_once(self) -> None:
        self.assertEqual(find_line_column("日本x", 2), (1, 3))
        self.assertEqual(find_line_column("é\nx", 2), (2, 1))


class SnippetTests(unittest.TestCase):
    def test_window_around_match(self) -> None:
        text = "x" * 200
        self.assertEqual(len(extract_snippet(text, 100, 101, 500)), 101)

    def test_window_is_clipped_to_buffer(self) -> None:
        text = "0123456789" * 3
        self.assertEqual(extract_snippet(text, 5, 8, 500), text)

    def test_truncates_with_ellipsis(self) -> None:
        snippet = extract_snippet("y" * 300, 120, 130, 20)
        self.assertEqual(len(snippet), 20)
        self.assertTrue(snippet.endswith("..."))

    def test_tiny_limit_never_exceeded(self) -> None:
        self.assertEqual(extract_snippet("abcdef", 0, 6, 2), "ab")

    def test_enclosing_line_keeps_indentation(self) -> None:
        text = "a\n  b = 1;\nc"
        self.assertEqual(enclosing_line(text, 5), "  b = 1;")

    def test_enclosing_line_at_end_of_text(self) -> None:
        self.assertEqual(enclosing_line("a\nbc", 3), "bc")
        self.assertEqual(enclosing_line("solo", 2), "solo")


if __name__ == "__main__":
    unittest.main()
