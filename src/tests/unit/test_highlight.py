"""Tests for note.core.highlight module."""

import pytest

from note.core.highlight import (
    HIGHLIGHT_END,
    HIGHLIGHT_START,
    find_spans,
    highlight,
    render,
)


def marked(text: str) -> str:
    return f"{HIGHLIGHT_START}{text}{HIGHLIGHT_END}"


class TestFindSpans:
    """Tests for span computation."""

    def test_all_occurrences(self):
        """Every occurrence is found, left to right."""
        assert find_spans("life is Life", "life") == [(0, 4), (8, 12)]

    def test_non_overlapping(self):
        """Overlapping candidates are reported once."""
        assert find_spans("aaaa", "aa") == [(0, 2), (2, 4)]

    def test_term_longer_than_text(self):
        """A term longer than the text has no spans."""
        assert find_spans("ab", "abc") == []

    def test_regex_characters_are_literal(self):
        """Terms are matched literally."""
        assert find_spans("a.b a*b", "a*b") == [(4, 7)]


class TestHighlight:
    """Tests for highlight()."""

    def test_preserves_original_case(self):
        """Highlighted text keeps its original case."""
        result = highlight("My Life story", "life")

        assert result == f"My {marked('Life')} story"

    def test_adjacent_matches(self):
        """Back-to-back matches are each wrapped without overrunning."""
        result = highlight("abcabcabc", "ABC")

        assert result == marked("abc") * 3

    def test_match_at_end(self):
        """A match touching the end of the string is handled."""
        assert highlight("say hi", "hi") == f"say {marked('hi')}"

    @pytest.mark.parametrize(
        "text,term",
        [
            ("nothing here", "life"),
            ("", "x"),
            ("short", "much longer term"),
        ],
    )
    def test_absent_term_is_identity(self, text, term):
        """Without an occurrence the text comes back unchanged."""
        assert highlight(text, term) == text

    def test_empty_term_is_identity(self):
        """An empty term never adds markers."""
        assert highlight("anything", "") == "anything"

    @pytest.mark.parametrize("text", ["life", "Life life LIFE", "a" * 50])
    def test_disabled_is_identity(self, text):
        """Non-terminal output never contains markers."""
        assert highlight(text, "life", enabled=False) == text
        assert highlight(text, "a", enabled=False) == text

    def test_never_shorter_than_input(self):
        """Highlighting only adds characters."""
        text = "Life-101-Identifing life LIFE lIfE"
        result = highlight(text, "life")

        assert len(result) >= len(text)
        assert result.replace(HIGHLIGHT_START, "").replace(HIGHLIGHT_END, "") == text

    def test_single_character_term(self):
        """A one-character term in a long line terminates cleanly."""
        text = "a" * 200
        result = highlight(text, "a")

        assert result.count(HIGHLIGHT_START) == 200

    def test_deterministic(self):
        """Same inputs give byte-identical output."""
        text = "The life of Life"

        assert highlight(text, "life") == highlight(text, "life")


class TestRender:
    """Tests for render() span validation."""

    def test_ignores_out_of_range_spans(self):
        """Spans past the end of the text are dropped."""
        assert render("abc", [(1, 10)]) == "abc"

    def test_ignores_overlapping_spans(self):
        """A span overlapping an earlier one is dropped."""
        assert render("abcd", [(0, 2), (1, 3)]) == f"{marked('ab')}cd"
