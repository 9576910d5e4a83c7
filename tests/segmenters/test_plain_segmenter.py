"""Tests for the plain-text segmenter."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from docsplit.schema import Cell
from docsplit.segmenters.plain import split_plain


def _contents(cells):
    return [cell.content for cell in cells]


class TestSplitPlain:

    def test_paragraphs(self):
        assert split_plain("Para one.\n\n\nPara two.") == [Cell(content="Para one."), Cell(content="Para two.")]

    def test_whitespace_only_separator(self):
        assert _contents(split_plain("A\n   \nB")) == ["A", "B"]

    def test_single_newline_stays_in_cell(self):
        assert _contents(split_plain("line one\nline two")) == ["line one\nline two"]

    def test_surrounding_blank_lines_give_empty_spans(self):
        assert _contents(split_plain("\n\nA\n\n")) == ["", "A", ""]

    def test_indentation_kept_trailing_whitespace_dropped(self):
        assert _contents(split_plain("  indented first line\nsecond   \n\nB")) == ["  indented first line\nsecond", "B"]
