"""Unit tests for docsplit.detection -- ordered syntax-mode detection."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from docsplit.detection import DEFAULT_DETECTION_RULES, DetectionRule, build_detection_rules, detect_syntax_mode
from docsplit.schema import SyntaxMode

# ============================================================================
# LaTeX
# ============================================================================


class TestLatexDetection:

    @pytest.mark.parametrize(
        "text",
        [
            "\\documentclass{article}\nHello",
            "Intro\n\\begin{document}\nBody",
            "\\section{Intro}\nSome text",
            "\\usepackage{amsmath}",
            "\\begin{itemize}\n\\item a\n\\end{itemize}",
        ],
    )
    def test_latex_markers(self, text):
        assert detect_syntax_mode(text) is SyntaxMode.LATEX

    def test_begin_without_end_is_not_latex(self):
        assert detect_syntax_mode("Use \\begin{itemize} to start a list.") is SyntaxMode.PLAIN

    def test_latex_wins_over_markdown_and_code(self):
        text = "\\documentclass{article}\n# not a heading\nimport os"
        assert detect_syntax_mode(text) is SyntaxMode.LATEX


# ============================================================================
# Markdown
# ============================================================================


class TestMarkdownDetection:

    @pytest.mark.parametrize(
        "text",
        [
            "# Title\nText",
            "   ## Indented by the paste\nText",
            "```python\nimport os\n```",
            "- item one\n- item two",
            "1. first\n2. second",
            "See [the docs](https://example.com) for details.",
        ],
    )
    def test_markdown_markers(self, text):
        assert detect_syntax_mode(text) is SyntaxMode.MARKDOWN

    def test_hash_without_space_is_not_heading(self):
        assert detect_syntax_mode("#hashtag in a sentence") is SyntaxMode.PLAIN

    def test_markdown_wins_over_code(self):
        assert detect_syntax_mode("# Setup\n\nimport os") is SyntaxMode.MARKDOWN


# ============================================================================
# Code
# ============================================================================


class TestCodeDetection:

    @pytest.mark.parametrize(
        "text",
        [
            "def foo():\n    return 1",
            "const x = 1;",
            "pub fn main() {",
            "x => x + 1",
            "if (ready) {",
            "call();\n}",
        ],
    )
    def test_code_markers(self, text):
        assert detect_syntax_mode(text) is SyntaxMode.CODE


# ============================================================================
# Plain text and rule configuration
# ============================================================================


class TestPlainFallback:

    def test_prose_is_plain(self):
        assert detect_syntax_mode("Just some prose.\nAnother sentence here.") is SyntaxMode.PLAIN

    def test_empty_is_plain(self):
        assert detect_syntax_mode("") is SyntaxMode.PLAIN
        assert detect_syntax_mode("  \n\t\n") is SyntaxMode.PLAIN


class TestDetectionRules:

    def test_rule_groups_are_ordered_latex_markdown_code(self):
        order = [SyntaxMode.LATEX, SyntaxMode.MARKDOWN, SyntaxMode.CODE]
        positions = [order.index(rule.mode) for rule in DEFAULT_DETECTION_RULES]
        assert positions == sorted(positions)

    def test_custom_keywords(self):
        rules = build_detection_rules(code_keywords=("SELECT",))
        assert detect_syntax_mode("SELECT * FROM t", rules) is SyntaxMode.CODE
        assert detect_syntax_mode("SELECT * FROM t") is SyntaxMode.PLAIN

    def test_custom_rule_tuple(self):
        rules = (DetectionRule("always", SyntaxMode.CODE, lambda text: True),)
        assert detect_syntax_mode("anything", rules) is SyntaxMode.CODE

    def test_no_rules_means_plain(self):
        assert detect_syntax_mode("# Title", rules=()) is SyntaxMode.PLAIN
