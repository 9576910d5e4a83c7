"""Classify raw document text as LaTeX, Markdown, source code or plain text.

Detection is an ordered tuple of ``DetectionRule``s; the first rule whose
predicate matches decides the mode.  LaTeX and Markdown markers are specific
and rarely occur in prose, so their rules come first.  The code heuristics
are weaker and must not shadow them.
"""

import logging
from typing import Callable, NamedTuple

from docsplit.config import CODE_KEYWORDS, LATEX_MARKERS
from docsplit.patterns import (
    CLOSING_BRACE_LINE_RE,
    FENCE,
    LINE_ENDS_WITH_OPEN_BRACE_RE,
    MD_BULLET_LINE_RE,
    MD_HEADING_LINE_RE,
    MD_LINK_RE,
    MD_ORDERED_LINE_RE,
    code_keyword_re,
)
from docsplit.schema import SyntaxMode

logger = logging.getLogger(__name__)


class DetectionRule(NamedTuple):
    """One (predicate, mode) pair in the detector's priority list."""

    name: str
    mode: SyntaxMode
    predicate: Callable[[str], bool]


def _contains_any(markers) -> Callable[[str], bool]:
    markers = tuple(markers)
    return lambda text: any(marker in text for marker in markers)


def _searches(pattern) -> Callable[[str], bool]:
    return lambda text: pattern.search(text) is not None


def _has_environment_pair(text: str) -> bool:
    return "\\begin{" in text and "\\end{" in text


def build_detection_rules(latex_markers=LATEX_MARKERS, code_keywords=CODE_KEYWORDS) -> tuple[DetectionRule, ...]:
    """Build the ordered detection rules from explicit marker and keyword lists."""
    return (
        DetectionRule("latex-marker", SyntaxMode.LATEX, _contains_any(latex_markers)),
        DetectionRule("latex-environment", SyntaxMode.LATEX, _has_environment_pair),
        DetectionRule("markdown-heading", SyntaxMode.MARKDOWN, _searches(MD_HEADING_LINE_RE)),
        DetectionRule("markdown-fence", SyntaxMode.MARKDOWN, _contains_any([FENCE])),
        DetectionRule("markdown-bullet", SyntaxMode.MARKDOWN, _searches(MD_BULLET_LINE_RE)),
        DetectionRule("markdown-ordered-list", SyntaxMode.MARKDOWN, _searches(MD_ORDERED_LINE_RE)),
        DetectionRule("markdown-link", SyntaxMode.MARKDOWN, _searches(MD_LINK_RE)),
        DetectionRule("code-keyword", SyntaxMode.CODE, _searches(code_keyword_re(code_keywords))),
        DetectionRule("code-arrow", SyntaxMode.CODE, _contains_any(["=>"])),
        DetectionRule("code-open-brace", SyntaxMode.CODE, _searches(LINE_ENDS_WITH_OPEN_BRACE_RE)),
        DetectionRule("code-closing-brace", SyntaxMode.CODE, _searches(CLOSING_BRACE_LINE_RE)),
    )


DEFAULT_DETECTION_RULES = build_detection_rules()


def detect_syntax_mode(content: str, rules: tuple[DetectionRule, ...] = DEFAULT_DETECTION_RULES) -> SyntaxMode:
    """Return the syntax mode of *content*; PLAIN when no rule matches."""
    text = content.strip()
    for rule in rules:
        if rule.predicate(text):
            logger.debug("Detected %s via rule '%s'", rule.mode.value, rule.name)
            return rule.mode
    return SyntaxMode.PLAIN
