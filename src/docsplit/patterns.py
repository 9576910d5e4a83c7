"""Compiled regex patterns shared by the detector and the segmenters.

Line-level patterns are matched against a line that has already been
stripped; document-level patterns use ``re.MULTILINE`` and run over the whole
text.
"""

import re

# ─── Line structure ───────────────────────────────────────────────────────────

# A newline followed by one or more whitespace-only lines: a paragraph break
BLANK_LINE_RUN_RE = re.compile(r"\n(?:[^\S\n]*\n)+")

# ─── Markdown ─────────────────────────────────────────────────────────────────

FENCE = "```"

# ATX header, e.g. "## Section"
ATX_HEADER_RE = re.compile(r"^#{1,6}\s")

# Horizontal rule: three or more of the same marker alone on a line
HORIZONTAL_RULE_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")

# Front matter opens with "---" and closes with "---" or "..."
FRONT_MATTER_OPEN = "---"
FRONT_MATTER_CLOSE = ("---", "...")

# Document-level markdown markers used by the detector
MD_HEADING_LINE_RE = re.compile(r"^#{1,6}\s", re.MULTILINE)
MD_BULLET_LINE_RE = re.compile(r"^[^\S\n]*[-*+][^\S\n]", re.MULTILINE)
MD_ORDERED_LINE_RE = re.compile(r"^[^\S\n]*\d+\.[^\S\n]", re.MULTILINE)
MD_LINK_RE = re.compile(r"\[.+?\]\(.+?\)")

# ─── LaTeX ────────────────────────────────────────────────────────────────────

# "\begin{figure}" at the start of a stripped line
BEGIN_ENV_RE = re.compile(r"^\\begin\{([^}]+)\}")

# Every \begin{..} / \end{..} token on a line, in order
ENV_TOKEN_RE = re.compile(r"\\(begin|end)\{([^}]*)\}")

# Trailing comment: an unescaped % and everything after it
LATEX_COMMENT_RE = re.compile(r"(?<!\\)%.*$")

# ─── Source code ──────────────────────────────────────────────────────────────

LINE_ENDS_WITH_OPEN_BRACE_RE = re.compile(r"\{[^\S\n]*$", re.MULTILINE)
CLOSING_BRACE_LINE_RE = re.compile(r"^[^\S\n]*\}[^\S\n]*$", re.MULTILINE)


def code_keyword_re(keywords) -> re.Pattern:
    """Compile a pattern matching any line that starts with one of *keywords* plus whitespace."""
    alternatives = "|".join(re.escape(keyword) for keyword in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"^(?:{alternatives})\s", re.MULTILINE)
