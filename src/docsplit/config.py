"""Shared configuration for the document segmentation engine.

Everything here is plain data: the LaTeX vocabulary tables, the detection
keyword lists, the small-cell thresholds and the per-mode separators.  The
segmenters never read these directly -- they receive them as arguments
(``LatexVocabulary``, ``build_detection_rules``), and the values below are
only the defaults.

Entry points (CLI, web server) can extend the LaTeX vocabulary through
environment variables, usually set in the project ``.env``:

    DOCSPLIT_EXTRA_TRACKED_ENVIRONMENTS=tikzpicture,minted
    DOCSPLIT_EXTRA_SECTION_COMMANDS=\\frametitle
    DOCSPLIT_EXTRA_STANDALONE_COMMANDS=\\vfill
"""

import os
from pathlib import Path

ROOT = Path(__file__).parent.parent.parent.resolve()

# ── LaTeX vocabulary ─────────────────────────────────────────────────────────

# Environments that always stay together as a single cell
TRACKED_ENVIRONMENTS = frozenset(
    {
        "abstract",
        "figure",
        "table",
        "equation",
        "align",
        "itemize",
        "enumerate",
        "description",
        "quote",
        "quotation",
        "verbatim",
        "lstlisting",
        "algorithm",
        "proof",
        "theorem",
        "lemma",
        "corollary",
        "definition",
    }
)

# Commands that open a new logical section (and a new heading cell)
SECTION_COMMANDS = (
    "\\part",
    "\\chapter",
    "\\section",
    "\\subsection",
    "\\subsubsection",
    "\\paragraph",
    "\\subparagraph",
)

# Layout commands that attach to the surrounding content instead of splitting it
STANDALONE_COMMANDS = (
    "\\maketitle",
    "\\tableofcontents",
    "\\listoffigures",
    "\\listoftables",
    "\\newpage",
    "\\clearpage",
    "\\cleardoublepage",
    "\\thispagestyle",
    "\\pagestyle",
    "\\flushbottom",
    "\\raggedbottom",
)

BEGIN_DOCUMENT = "\\begin{document}"
END_DOCUMENT = "\\end{document}"

# ── Syntax detection vocabulary ──────────────────────────────────────────────

# Any one of these substrings marks a document as LaTeX
LATEX_MARKERS = ("\\documentclass", BEGIN_DOCUMENT, "\\section{", "\\usepackage")

# Line-leading keywords that mark a document as source code
CODE_KEYWORDS = (
    "import",
    "from",
    "const",
    "let",
    "var",
    "function",
    "class",
    "def",
    "pub fn",
    "fn",
    "async fn",
    "package",
    "public class",
    "private",
    "protected",
)

# ── Merge policy ─────────────────────────────────────────────────────────────

# A cell is "tiny" when it has at most this many non-blank lines...
TINY_MAX_LINES = 2
# ...and strictly fewer than this many words
TINY_MAX_WORDS = 15

# Separator used both to glue merged cells and to join cells before re-segmenting.
# Keys are SyntaxMode values.
CELL_SEPARATORS = {
    "plain": "\n\n",
    "markdown": "\n\n",
    "latex": "\n\n",
    "code": "\n\n",
}

# ── Environment overrides ────────────────────────────────────────────────────

EXTRA_TRACKED_ENVIRONMENTS_VAR = "DOCSPLIT_EXTRA_TRACKED_ENVIRONMENTS"
EXTRA_SECTION_COMMANDS_VAR = "DOCSPLIT_EXTRA_SECTION_COMMANDS"
EXTRA_STANDALONE_COMMANDS_VAR = "DOCSPLIT_EXTRA_STANDALONE_COMMANDS"
LOG_LEVEL_VAR = "DOCSPLIT_LOG_LEVEL"


def env_list(name: str) -> tuple[str, ...]:
    """Read a comma-separated environment variable as a tuple of non-empty, stripped items."""
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def log_level(default: str = "INFO") -> str:
    """Return the configured log level name (upper-cased)."""
    return os.getenv(LOG_LEVEL_VAR, default).upper()
