"""LaTeX segmentation as an explicit finite state machine.

Phases:

    PREAMBLE        everything before \\begin{document}, kept as one cell
    NORMAL          body text, split at paragraph breaks and section commands
    IN_ENVIRONMENT  inside a tracked environment (figure, equation, ...);
                    every line is kept until the matching \\end{...}

The command and environment tables come from a ``LatexVocabulary`` so the
state machine itself carries no LaTeX vocabulary.

After the main pass, ``merge_small_latex_cells`` folds cells made only of a
command or two (``\\maketitle``, ``\\begin{document}``) into a neighbour so
they never sit alone in the editor.
"""

import logging
from enum import Enum

from docsplit.config import BEGIN_DOCUMENT, END_DOCUMENT
from docsplit.patterns import BEGIN_ENV_RE, ENV_TOKEN_RE, LATEX_COMMENT_RE
from docsplit.schema import Cell, CellKind, LatexVocabulary
from docsplit.segmenters.base import CellBuffer, combine_cells, is_blank, non_blank_lines

logger = logging.getLogger(__name__)

MERGE_SEPARATOR = "\n\n"


class LatexPhase(Enum):
    """Phases of the LaTeX segmenter."""

    PREAMBLE = "preamble"
    NORMAL = "normal"
    IN_ENVIRONMENT = "in_environment"


# ── Line classification ──────────────────────────────────────────────────────


def starts_with_command(stripped: str, commands) -> bool:
    """Return True if the line opens with one of *commands* as a whole command name.

    ``\\part`` matches ``\\part{One}`` and ``\\part*{One}`` but not ``\\partial``.
    """
    for command in commands:
        if stripped.startswith(command):
            rest = stripped[len(command) :]
            if not rest or not rest[0].isalpha():
                return True
    return False


def is_command_or_comment(stripped: str) -> bool:
    """Return True for a line that is a control sequence or a comment."""
    return stripped.startswith(("\\", "%"))


def is_command_only(content: str) -> bool:
    """Return True if every non-blank line of *content* is a command or a comment."""
    return all(is_command_or_comment(line) for line in non_blank_lines(content))


def _has_substantive_content(lines: list[str]) -> bool:
    """Return True if any line carries prose rather than commands, comments or blanks."""
    return any(line.strip() and not is_command_or_comment(line.strip()) for line in lines)


def _environment_tokens(line: str) -> list[tuple[str, str]]:
    """Return the (``begin``/``end``, name) tokens on a line, ignoring commented-out text."""
    return ENV_TOKEN_RE.findall(LATEX_COMMENT_RE.sub("", line))


def _count_blank_run(lines: list[str], idx: int) -> int:
    """Return how many consecutive blank lines start at idx."""
    end = idx
    while end < len(lines) and is_blank(lines[end]):
        end += 1
    return end - idx


# ── Segmenter state ──────────────────────────────────────────────────────────


class _SegmenterState:
    """Mutable state bag for one segmentation pass."""

    def __init__(self, vocabulary: LatexVocabulary, phase: LatexPhase):
        self.vocabulary = vocabulary
        self.phase = phase
        self.buffer = CellBuffer()

        # Tracked environment context (IN_ENVIRONMENT only)
        self.environment: str | None = None
        self.depth = 0

    def enter_environment(self, name: str, line: str):
        """Flush, then open a tracked-environment cell with its \\begin line."""
        self.buffer.start(line)
        self.phase = LatexPhase.IN_ENVIRONMENT
        self.environment = name
        self.depth = 1
        # Tokens after the opening \begin on the same line (one-line environments)
        self._apply_environment_tokens(_environment_tokens(line)[1:])

    def continue_environment(self, line: str):
        """Append a line inside the tracked environment and close it when balanced."""
        self.buffer.append(line)
        self._apply_environment_tokens(_environment_tokens(line))

    def _apply_environment_tokens(self, tokens: list[tuple[str, str]]):
        for action, name in tokens:
            if action == "begin":
                self.depth += 1
                continue
            self.depth -= 1
            if self.depth <= 0 and name == self.environment:
                self.buffer.flush()
                logger.debug("Closed tracked environment '%s'", name)
                self.phase = LatexPhase.NORMAL
                self.environment = None
                self.depth = 0
                return


# ── Line handlers ────────────────────────────────────────────────────────────


def _handle_preamble(state: _SegmenterState, line: str):
    """Accumulate the preamble until \\begin{document}."""
    if line.strip() != BEGIN_DOCUMENT:
        state.buffer.append(line)
        return
    state.buffer.flush()
    state.buffer.emit(line)
    state.phase = LatexPhase.NORMAL


def _handle_blank_run(state: _SegmenterState, lines: list[str], idx: int) -> int:
    """Apply the paragraph-break policy to the blank run at idx; return the next index.

    Prose followed by a blank line always ends the cell.  Commands and comments
    keep accumulating across a single blank line, but two or more blank lines
    are a strong break even for them.
    """
    run = _count_blank_run(lines, idx)
    if _has_substantive_content(state.buffer.lines) or (run >= 2 and state.buffer.has_content()):
        state.buffer.flush()
    elif state.buffer.lines:
        state.buffer.lines.extend(lines[idx : idx + run])
    return idx + run


def _handle_normal(state: _SegmenterState, line: str):
    """Route a non-blank body line."""
    stripped = line.strip()
    vocabulary = state.vocabulary

    if stripped == END_DOCUMENT:
        state.buffer.emit(line)
        return

    begin = BEGIN_ENV_RE.match(stripped)
    if begin and vocabulary.is_tracked(begin.group(1)):
        state.enter_environment(begin.group(1), line)
    elif starts_with_command(stripped, vocabulary.section_commands):
        state.buffer.start(line, CellKind.HEADING)
    elif starts_with_command(stripped, vocabulary.standalone_commands):
        # \maketitle, \newpage, ... never open a cell of their own
        logger.debug("Grouping standalone command %s with the current cell", stripped)
        state.buffer.append(line)
    else:
        state.buffer.append(line)


# ── Main segmentation ────────────────────────────────────────────────────────


def _initial_phase(lines: list[str]) -> LatexPhase:
    """Start in PREAMBLE only for a full document; fragments start in the body."""
    if any(line.strip() == BEGIN_DOCUMENT for line in lines):
        return LatexPhase.PREAMBLE
    return LatexPhase.NORMAL


def split_latex(content: str, vocabulary: LatexVocabulary | None = None) -> list[Cell]:
    """Split LaTeX *content* into cells, then merge command-only fragments."""
    vocabulary = vocabulary or LatexVocabulary()
    lines = content.split("\n")
    state = _SegmenterState(vocabulary, _initial_phase(lines))

    idx = 0
    while idx < len(lines):
        line = lines[idx]

        if state.phase is LatexPhase.PREAMBLE:
            _handle_preamble(state, line)
        elif state.phase is LatexPhase.IN_ENVIRONMENT:
            state.continue_environment(line)
        elif is_blank(line):
            idx = _handle_blank_run(state, lines, idx)
            continue
        else:
            _handle_normal(state, line)
        idx += 1

    if state.phase is LatexPhase.IN_ENVIRONMENT:
        logger.warning("Environment '%s' is never closed -- flushing it at end of input", state.environment)
    state.buffer.flush()

    cells = merge_small_latex_cells(state.buffer.cells)
    logger.debug("LaTeX split produced %d cells (%d before merging)", len(cells), len(state.buffer.cells))
    return cells


# ── Post-pass ────────────────────────────────────────────────────────────────


def _is_small_command_cell(cell: Cell) -> bool:
    """A cell of at most two non-blank lines, all commands or comments."""
    return len(non_blank_lines(cell.content)) <= 2 and is_command_only(cell.content)


def merge_small_latex_cells(cells: list[Cell], separator: str = MERGE_SEPARATOR) -> list[Cell]:
    """Fold command-only cells of one or two lines into a neighbour.

    Such a cell joins the previous output cell when there is one, otherwise
    the next cell.  Bare section commands follow the same rule.
    """
    result: list[Cell] = []
    carry: Cell | None = None

    for idx, cell in enumerate(cells):
        if carry is not None:
            cell = combine_cells(carry, cell, separator, kind=CellKind.HEADING if carry.kind is CellKind.HEADING else cell.kind)
            carry = None

        has_next = idx + 1 < len(cells)
        if not _is_small_command_cell(cell):
            result.append(cell)
        elif result:
            result[-1] = combine_cells(result[-1], cell, separator)
        elif has_next:
            carry = cell
        else:
            result.append(cell)

    return result
