"""Fold undersized cells into their neighbours after segmentation.

A segmenter works line by line and can leave behind fragments that make poor
editing units: a one-line paragraph, a lone ``\\maketitle``, or a Markdown
header whose content ended up in the next cell.  ``merge_cells`` runs over the
finished cell sequence and

- carries a lonely Markdown header forward onto the cell it introduces, and
- appends tiny cells (and, for LaTeX, command-only cells) to the previous cell.

Markdown heading cells never merge backwards, so every Markdown section still
opens a cell.  LaTeX applies the small-cell rule to section cells too.
"""

import logging

from docsplit.config import CELL_SEPARATORS, TINY_MAX_LINES, TINY_MAX_WORDS
from docsplit.schema import Cell, CellKind, SyntaxMode
from docsplit.segmenters.base import combine_cells, non_blank_lines
from docsplit.segmenters.latex import is_command_only

logger = logging.getLogger(__name__)


def is_tiny(cell: Cell, max_lines: int = TINY_MAX_LINES, max_words: int = TINY_MAX_WORDS) -> bool:
    """Return True for a cell of at most *max_lines* lines and fewer than *max_words* words."""
    return len(non_blank_lines(cell.content)) <= max_lines and len(cell.content.split()) < max_words


def is_lonely_header(cell: Cell) -> bool:
    """Return True for a heading cell that holds nothing but the heading line."""
    return cell.kind is CellKind.HEADING and len(non_blank_lines(cell.content)) == 1


def _is_small(cell: Cell, mode: SyntaxMode) -> bool:
    if is_tiny(cell):
        return True
    return mode is SyntaxMode.LATEX and is_command_only(cell.content)


def merge_cells(cells: list[Cell], mode: SyntaxMode | str) -> list[Cell]:
    """Merge tiny cells backwards and lonely Markdown headers forwards."""
    mode = SyntaxMode.coerce(mode)
    separator = CELL_SEPARATORS[mode.value]
    result: list[Cell] = []
    carry: Cell | None = None
    merged = 0

    for idx, cell in enumerate(cells):
        if carry is not None:
            cell = combine_cells(carry, cell, separator, kind=CellKind.HEADING)
            carry = None

        # Checked before the tiny rule: a lonely header is itself tiny and would
        # otherwise be glued to the end of the previous section
        lonely = mode is SyntaxMode.MARKDOWN and is_lonely_header(cell)
        if lonely and idx + 1 < len(cells):
            carry = cell
            merged += 1
            continue

        previous_accepts = bool(result) and not (mode is SyntaxMode.MARKDOWN and is_lonely_header(result[-1]))
        pinned = mode is SyntaxMode.MARKDOWN and cell.kind is CellKind.HEADING
        if not pinned and _is_small(cell, mode) and previous_accepts:
            result[-1] = combine_cells(result[-1], cell, separator)
            merged += 1
        else:
            result.append(cell)

    logger.debug("Merged %d of %d cells (mode=%s)", merged, len(cells), mode.value)
    return result
