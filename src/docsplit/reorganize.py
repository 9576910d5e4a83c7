"""Round-trip cleanup: re-derive cell boundaries from the document's own structure.

After edits (for example an LLM rewrite that spans several cells) the cell
boundaries no longer match the syntax's natural structure.  Reorganising
joins the cells back into one document, normalises its whitespace, splits it
again, merges fragments and normalises each resulting cell.  Running it a
second time changes nothing.
"""

import logging

from docsplit.config import CELL_SEPARATORS
from docsplit.merge import merge_cells
from docsplit.normalize import normalize_whitespace
from docsplit.schema import Cell, LatexVocabulary, SplitOptions, SyntaxMode
from docsplit.split import smart_split

logger = logging.getLogger(__name__)


def _cell_text(cell: Cell | str) -> str:
    return cell.content if isinstance(cell, Cell) else str(cell)


def reorganize_cells(cells, mode: SyntaxMode | str, *, vocabulary: LatexVocabulary | None = None) -> list[Cell]:
    """Join *cells* (``Cell`` objects or plain strings), re-split, merge and normalise them."""
    mode = SyntaxMode.coerce(mode)
    texts = [_cell_text(cell) for cell in cells]
    joined = normalize_whitespace(CELL_SEPARATORS[mode.value].join(texts))

    segmented = smart_split(joined, SplitOptions(mode=mode), vocabulary=vocabulary)
    merged = merge_cells(segmented, mode)
    result = [Cell(content=normalize_whitespace(cell.content), kind=cell.kind) for cell in merged]

    logger.info("Reorganized %d cells into %d (mode=%s)", len(texts), len(result), mode.value)
    return result


cleanup_cells = reorganize_cells
