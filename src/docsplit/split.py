"""Segmenter facade: pick the right algorithm for a mode and tidy its output.

``smart_split`` is the engine's main entry point.  ``split_document`` adds
auto-detection for callers that don't know the mode yet (pasted or uploaded
text), and ``number_cells`` gives each cell the positional id the editor
stores it under.
"""

import logging

from docsplit.detection import detect_syntax_mode
from docsplit.normalize import normalize_line_endings
from docsplit.schema import Cell, CellRecord, LatexVocabulary, SplitOptions, SyntaxMode
from docsplit.segmenters.code import split_code
from docsplit.segmenters.latex import split_latex
from docsplit.segmenters.markdown import split_markdown
from docsplit.segmenters.plain import split_plain

logger = logging.getLogger(__name__)

AUTO_MODE = "auto"

_SEGMENTERS = {
    SyntaxMode.PLAIN: split_plain,
    SyntaxMode.MARKDOWN: split_markdown,
    SyntaxMode.CODE: split_code,
}


def smart_split(content: str, options: SplitOptions | None = None, *, vocabulary: LatexVocabulary | None = None) -> list[Cell]:
    """Split *content* into cells according to ``options.mode``.

    Whitespace-only input yields no cells.  Empty cells are dropped unless
    ``options.preserve_empty_cells`` is set.  *vocabulary* only applies to
    LaTeX and defaults to the built-in tables.
    """
    options = options or SplitOptions()
    if not content.strip():
        return []

    text = normalize_line_endings(content)
    if options.mode is SyntaxMode.LATEX:
        cells = split_latex(text, vocabulary)
    else:
        cells = _SEGMENTERS.get(options.mode, split_plain)(text)

    if not options.preserve_empty_cells:
        cells = [cell for cell in cells if cell.content.strip()]

    logger.debug("Split %d chars into %d cells (mode=%s)", len(content), len(cells), options.mode.value)
    return cells


def split_document(
    content: str,
    mode: SyntaxMode | str | None = None,
    *,
    preserve_empty_cells: bool = False,
    vocabulary: LatexVocabulary | None = None,
) -> tuple[SyntaxMode, list[Cell]]:
    """Split *content*, detecting its mode first when *mode* is None or ``"auto"``.

    Returns the mode actually used together with the cells.
    """
    if mode is None or (isinstance(mode, str) and mode.strip().lower() == AUTO_MODE):
        resolved = detect_syntax_mode(content)
        logger.info("Auto-detected syntax mode: %s", resolved.value)
    else:
        resolved = SyntaxMode.coerce(mode)
    options = SplitOptions(mode=resolved, preserve_empty_cells=preserve_empty_cells)
    return resolved, smart_split(content, options, vocabulary=vocabulary)


def number_cells(cells: list[Cell], prefix: str = "cell") -> list[CellRecord]:
    """Attach a stable positional id (``cell-0``, ``cell-1``, ...) and index to each cell."""
    return [CellRecord(id=f"{prefix}-{index}", index=index, content=cell.content, kind=cell.kind) for index, cell in enumerate(cells)]
