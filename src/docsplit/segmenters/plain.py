"""Plain-text segmentation: one cell per paragraph."""

from docsplit.patterns import BLANK_LINE_RUN_RE
from docsplit.schema import Cell
from docsplit.segmenters.base import trim_block


def split_plain(content: str) -> list[Cell]:
    """Split *content* on runs of blank lines.

    Spans that trim to nothing are returned as empty cells; the caller decides
    whether to keep them.
    """
    return [Cell(content=trim_block(span.split("\n"))) for span in BLANK_LINE_RUN_RE.split(content)]
