"""Source-code segmentation.

Blank lines separate cells, but only where the running brace and paren depth
are both zero, so a function body or a multi-line argument list is never cut
in half.  Depth tracking is a lexical heuristic: braces inside strings or
comments count like any other.
"""

from docsplit.schema import Cell
from docsplit.segmenters.base import CellBuffer, is_blank

_DEPTH_DELTAS = {"{": (1, 0), "}": (-1, 0), "(": (0, 1), ")": (0, -1)}


def split_code(content: str) -> list[Cell]:
    """Split *content* at blank lines that sit outside any ``{}`` / ``()`` nesting."""
    buffer = CellBuffer()
    brace_depth = 0
    paren_depth = 0

    for line in content.split("\n"):
        for char in line:
            brace_delta, paren_delta = _DEPTH_DELTAS.get(char, (0, 0))
            brace_depth += brace_delta
            paren_depth += paren_delta

        buffer.append(line)

        if is_blank(line) and brace_depth == 0 and paren_depth == 0:
            # Extra blank lines come out as empty cells; the facade drops them
            buffer.flush(keep_empty=True)

    buffer.flush()
    return buffer.cells
