"""Markdown segmentation.

Cells follow the document's block structure:

    ---                 front matter       -> one cell
    title: Notes
    ---
    # Heading           ATX header         -> starts a heading cell
    Paragraph text.     blank lines        -> paragraph breaks
    ```python           fenced code block  -> one cell, never split inside
    x = 1
    ```
    ***                 horizontal rule    -> its own cell
"""

import logging

from docsplit.patterns import ATX_HEADER_RE, FENCE, FRONT_MATTER_CLOSE, FRONT_MATTER_OPEN, HORIZONTAL_RULE_RE
from docsplit.schema import Cell, CellKind
from docsplit.segmenters.base import CellBuffer

logger = logging.getLogger(__name__)


def split_markdown(content: str) -> list[Cell]:
    """Split Markdown *content* into block-level cells."""
    buffer = CellBuffer()
    in_front_matter = False
    in_code_block = False

    for index, line in enumerate(content.split("\n")):
        stripped = line.strip()

        # Front matter can only open on the very first line
        if index == 0 and stripped == FRONT_MATTER_OPEN:
            in_front_matter = True
            buffer.append(line)
            continue
        if in_front_matter:
            buffer.append(line)
            if stripped in FRONT_MATTER_CLOSE:
                buffer.flush()
                in_front_matter = False
            continue

        # Fences open and close code blocks; the whole block is one cell
        if stripped.startswith(FENCE):
            if in_code_block:
                buffer.append(line)
                buffer.flush()
            else:
                buffer.start(line)
            in_code_block = not in_code_block
            continue
        if in_code_block:
            buffer.append(line)
            continue

        if ATX_HEADER_RE.match(stripped):
            buffer.start(line, CellKind.HEADING)
        elif HORIZONTAL_RULE_RE.match(stripped):
            buffer.emit(line)
        elif not stripped:
            if buffer.has_content():
                buffer.flush()
        else:
            buffer.append(line)

    if in_code_block:
        logger.warning("Unterminated code fence -- the rest of the document stays in one cell")
    elif in_front_matter:
        logger.warning("Unterminated front matter -- the rest of the document stays in one cell")
    buffer.flush()
    return buffer.cells
