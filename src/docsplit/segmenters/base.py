"""Line buffer and trimming helpers shared by the line-oriented segmenters."""

from docsplit.schema import Cell, CellKind


def is_blank(line: str) -> bool:
    """Return True for an empty or whitespace-only line."""
    return not line.strip()


def non_blank_lines(content: str) -> list[str]:
    """Return the stripped, non-blank lines of *content*."""
    return [line.strip() for line in content.split("\n") if line.strip()]


def trim_block(lines: list[str]) -> str:
    """Join *lines* after dropping surrounding blank lines and trailing whitespace.

    Indentation on the first kept line is content and is preserved.
    """
    start, end = 0, len(lines)
    while start < end and is_blank(lines[start]):
        start += 1
    while end > start and is_blank(lines[end - 1]):
        end -= 1
    return "\n".join(lines[start:end]).rstrip()


def combine_cells(first: Cell, second: Cell, separator: str, kind: CellKind | None = None) -> Cell:
    """Glue two cells into one; the kind defaults to the first cell's kind."""
    return Cell(content=first.content + separator + second.content, kind=kind or first.kind)


class CellBuffer:
    """Accumulates the lines of the cell under construction and collects finished cells."""

    def __init__(self):
        self.cells: list[Cell] = []
        self.lines: list[str] = []
        self.kind = CellKind.BODY

    def append(self, line: str):
        """Add a line to the current cell."""
        self.lines.append(line)

    def has_content(self) -> bool:
        """Return True if the current cell holds at least one non-blank line."""
        return any(not is_blank(line) for line in self.lines)

    def start(self, line: str, kind: CellKind = CellKind.BODY):
        """Flush the current cell and begin a new one with *line*."""
        self.flush()
        self.lines = [line]
        self.kind = kind

    def flush(self, keep_empty: bool = False):
        """Close the current cell.

        A cell that trims to nothing is dropped unless *keep_empty* is set.
        """
        if not self.lines:
            return
        content = trim_block(self.lines)
        if content or keep_empty:
            self.cells.append(Cell(content=content, kind=self.kind))
        self.lines = []
        self.kind = CellKind.BODY

    def emit(self, line: str, kind: CellKind = CellKind.BODY):
        """Flush the current cell, then add *line* as a standalone single-line cell."""
        self.flush()
        self.cells.append(Cell(content=line.rstrip(), kind=kind))
