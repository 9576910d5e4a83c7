"""Document segmentation engine: split LaTeX, Markdown, code and prose into editable cells.

Submodules:
  config      -- vocabulary tables, thresholds, separators, environment overrides
  schema      -- pydantic models (SyntaxMode, Cell, SplitOptions, LatexVocabulary, CellRecord)
  patterns    -- compiled regex patterns
  detection   -- ordered syntax-detection rules
  normalize   -- whitespace canonicalisation
  segmenters  -- one segmenter per syntax mode
  merge       -- small-cell merging
  split       -- segmenter facade (smart_split, split_document, number_cells)
  reorganize  -- round-trip cleanup (reorganize_cells / cleanup_cells)
  cli         -- command-line entry point
  web         -- FastAPI service
"""

from docsplit.detection import detect_syntax_mode
from docsplit.reorganize import cleanup_cells, reorganize_cells
from docsplit.schema import Cell, CellKind, SplitOptions, SyntaxMode
from docsplit.split import number_cells, smart_split, split_document

__all__ = [
    "Cell",
    "CellKind",
    "SplitOptions",
    "SyntaxMode",
    "cleanup_cells",
    "detect_syntax_mode",
    "number_cells",
    "reorganize_cells",
    "smart_split",
    "split_document",
]
