"""Mode-specific document segmenters.

Submodules:
  base      -- line buffer and trimming helpers shared by every segmenter
  plain     -- paragraph split on blank-line runs
  code      -- blank-line split guarded by brace/paren depth
  markdown  -- front matter, fences, headers and rules
  latex     -- preamble / environment / section state machine plus small-cell merge
"""
