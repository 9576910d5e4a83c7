"""Split a document file into cells from the command line.

Usage:
    docsplit paper.tex
    docsplit notes.md --cleanup --format json
    cat draft.txt | docsplit - --mode plain
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from docsplit.config import ROOT, log_level
from docsplit.reorganize import reorganize_cells
from docsplit.schema import LatexVocabulary, SyntaxMode
from docsplit.split import AUTO_MODE, number_cells, split_document

logger = logging.getLogger(__name__)

CELL_DIVIDER = "-" * 72


def _read_input(source: str) -> str:
    """Read UTF-8 text from a path, or from stdin when *source* is ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docsplit", description="Split a LaTeX, Markdown, code or plain-text document into editable cells")
    parser.add_argument("path", help="Document to split, or '-' to read stdin")
    parser.add_argument("--mode", choices=[AUTO_MODE] + [mode.value for mode in SyntaxMode], default=AUTO_MODE, help="Syntax mode (default: auto-detect)")
    parser.add_argument("--cleanup", action="store_true", help="Merge fragments and normalise whitespace after splitting")
    parser.add_argument("--preserve-empty", action="store_true", help="Keep empty cells (ignored with --cleanup)")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $DOCSPLIT_LOG_LEVEL or WARNING)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    load_dotenv(ROOT / ".env")
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=(args.log_level or log_level("WARNING")).upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        content = _read_input(args.path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read %s: %s", args.path, exc)
        return 1

    vocabulary = LatexVocabulary.from_env()
    mode, cells = split_document(content, args.mode, preserve_empty_cells=args.preserve_empty, vocabulary=vocabulary)
    if args.cleanup:
        cells = reorganize_cells(cells, mode, vocabulary=vocabulary)
    logger.info("Split %s into %d cells (mode=%s)", args.path, len(cells), mode.value)

    if args.format == "json":
        payload = {"mode": mode.value, "cells": [record.model_dump(mode="json") for record in number_cells(cells)]}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(f"\n{CELL_DIVIDER}\n".join(cell.content for cell in cells))
    return 0


if __name__ == "__main__":
    sys.exit(main())
