"""FastAPI service exposing the segmentation engine to the editor.

The editor calls these endpoints when a document is pasted or uploaded
(detect + split) and when the user asks for a local cleanup of the current
cells.  Every handler is a thin wrapper around the pure engine functions.

Usage:
    python -m docsplit.web.app
    # => Uvicorn running on http://localhost:8000
"""

import io
import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from docsplit.config import ROOT, log_level
from docsplit.detection import detect_syntax_mode
from docsplit.reorganize import reorganize_cells
from docsplit.schema import CellRecord, LatexVocabulary, SyntaxMode
from docsplit.split import number_cells, split_document

load_dotenv(ROOT / ".env")

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

HOST = os.getenv("DOCSPLIT_HOST", "0.0.0.0")
PORT = int(os.getenv("DOCSPLIT_PORT", "8000"))

# Uploads above this size are rejected with 413
MAX_UPLOAD_BYTES = int(os.getenv("DOCSPLIT_MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

# LaTeX tables, including any additions from .env
VOCABULARY = LatexVocabulary.from_env()

app = FastAPI(title="docsplit", description="Split documents into editable cells")


# ---------------------------------------------------------------------------
# Request / response bodies
# ---------------------------------------------------------------------------


class DetectRequest(BaseModel):
    """Body for /api/document/detect."""

    content: str


class DetectResponse(BaseModel):
    """Detected syntax mode."""

    mode: SyntaxMode


class SplitRequest(BaseModel):
    """Body for /api/document/split; a missing mode or ``"auto"`` means detect."""

    content: str
    mode: str | None = None
    preserve_empty_cells: bool = False


class CleanupRequest(BaseModel):
    """Body for /api/document/cleanup: the editor's current cell contents in order."""

    cells: list[str]
    mode: str


class CellsResponse(BaseModel):
    """Mode used plus the resulting numbered cells."""

    mode: SyntaxMode
    cells: list[CellRecord]


class ParseResponse(CellsResponse):
    """Uploaded file text alongside its cells; ``pages`` is set for PDFs only."""

    filename: str
    text: str
    pages: int | None = None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/api/health")
def health():
    """Liveness probe."""
    return {"ok": True}


@app.post("/api/document/detect", response_model=DetectResponse)
def detect(body: DetectRequest):
    """Detect the syntax mode of a document."""
    return DetectResponse(mode=detect_syntax_mode(body.content))


@app.post("/api/document/split", response_model=CellsResponse)
def split(body: SplitRequest):
    """Split a document into numbered cells, detecting the mode when not given."""
    mode, cells = split_document(body.content, body.mode, preserve_empty_cells=body.preserve_empty_cells, vocabulary=VOCABULARY)
    logger.info("Split request: %d chars -> %d cells (mode=%s)", len(body.content), len(cells), mode.value)
    return CellsResponse(mode=mode, cells=number_cells(cells))


@app.post("/api/document/cleanup", response_model=CellsResponse)
def cleanup(body: CleanupRequest):
    """Re-segment the editor's current cells along the document's natural structure."""
    if not any(cell.strip() for cell in body.cells):
        raise HTTPException(status_code=400, detail="Content is required")
    mode = SyntaxMode.coerce(body.mode)
    cells = reorganize_cells(body.cells, mode, vocabulary=VOCABULARY)
    return CellsResponse(mode=mode, cells=number_cells(cells))


def _is_pdf(filename: str, content_type: str | None) -> bool:
    return content_type == "application/pdf" or filename.lower().endswith(".pdf")


def _extract_pdf_text(raw: bytes) -> tuple[str, int]:
    """Return the extracted text of a PDF (pages joined by newlines) and its page count."""
    reader = PdfReader(io.BytesIO(raw))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages).strip(), len(pages)


@app.post("/api/document/parse", response_model=ParseResponse)
async def parse(file: UploadFile = File(...)):
    """Read an uploaded UTF-8 text file or text-based PDF, detect its mode and split it."""
    # One byte over the limit is enough to reject without buffering the whole upload
    raw = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_BYTES} bytes")
    if not raw.strip():
        raise HTTPException(status_code=400, detail="File is empty")

    filename = file.filename or "upload.txt"
    pages = None
    if _is_pdf(filename, file.content_type):
        try:
            text, pages = await run_in_threadpool(_extract_pdf_text, raw)
        except PdfReadError as exc:
            logger.warning("Failed to parse PDF %s: %s", filename, exc)
            raise HTTPException(status_code=400, detail=f"Failed to parse PDF: {exc}") from exc
        if not text:
            raise HTTPException(status_code=400, detail="PDF appears to be empty or contains only images. Please use a text-based PDF.")
    else:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=400, detail="Only UTF-8 text files and PDFs are supported") from exc

    mode, cells = split_document(text, vocabulary=VOCABULARY)
    logger.info("Parsed upload %s: %d bytes -> %d cells (mode=%s)", filename, len(raw), len(cells), mode.value)
    return ParseResponse(filename=filename, text=text, pages=pages, mode=mode, cells=number_cells(cells))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
