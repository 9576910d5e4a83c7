"""Tests for the FastAPI service."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import io

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from docsplit.web import app as web_app

LATEX = "\\documentclass{article}\n\\begin{document}\nHello world, this is the body.\n\\end{document}"


def _text_pdf(text: str) -> bytes:
    """Build a one-page PDF whose content stream draws *text* in Helvetica."""
    stream = f"BT /F1 12 Tf 10 40 Td ({text}) Tj ET".encode()
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 300 100] /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref)
    return bytes(out)


def _blank_pdf() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def client():
    return TestClient(web_app.app)


class TestHealthAndDetect:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_detect(self, client):
        assert client.post("/api/document/detect", json={"content": LATEX}).json() == {"mode": "latex"}
        assert client.post("/api/document/detect", json={"content": "plain words"}).json() == {"mode": "plain"}


class TestSplit:

    def test_auto_mode(self, client):
        response = client.post("/api/document/split", json={"content": "# Title\n\nBody text."})
        assert response.status_code == 200
        body = response.json()
        assert body["mode"] == "markdown"
        assert body["cells"] == [
            {"id": "cell-0", "index": 0, "content": "# Title", "kind": "heading"},
            {"id": "cell-1", "index": 1, "content": "Body text.", "kind": "body"},
        ]

    def test_unknown_mode_is_plain(self, client):
        body = client.post("/api/document/split", json={"content": "A\n\nB", "mode": "asciidoc"}).json()
        assert body["mode"] == "plain"
        assert len(body["cells"]) == 2

    def test_preserve_empty_cells(self, client):
        body = client.post("/api/document/split", json={"content": "\n\nA", "mode": "plain", "preserve_empty_cells": True}).json()
        assert [cell["content"] for cell in body["cells"]] == ["", "A"]


class TestCleanup:

    def test_reorganizes(self, client):
        response = client.post("/api/document/cleanup", json={"cells": ["# Title", "Some text.\n\n## Section", "More text."], "mode": "markdown"})
        assert response.status_code == 200
        cells = response.json()["cells"]
        assert [(cell["id"], cell["content"], cell["kind"]) for cell in cells] == [
            ("cell-0", "# Title\n\nSome text.", "heading"),
            ("cell-1", "## Section\n\nMore text.", "heading"),
        ]

    def test_blank_content_rejected(self, client):
        response = client.post("/api/document/cleanup", json={"cells": ["  ", ""], "mode": "plain"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Content is required"


class TestParse:

    def test_upload(self, client):
        response = client.post("/api/document/parse", files={"file": ("notes.md", b"# Title\n\nBody text here.", "text/markdown")})
        assert response.status_code == 200
        body = response.json()
        assert body["filename"] == "notes.md"
        assert body["text"] == "# Title\n\nBody text here."
        assert body["mode"] == "markdown"
        assert [cell["content"] for cell in body["cells"]] == ["# Title", "Body text here."]

    def test_empty_file(self, client):
        assert client.post("/api/document/parse", files={"file": ("empty.txt", b"  \n", "text/plain")}).status_code == 400

    def test_not_utf8(self, client):
        response = client.post("/api/document/parse", files={"file": ("bin.dat", b"\xff\xfe\xfa", "application/octet-stream")})
        assert response.status_code == 400
        assert "UTF-8" in response.json()["detail"]

    def test_too_large(self, client, monkeypatch):
        monkeypatch.setattr(web_app, "MAX_UPLOAD_BYTES", 10)
        assert client.post("/api/document/parse", files={"file": ("big.txt", b"x" * 11, "text/plain")}).status_code == 413

    def test_missing_file(self, client):
        assert client.post("/api/document/parse").status_code == 422


class TestParsePdf:

    def test_text_pdf(self, client):
        response = client.post("/api/document/parse", files={"file": ("paper.pdf", _text_pdf("Hello from a PDF"), "application/pdf")})
        assert response.status_code == 200
        body = response.json()
        assert body["pages"] == 1
        assert "Hello from a PDF" in body["text"]
        assert body["mode"] == "plain"
        assert len(body["cells"]) == 1

    def test_pdf_detected_by_extension(self, client):
        response = client.post("/api/document/parse", files={"file": ("paper.PDF", _text_pdf("Hello again"), "application/octet-stream")})
        assert response.status_code == 200
        assert response.json()["pages"] == 1

    def test_text_file_has_no_pages(self, client):
        body = client.post("/api/document/parse", files={"file": ("notes.txt", b"Plain words.", "text/plain")}).json()
        assert body["pages"] is None

    def test_image_only_pdf_rejected(self, client):
        response = client.post("/api/document/parse", files={"file": ("scan.pdf", _blank_pdf(), "application/pdf")})
        assert response.status_code == 400
        assert "text-based PDF" in response.json()["detail"]

    def test_corrupt_pdf_rejected(self, client):
        response = client.post("/api/document/parse", files={"file": ("broken.pdf", b"%PDF-1.4 not really a pdf", "application/pdf")})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Failed to parse PDF")
