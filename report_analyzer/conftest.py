import errno
from typing import List, Sequence

import pytest
import requests

from .models import PageText


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[Sequence[str]]) -> bytes:
    """Build a minimal PDF with one Helvetica text line per entry."""
    objects: List[str] = []
    page_refs = []
    n_pages = len(pages)
    # 1: catalog, 2: pages, 3: font, then (page, content) pairs
    for i, lines in enumerate(pages):
        page_id = 4 + 2 * i
        content_id = page_id + 1
        page_refs.append(f"{page_id} 0 R")
        ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
        for line in lines:
            ops.append(f"({_escape(line)}) Tj T*")
        ops.append("ET")
        stream = "\n".join(ops)
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_id} 0 R >>"
        )
        objects.append(f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream")

    head = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{' '.join(page_refs)}] /Count {n_pages} >>",
        "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    all_objects = head + objects

    out = b"%PDF-1.4\n"
    offsets = []
    for num, body in enumerate(all_objects, 1):
        offsets.append(len(out))
        out += f"{num} 0 obj\n{body}\nendobj\n".encode("latin-1")

    xref_offset = len(out)
    xref = [f"xref\n0 {len(all_objects) + 1}\n", "0000000000 65535 f \n"]
    xref.extend(f"{off:010d} 00000 n \n" for off in offsets)
    out += "".join(xref).encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(all_objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    return out


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, responses=None, error: Exception = None):
        self.responses = dict(responses or {})
        self.error = error
        self.calls: List[str] = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if url not in self.responses:
            return FakeResponse(status_code=404)
        return FakeResponse(self.responses[url])


class FullDiskFile:
    """Temp file whose writes fail as on a full disk."""

    def __init__(self, path):
        self.name = str(path)
        path.write_bytes(b"")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def write(self, data):
        raise OSError(errno.ENOSPC, "No space left on device")

    def close(self):
        pass


class FakeExtractor:
    """Returns canned pages keyed by path name instead of parsing PDFs."""

    def __init__(self, pages_by_name):
        self.pages_by_name = pages_by_name
        self.paths = []

    def extract_pages(self, pdf_path, document_id=None):
        self.paths.append(str(pdf_path))
        texts = self.pages_by_name[str(pdf_path)]
        return [PageText(page_index=i, text=t) for i, t in enumerate(texts, 1)]


@pytest.fixture
def pdf_factory(tmp_path):
    def _make(pages, name="report.pdf"):
        path = tmp_path / name
        path.write_bytes(build_pdf(pages))
        return path
    return _make


@pytest.fixture
def fake_session():
    return FakeSession()
