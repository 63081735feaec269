"""
pdf/parser.py — decoding PDF pages into positioned text fragments.

Architecture:
  PDF bytes → PageCursor → for each page: fitz.open() → page.get_text("dict")
  → spans → Fragment(x0, y0, x1 - x0, y1 - y0, text) → document closed
  → list[Fragment]

The document is re-opened for every page and closed before that page's
fragments are handed out, so at most one decoded page is alive at a time;
memory stays flat for long notices.

Public API:
  PageCursor(data).pages()     -> Iterator[list[Fragment]]
  read_pdf_fragments(path)     -> list[list[Fragment]]
  page_fragments(page)         -> list[Fragment]
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import fitz  # PyMuPDF

from data_model.layout import Fragment

log = logging.getLogger(__name__)

# Upper bound on pages read from one document, whatever the page count claims.
MAX_PAGES = 5000


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class PageCursor:
    """
    Iterates over the pages of a PDF held in memory.

    Each page is acquired, turned into fragments and released (also when the
    consumer stops iterating early or an exception escapes).
    """

    def __init__(self, data: bytes, max_pages: int = MAX_PAGES) -> None:
        self._data = data
        self._max_pages = max_pages
        self.page_count: int | None = None

    @contextmanager
    def _acquire(self, index: int) -> Iterator[fitz.Page | None]:
        doc = fitz.open(stream=self._data, filetype="pdf")
        try:
            self.page_count = doc.page_count
            yield doc.load_page(index) if index < doc.page_count else None
        finally:
            doc.close()

    def pages(self) -> Iterator[list[Fragment]]:
        for index in range(self._max_pages):
            with self._acquire(index) as page:
                if page is None:
                    return
                log.info("Reading page %d of %d.", index + 1, self.page_count)
                fragments = page_fragments(page)
                del page
            yield fragments
        if self.page_count is not None and self.page_count > self._max_pages:
            log.warning("Stopped after %d pages; the document claims %s.", self._max_pages, self.page_count)

    def __iter__(self) -> Iterator[list[Fragment]]:
        return self.pages()


def read_pdf_fragments(path: str | Path) -> list[list[Fragment]]:
    """Fragments of every page of a local PDF file."""
    return list(PageCursor(Path(path).read_bytes()))


def page_fragments(page: fitz.Page) -> list[Fragment]:
    """One Fragment per text span of the page, in page coordinates."""
    page_dict = page.get_text("dict", flags=fitz.TEXTFLAGS_DICT | fitz.TEXT_PRESERVE_WHITESPACE)
    fragments: list[Fragment] = []
    for block in page_dict.get("blocks", []):
        if block.get("type") != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                fragment = _span_fragment(span)
                if fragment is not None:
                    fragments.append(fragment)
    return fragments


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _span_fragment(span: dict) -> Fragment | None:
    x0, y0, x1, y1 = span.get("bbox", (0.0, 0.0, 0.0, 0.0))
    width, height = x1 - x0, y1 - y0
    if width < 0 or height < 0:
        return None
    return Fragment(x0, y0, width, height, text=span.get("text", ""))
