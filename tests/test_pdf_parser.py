from __future__ import annotations

import logging

import fitz  # PyMuPDF
import pytest

from pdf import parser
from pdf.parser import PageCursor, read_pdf_fragments


def make_pdf(pages: list[list[tuple[float, float, str]]]) -> bytes:
    doc = fitz.open()
    try:
        for texts in pages:
            page = doc.new_page()
            for x, y, text in texts:
                page.insert_text((x, y), text, fontsize=10)
        return doc.tobytes()
    finally:
        doc.close()


def test_fragments_carry_text_and_position():
    data = make_pdf([[(72, 100, "DEV APP NO"), (72, 160, "123/2019")]])
    [fragments] = list(PageCursor(data))
    by_text = {f.text.strip(): f for f in fragments if f.text.strip()}
    assert set(by_text) == {"DEV APP NO", "123/2019"}

    label = by_text["DEV APP NO"]
    assert label.x == pytest.approx(72, abs=1)
    # insert_text positions the baseline; the span box sits above it
    assert label.y < 100 < label.bottom
    assert label.width > 0 and label.height > 0
    assert by_text["123/2019"].y > label.bottom


def test_pages_are_read_in_order():
    data = make_pdf([[(72, 100, "first")], [(72, 100, "second")], []])
    cursor = PageCursor(data)
    texts = [[f.text.strip() for f in fragments] for fragments in cursor]
    assert texts == [["first"], ["second"], []]
    assert cursor.page_count == 3


def test_page_limit(caplog):
    data = make_pdf([[(72, 100, f"page {n}")] for n in range(3)])
    with caplog.at_level(logging.WARNING):
        pages = list(PageCursor(data, max_pages=2))
    assert len(pages) == 2
    assert "Stopped after 2 pages" in caplog.text


def test_stopping_early():
    cursor = PageCursor(make_pdf([[(72, 100, "a")], [(72, 100, "b")]]))
    first = next(iter(cursor))
    assert [f.text.strip() for f in first] == ["a"]


def test_read_pdf_fragments(tmp_path):
    path = tmp_path / "notice.pdf"
    path.write_bytes(make_pdf([[(72, 100, "Approval:")]]))
    assert [[f.text.strip() for f in page] for page in read_pdf_fragments(path)] == [["Approval:"]]


@pytest.fixture
def opened(monkeypatch):
    """Every document the cursor opens."""
    documents = []
    real_open = fitz.open

    def tracking_open(*args, **kwargs):
        doc = real_open(*args, **kwargs)
        documents.append(doc)
        return doc

    monkeypatch.setattr(parser.fitz, "open", tracking_open)
    return documents


def test_document_closed_when_decoding_fails(monkeypatch, opened):
    data = make_pdf([[(72, 100, "a")]])
    opened.clear()

    def broken(page):
        raise RuntimeError("bad span")

    monkeypatch.setattr(parser, "page_fragments", broken)
    with pytest.raises(RuntimeError, match="bad span"):
        list(PageCursor(data))
    assert len(opened) == 1
    assert opened[0].is_closed


def test_document_closed_when_consumer_stops(opened):
    data = make_pdf([[(72, 100, "a")], [(72, 100, "b")]])
    opened.clear()
    pages = PageCursor(data).pages()
    next(pages)
    pages.close()
    assert len(opened) == 1
    assert all(doc.is_closed for doc in opened)


def test_one_page_open_at_a_time(opened):
    data = make_pdf([[(72, 100, "a")], [(72, 100, "b")], [(72, 100, "c")]])
    opened.clear()
    for _ in PageCursor(data):
        assert all(doc.is_closed for doc in opened)
    # one open per page, plus the one that finds the end
    assert len(opened) == 4
    assert all(doc.is_closed for doc in opened)


def test_text_outside_the_page_is_ignored():
    data = make_pdf([[(72, 100, "inside"), (72, -200, "outside")]])
    [fragments] = list(PageCursor(data))
    assert [f.text.strip() for f in fragments if f.text.strip()] == ["inside"]
