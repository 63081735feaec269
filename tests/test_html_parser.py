from __future__ import annotations

import random
from datetime import date

import pytest
import requests

from html_parser import parser
from html_parser.parser import (
    FIRST_YEAR,
    extract_pdf_links,
    fetch_pdf_links,
    index_url_for,
    random_year,
    select_documents,
)

BASE = "https://www.coorong.sa.gov.au/page.aspx?u=2084&year=2019"

INDEX_HTML = """
<table>
  <tr><td class="uContentListDesc"><a href="/webdata/resources/files/DA Register March 2019.pdf">March</a></td></tr>
  <tr><td class="uContentListDesc"><a href="/webdata/resources/files/DA Register March 2019.pdf">March again</a></td></tr>
  <tr><td class="uContentListDesc"><a href="/page.aspx?u=1">Not a notice</a></td></tr>
  <tr><td class="uContentListDesc"><a>No link</a></td></tr>
</table>
<td class="u6ListTD"><div class="u6ListItem"><a href="https://files.example.org/feb.PDF">Feb</a></div></td>
<div class="unityHtmlArticle"><p><a href=" jan.pdf ">Jan</a></p></div>
<p><a href="/elsewhere.pdf">Outside the listing</a></p>
"""


class FakeResponse:
    def __init__(self, text="", content=b"", status=200):
        self.text = text
        self.content = content
        self.status_code = status
        self.encoding = None
        self.apparent_encoding = "utf-8"

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class ScriptedRandom:
    """randrange() answers taken from a script, in order."""

    def __init__(self, *answers):
        self._answers = list(answers)

    def randrange(self, n):
        answer = self._answers.pop(0)
        assert 0 <= answer < n
        return answer


def test_extract_pdf_links():
    assert extract_pdf_links(INDEX_HTML, BASE) == [
        "https://www.coorong.sa.gov.au/webdata/resources/files/DA Register March 2019.pdf",
        "https://files.example.org/feb.PDF",
        "https://www.coorong.sa.gov.au/jan.pdf",
    ]


def test_extract_pdf_links_empty_page():
    assert extract_pdf_links("<html><body></body></html>", BASE) == []


def test_index_url_for():
    assert index_url_for(2019) == BASE
    assert index_url_for(2010, "https://example.org/da/{year}") == "https://example.org/da/2010"


def test_fetch_pdf_links(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return FakeResponse(text=INDEX_HTML)

    monkeypatch.setattr(parser.requests, "get", fake_get)
    monkeypatch.setenv("MORPH_PROXY", "http://proxy:3128")

    links = fetch_pdf_links(2019)
    assert len(links) == 3
    url, kwargs = calls[0]
    assert url == BASE
    assert kwargs["proxies"] == {"http": "http://proxy:3128", "https": "http://proxy:3128"}
    assert "Mozilla" in kwargs["headers"]["User-Agent"]


def test_fetch_pdf_links_http_error(monkeypatch):
    monkeypatch.setattr(parser.requests, "get", lambda url, **kwargs: FakeResponse(status=500))
    with pytest.raises(requests.HTTPError):
        fetch_pdf_links(2019)


def test_download_document(monkeypatch):
    monkeypatch.delenv("MORPH_PROXY", raising=False)
    seen = {}

    def fake_get(url, **kwargs):
        seen.update(kwargs)
        return FakeResponse(content=b"%PDF-1.7")

    monkeypatch.setattr(parser.requests, "get", fake_get)
    assert parser.download_document("https://example.org/a.pdf") == b"%PDF-1.7"
    assert seen["proxies"] is None


def test_select_documents_keeps_order():
    # pick other[1], then keep the order
    assert select_documents(["a", "b"], ["x", "y"], ScriptedRandom(1, 1)) == ["a", "y"]


def test_select_documents_reversed():
    assert select_documents(["a", "b"], ["x", "y"], ScriptedRandom(0, 0)) == ["x", "a"]


def test_select_documents_same_pick_once():
    assert select_documents(["a"], ["a"], ScriptedRandom(0, 1)) == ["a"]


def test_select_documents_nothing_listed():
    assert select_documents([], [], random.Random(1)) == []
    assert select_documents([], ["x"], ScriptedRandom(0, 1)) == ["x"]


def test_random_year_range():
    rng = random.Random(7)
    today = date(2019, 6, 1)
    years = {random_year(rng, today) for _ in range(200)}
    assert min(years) >= FIRST_YEAR
    assert max(years) <= 2019
