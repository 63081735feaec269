"""html_parser/parser.py — discovering development application notices on the council site."""

from __future__ import annotations

import logging
import os
import random
import time
from datetime import date
from urllib.parse import quote, urljoin

import requests
from bs4 import BeautifulSoup

log = logging.getLogger(__name__)

INDEX_URL = "https://www.coorong.sa.gov.au/page.aspx?u=2084&year={year}"

# Listing layouts the council site has used over the years.
_LINK_SELECTORS = (
    "td.uContentListDesc a",
    "td.u6ListTD div.u6ListItem a",
    "div.unityHtmlArticle p a",
)

_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
}

FIRST_YEAR = 2008


def _proxies() -> dict[str, str] | None:
    proxy = os.getenv("MORPH_PROXY")
    return {"http": proxy, "https": proxy} if proxy else None


def _get(url: str, delay: float) -> requests.Response:
    resp = requests.get(url, timeout=30, headers=_HEADERS, proxies=_proxies())
    resp.raise_for_status()
    if delay > 0:
        # Be polite to the council's server between requests.
        time.sleep(delay + random.uniform(0, delay * 2))
    return resp


def extract_pdf_links(html: str, base_url: str) -> list[str]:
    """Absolute, de-duplicated PDF links in document order."""
    soup = BeautifulSoup(html, "html.parser")
    urls: list[str] = []
    for selector in _LINK_SELECTORS:
        for anchor in soup.select(selector):
            href = anchor.get("href")
            if not href:
                continue
            url = urljoin(base_url, href.strip())
            if ".pdf" in url.lower() and url not in urls:
                urls.append(url)
    return urls


def index_url_for(year: int, template: str = INDEX_URL) -> str:
    return template.format(year=quote(str(year)))


def fetch_pdf_links(year: int, template: str = INDEX_URL, delay: float = 0.0) -> list[str]:
    """PDF links listed on the council's index page for `year`."""
    url = index_url_for(year, template)
    log.info("Retrieving page: %s", url)
    resp = _get(url, delay)
    resp.encoding = resp.apparent_encoding or "utf-8"
    return extract_pdf_links(resp.text, url)


def download_document(url: str, delay: float = 0.0) -> bytes:
    log.info("Downloading document: %s", url)
    return _get(url, delay).content


def select_documents(
    current: list[str],
    other: list[str],
    rng: random.Random | None = None,
) -> list[str]:
    """
    The most recent notice of the current year plus one notice picked at random
    from another year, in random order.
    """
    rng = rng or random.Random()
    selected: list[str] = []
    if current:
        selected.append(current[0])
    if other:
        pick = other[rng.randrange(len(other))]
        if pick not in selected:
            selected.append(pick)
    if rng.randrange(2) == 0:
        selected.reverse()
    return selected


def random_year(rng: random.Random | None = None, today: date | None = None) -> int:
    rng = rng or random.Random()
    return rng.randint(FIRST_YEAR, (today or date.today()).year)
