"""Shared fixtures serving the saved Carroll College pages."""

from pathlib import Path

import requests
from bs4 import BeautifulSoup

FIXTURES = Path(__file__).parent / "fixtures"
BASE = "https://www.carroll.edu/news-events/events"


def read_fixture(name):
    return (FIXTURES / name).read_text(encoding="utf-8")


def load_soup(name):
    return BeautifulSoup(read_fixture(name), "html.parser")


PAGES = {
    f"{BASE}/202403": "listing_202403.html",
    f"{BASE}/202404": "listing_empty.html",
    f"{BASE}/art-exhibit": "event_art_exhibit.html",
    f"{BASE}/spring-concert": "event_spring_concert.html",
    f"{BASE}/missing-time": "event_missing_time.html",
}


def fake_fetch_html(url):
    """Serve fixture HTML for known URLs, fail like requests otherwise."""
    if url not in PAGES:
        raise requests.HTTPError(f"404 Client Error: Not Found for url: {url}")
    return read_fixture(PAGES[url])
