"""HTML extraction rules for the Carroll College events pages.

The listing page for a month holds a calendar ``<table>`` whose anchors
link to the event detail pages. A detail page looks like this::

    <h1 class="hero__title">SPRING CONCERT</h1>
    <div class="event__date">
      <time datetime="1711756800">March 30, 6:00 pm</time>
      <time datetime="1711764000">8:00 pm</time>
    </div>
    <div class="event__location">Main Campus Building A</div>
    <div class="text-content"><p>Description…</p><p>Unrelated…</p></div>

Each field rule works on its own, so a page broken in one area still
yields the other fields.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from bs4 import BeautifulSoup, Tag

from .exceptions import MalformedTimestamp, MissingEndTime, MissingStartTime

BASE_URL = "https://www.carroll.edu"
"""Origin prefixed to the relative event links."""

EVENTS_PATH = "/news-events/events"
"""Path segment that marks a link as pointing to an event page."""

_WORD_RE = re.compile(r"[^\W_]+(?:['’][^\W_]+)*")
_EPOCH_RE = re.compile(r"[+-]?\d+")
_CAMPUS_RE = re.compile(r"Campus[ \t]*")


def extract_event_links(soup: BeautifulSoup) -> list[str]:
    """Return the unique event page URLs linked from a month's table.

    Multi-day events are linked once per day, so repeated links are only
    kept at their first occurrence.

    :param soup: The parsed listing page.
    :returns: Absolute event URLs in document order, possibly empty.
    """
    links: list[str] = []
    seen: set[str] = set()

    for a in soup.select("table a"):
        href = a.get("href")
        if href is None:
            continue
        if EVENTS_PATH not in href:
            continue

        url = BASE_URL + href
        if url in seen:
            continue
        seen.add(url)
        links.append(url)

    return links


def _title_case(text: str) -> str:
    """Capitalize the first letter of every word and lower-case the rest."""
    return _WORD_RE.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)


def _text(soup: BeautifulSoup, selector: str) -> str:
    el = soup.select_one(selector)
    if el is None:
        return ""
    return el.get_text()


def parse_title(soup: BeautifulSoup) -> str:
    """Return the event title, converted from all caps to title case.

    :param soup: The parsed event page.
    :returns: The title, or ``""`` if the page has none.
    """
    return _title_case(_text(soup, ".hero__title")).strip()


def _time_elements(soup: BeautifulSoup) -> list[Tag]:
    return soup.select(".event__date time")


def _epoch_to_local(value: str) -> datetime:
    """Convert an epoch seconds string to an aware local datetime.

    :raises MalformedTimestamp: If *value* is not an integer.
    """
    if not _EPOCH_RE.fullmatch(value):
        raise MalformedTimestamp(f"Invalid timestamp {value!r}")
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc).astimezone()
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedTimestamp(f"Timestamp out of range {value!r}") from e


def parse_start_time(soup: BeautifulSoup) -> datetime:
    """Return the event start from the first ``<time>`` in the date area.

    :param soup: The parsed event page.
    :returns: The start time in the local timezone.
    :raises MissingStartTime: If there is no ``<time>`` element or it
        carries no ``datetime`` attribute.
    :raises MalformedTimestamp: If the attribute is not an integer.
    """
    times = _time_elements(soup)
    value = times[0].get("datetime") if times else None
    if value is None:
        raise MissingStartTime("No start time found")
    return _epoch_to_local(value)


def parse_end_time(soup: BeautifulSoup) -> datetime:
    """Return the event end from the last ``<time>`` in the date area.

    Single-instant events have one ``<time>`` element, in which case the
    end equals the start.

    :param soup: The parsed event page.
    :returns: The end time in the local timezone.
    :raises MissingEndTime: If there is no ``<time>`` element or the last
        one carries no ``datetime`` attribute.
    :raises MalformedTimestamp: If the attribute is not an integer.
    """
    times = _time_elements(soup)
    value = times[-1].get("datetime") if times else None
    if value is None:
        raise MissingEndTime("No end time found")
    return _epoch_to_local(value)


def parse_location(soup: BeautifulSoup) -> str:
    """Return the event location with the campus name on its own line.

    ``"Main Campus Building A"`` becomes ``"Main Campus\\nBuilding A"``.

    :param soup: The parsed event page.
    :returns: The location, or ``""`` if the page has none.
    """
    return _CAMPUS_RE.sub("Campus\n", _text(soup, ".event__location")).strip()


def parse_description(soup: BeautifulSoup) -> str:
    """Return the text of the first element inside ``.text-content``.

    Only the first child is used, the rest of the container holds
    unrelated content.

    :param soup: The parsed event page.
    :returns: The description, or ``""`` if there is none.
    """
    container = soup.select_one(".text-content")
    if container is None:
        return ""
    first = container.find(recursive=False)
    if first is None:
        return ""
    return first.get_text().strip()
