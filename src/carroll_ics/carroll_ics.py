"""CarrollIcs class module.

Provides the :class:`CarrollIcs` scraper and the :class:`CalendarEvent`
data class used to represent individual calendar entries.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import requests
from bs4 import BeautifulSoup
from icalendar import Calendar, Event

from . import parsers
from .exceptions import EventFieldError
from .months import month_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarEvent:
    """A single scraped calendar event.

    :param uid: Globally unique identifier of the event.
    :param title: The display title of the event.
    :param start: Start of the event.
    :param end: End of the event.
    :param location: Where the event takes place, may span lines.
    :param description: Short description, may be empty.
    :param url: The full URL to the event detail page.
    :param created: Time the record was assembled.
    :param last_modified: Time the record was assembled.
    :param dtstamp: Time the record was assembled.
    """

    uid: str
    title: str
    start: datetime
    end: datetime
    location: str
    description: str
    url: str
    created: datetime
    last_modified: datetime
    dtstamp: datetime


def assemble_event(
    title: str,
    start: datetime,
    end: datetime,
    location: str,
    description: str,
    url: str,
) -> CalendarEvent:
    """Build a :class:`CalendarEvent` with a fresh UID and timestamps.

    The created, last-modified and stamp times are all set to now.
    """
    now = datetime.now(timezone.utc)
    return CalendarEvent(
        uid=str(uuid.uuid4()),
        title=title,
        start=start,
        end=end,
        location=location,
        description=description,
        url=url,
        created=now,
        last_modified=now,
        dtstamp=now,
    )


class CarrollIcs:
    """Screen scrapes the Carroll College events site and produces ICS output.

    Each month has a listing page at
    ``https://www.carroll.edu/news-events/events/YYYYMM`` whose calendar
    table links to one detail page per event. Every detail page is
    loaded and parsed, and events lacking a start or end time are
    skipped.

    :param start: First month to scrape, as ``YYYY-MM``.
    :param end: Last month to scrape, as ``YYYY-MM``.
    :raises ParseError: If either month is malformed.

    Example usage::

        scraper = CarrollIcs("2024-03", "2024-05")
        scraper.scrape_events()
        scraper.write_ics()
    """

    BASE_URL = parsers.BASE_URL
    """Origin of the events site."""

    EVENTS_PATH = parsers.EVENTS_PATH
    """Path of the monthly listing pages."""

    OUTPUT_FILE = "carroll.ics"
    """Default destination of a complete calendar."""

    PARTIAL_FILE = "carroll.ics.part"
    """Default destination of a calendar saved after an interruption."""

    TIMEOUT = 30
    """Seconds to wait for each HTTP request."""

    def __init__(self, start: str, end: str) -> None:
        self.months = month_range(start, end)
        self._events: list[CalendarEvent] = []

    def listing_url(self, month: str) -> str:
        """Return the listing page URL for a ``YYYYMM`` month token."""
        return f"{self.BASE_URL}{self.EVENTS_PATH}/{month}"

    # noinspection PyMethodMayBeStatic
    def _fetch_html(self, url: str) -> str:
        """Fetch and return the HTML content of a URL.

        :param url: The URL to fetch.
        :returns: The response body as a string.
        :raises requests.RequestException: On network errors or if the
            server returns an error status.
        """
        resp = requests.get(url, timeout=self.TIMEOUT)
        resp.raise_for_status()
        return resp.text

    def _load_page(self, url: str) -> BeautifulSoup:
        return BeautifulSoup(self._fetch_html(url), "html.parser")

    def snapshot(self) -> list[CalendarEvent]:
        """Return a copy of the events assembled so far, in scrape order."""
        return list(self._events)

    def scrape_event(self, link: str) -> CalendarEvent | None:
        """Load one event page and assemble its :class:`CalendarEvent`.

        Pages that cannot be loaded, or that lack a usable start or end
        time, are logged and skipped.

        :param link: Absolute URL of the event detail page.
        :returns: The assembled event, or ``None`` if it was skipped.
        """
        logger.info(f"Loading {link}")
        try:
            soup = self._load_page(link)
        except requests.RequestException as e:
            logger.warning(f"Error loading {link}: {e}")
            return None

        title = parsers.parse_title(soup)
        name = title or link

        try:
            start = parsers.parse_start_time(soup)
        except EventFieldError as e:
            logger.warning(f"Failed to find a start time for {name}: {e}")
            return None

        try:
            end = parsers.parse_end_time(soup)
        except EventFieldError as e:
            logger.warning(f"Failed to find an end time for {name}: {e}")
            return None

        return assemble_event(
            title=title,
            start=start,
            end=end,
            location=parsers.parse_location(soup),
            description=parsers.parse_description(soup),
            url=link,
        )

    def scrape_events(self) -> list[CalendarEvent]:
        """Scrape every month in range and collect the events.

        Listing pages are loaded in month order and their events in link
        order. Assembled events are kept on the instance so an
        interrupted run can still save them with :meth:`write_partial`.

        :returns: All events assembled so far.
        :raises requests.RequestException: If a listing page cannot be
            loaded. This ends the run.
        """
        for month in self.months:
            soup = self._load_page(self.listing_url(month))
            links = parsers.extract_event_links(soup)
            logger.debug(f"Found {len(links)} event link(s) for {month}")

            for link in links:
                event = self.scrape_event(link)
                if event is not None:
                    self._events.append(event)

        return self.snapshot()

    def _build_calendar(self, events: list[CalendarEvent]) -> Calendar:
        """Build an :class:`icalendar.Calendar` object from *events*.

        Every timestamp is written in UTC.

        :param events: The events to include, possibly none.
        :returns: A fully populated :class:`icalendar.Calendar`.
        """
        cal = Calendar()
        cal.add("prodid", "-//Carroll College//Events//EN")
        cal.add("version", "2.0")
        cal.add("method", "REQUEST")

        for ev in events:
            event = Event()
            event.add("uid", ev.uid)
            event.add("created", ev.created.astimezone(timezone.utc))
            event.add("last-modified", ev.last_modified.astimezone(timezone.utc))
            event.add("dtstamp", ev.dtstamp.astimezone(timezone.utc))
            event.add("dtstart", ev.start.astimezone(timezone.utc))
            event.add("dtend", ev.end.astimezone(timezone.utc))
            event.add("summary", ev.title)
            event.add("location", ev.location)
            event.add("description", ev.description)
            event.add("url", ev.url)
            cal.add_component(event)

        return cal

    def get_ics(self, events: list[CalendarEvent] | None = None) -> str:
        """Return the calendar as an ICS string.

        :param events: Events to render, defaults to all scraped events.
        :returns: The full calendar in iCalendar (RFC 5545) format.
        """
        if events is None:
            events = self.snapshot()
        return self._build_calendar(events).to_ical().decode("utf-8")

    def write_ics(self, path: str | Path | None = None) -> Path:
        """Write the scraped events to an ICS file.

        :param path: Destination file path, defaults to :attr:`OUTPUT_FILE`.
        :returns: The path written to.
        """
        path = Path(path or self.OUTPUT_FILE)
        path.write_text(self.get_ics(), encoding="utf-8")
        return path

    def write_partial(self, path: str | Path | None = None) -> Path:
        """Write the events scraped so far to the partial ICS file.

        Used when a run is interrupted. The partial file never shares a
        name with :attr:`OUTPUT_FILE`, so a complete calendar from an
        earlier run is left alone.

        :param path: Destination file path, defaults to :attr:`PARTIAL_FILE`.
        :returns: The path written to.
        """
        path = Path(path or self.PARTIAL_FILE)
        path.write_text(self.get_ics(self.snapshot()), encoding="utf-8")
        return path
