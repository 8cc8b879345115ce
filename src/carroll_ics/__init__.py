"""Screen scrapes the Carroll College events site to create an ICS file.

This package exposes these public symbols:

* :class:`CarrollIcs` — the main scraper/ICS generator.
* :class:`CalendarEvent` — data class for individual events.
* :func:`month_range` — the ``YYYYMM`` tokens of a month range.
"""

from .carroll_ics import CalendarEvent, CarrollIcs, assemble_event
from .exceptions import (
    CarrollIcsError,
    EventFieldError,
    MalformedTimestamp,
    MissingEndTime,
    MissingStartTime,
    ParseError,
)
from .months import month_range

__all__ = [
    "CalendarEvent",
    "CarrollIcs",
    "CarrollIcsError",
    "EventFieldError",
    "MalformedTimestamp",
    "MissingEndTime",
    "MissingStartTime",
    "ParseError",
    "assemble_event",
    "month_range",
]
