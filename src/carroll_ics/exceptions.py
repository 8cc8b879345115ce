"""Exceptions raised while building the Carroll College calendar."""


class CarrollIcsError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(CarrollIcsError, ValueError):
    """A month token is not a valid ``YYYY-MM`` year-month."""


class EventFieldError(CarrollIcsError):
    """A required field could not be read from an event page."""


class MissingStartTime(EventFieldError):
    pass


class MissingEndTime(EventFieldError):
    pass


class MalformedTimestamp(EventFieldError, ValueError):
    """A ``datetime`` attribute is not an integer number of epoch seconds."""
