"""Month range generation for the listing page URLs."""

from __future__ import annotations

import re

from .exceptions import ParseError

_MONTH_RE = re.compile(r"(\d{4})-(\d{2})")


def parse_month(token: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` token into ``(year, month)``.

    :param token: The year-month string, e.g. ``"2024-03"``.
    :returns: A ``(year, month)`` tuple.
    :raises ParseError: If the token is not a valid year-month.
    """
    m = _MONTH_RE.fullmatch(token)
    if not m:
        raise ParseError(f"Invalid month {token!r}, expected YYYY-MM")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ParseError(f"Invalid month {token!r}, expected YYYY-MM")
    return year, month


def month_range(start: str, end: str) -> list[str]:
    """Return the compact ``YYYYMM`` tokens from *start* to *end* inclusive.

    An *end* that precedes *start* gives an empty list.

    :param start: First month as ``YYYY-MM``.
    :param end: Last month as ``YYYY-MM``.
    :returns: Month tokens in calendar order, e.g. ``["202403", "202404"]``.
    :raises ParseError: If either month cannot be parsed.
    """
    year, month = parse_month(start)
    end_year, end_month = parse_month(end)

    tokens: list[str] = []
    while (year, month) <= (end_year, end_month):
        tokens.append(f"{year:04d}{month:02d}")
        # Step one month, rolling the year over after December
        year += month // 12
        month = month % 12 + 1
    return tokens
