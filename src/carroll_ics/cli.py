"""Command-line interface for the Carroll College calendar scraper."""

from __future__ import annotations

import argparse
import logging
import signal
import sys

import requests

from .carroll_ics import CarrollIcs
from .exceptions import ParseError
from .months import parse_month

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for a command-line run."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _month(value: str) -> str:
    try:
        parse_month(value)
    except ParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carroll-ics",
        description=(
            "Download the Carroll College events calendar and save it as "
            f"{CarrollIcs.OUTPUT_FILE}. Every event page is requested, so "
            "please do not run this often."
        ),
    )
    parser.add_argument("start", type=_month, help="first month, as YYYY-MM")
    parser.add_argument("end", type=_month, help="last month, as YYYY-MM")
    return parser


def install_interrupt_handler(scraper: CarrollIcs) -> None:
    """Save the events scraped so far if the process is interrupted.

    The incomplete calendar goes to :attr:`CarrollIcs.PARTIAL_FILE` and
    the process exits with status 1.
    """

    def _save_partial(signum, frame):
        path = scraper.write_partial()
        logger.warning(f"Program interrupted, saved incomplete calendar as {path}")
        sys.exit(1)

    signal.signal(signal.SIGINT, _save_partial)
    signal.signal(signal.SIGTERM, _save_partial)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    scraper = CarrollIcs(args.start, args.end)
    install_interrupt_handler(scraper)

    try:
        scraper.scrape_events()
    except requests.RequestException as e:
        logger.error(f"Failed to load listing page: {e}")
        return 1

    scraper.write_ics()
    return 0


if __name__ == "__main__":
    sys.exit(main())
