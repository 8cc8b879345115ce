"""Tests for the command-line interface."""

import signal
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import requests
from icalendar import Calendar

from carroll_ics import CarrollIcs, assemble_event
from carroll_ics.cli import install_interrupt_handler, main

from conftest import fake_fetch_html


@pytest.fixture(autouse=True)
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def no_signal_handlers():
    with patch("carroll_ics.cli.install_interrupt_handler"):
        yield


@pytest.mark.parametrize("argv", [[], ["2024-03"], ["2024-03", "2024-04", "2024-05"]])
def test_wrong_argument_count(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code != 0
    assert "usage:" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [["2024-13", "2024-05"], ["2024-03", "abc"]])
def test_malformed_month(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_writes_calendar(in_tmp):
    with patch.object(CarrollIcs, "_fetch_html", side_effect=fake_fetch_html):
        assert main(["2024-03", "2024-04"]) == 0

    cal = Calendar.from_ical((in_tmp / "carroll.ics").read_text(encoding="utf-8"))
    assert [str(e["summary"]) for e in cal.walk("VEVENT")] == ["Art Exhibit", "Spring Concert"]
    assert not (in_tmp / "carroll.ics.part").exists()


def test_empty_range_writes_empty_calendar(in_tmp):
    with patch.object(CarrollIcs, "_fetch_html") as fetch:
        assert main(["2024-05", "2024-03"]) == 0
    fetch.assert_not_called()
    cal = Calendar.from_ical((in_tmp / "carroll.ics").read_text(encoding="utf-8"))
    assert cal.walk("VEVENT") == []


def test_listing_failure_writes_nothing(in_tmp):
    with patch.object(CarrollIcs, "_fetch_html", side_effect=requests.ConnectionError("down")):
        assert main(["2024-03", "2024-04"]) == 1
    assert not (in_tmp / "carroll.ics").exists()
    assert not (in_tmp / "carroll.ics.part").exists()


def test_interrupt_saves_partial(in_tmp):
    scraper = CarrollIcs("2024-03", "2024-03")
    start = datetime(2024, 3, 30, 18, 0, tzinfo=timezone.utc)
    scraper._events.append(
        assemble_event("Spring Concert", start, start, "", "", "https://www.carroll.edu/x")
    )
    with patch("carroll_ics.cli.signal.signal") as set_handler:
        install_interrupt_handler(scraper)

    signals = [c.args[0] for c in set_handler.call_args_list]
    assert signals == [signal.SIGINT, signal.SIGTERM]

    handler = set_handler.call_args_list[0].args[1]
    with pytest.raises(SystemExit) as exc:
        handler(signal.SIGINT, None)

    assert exc.value.code == 1
    cal = Calendar.from_ical((in_tmp / "carroll.ics.part").read_text(encoding="utf-8"))
    assert len(cal.walk("VEVENT")) == 1
    assert not (in_tmp / "carroll.ics").exists()
