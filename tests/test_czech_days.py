"""Tests for Czech day-name helpers."""

import datetime as dt

from lunch_scraper.czech_days import (
    WEEKDAYS,
    czech_day,
    czech_day_short,
    czech_day_url,
    format_czech_date,
    is_weekday,
    prague_today,
)

from conftest import MONDAY, TUESDAY


def test_czech_day_names() -> None:
    """Test weekday names for a known week."""
    assert czech_day(MONDAY) == "pondělí"
    assert czech_day(TUESDAY) == "úterý"
    assert czech_day(dt.date(2025, 1, 10)) == "pátek"
    assert czech_day(dt.date(2025, 1, 5)) == "neděle"


def test_czech_day_short_and_url_forms() -> None:
    """Test the abbreviated and diacritic-free forms."""
    assert czech_day_short(MONDAY) == "po"
    assert czech_day_url(MONDAY) == "pondeli"
    assert czech_day_url(dt.date(2025, 1, 9)) == "ctvrtek"


def test_weekdays_are_monday_to_friday() -> None:
    assert WEEKDAYS == ("pondělí", "úterý", "středa", "čtvrtek", "pátek")


def test_is_weekday() -> None:
    assert is_weekday(MONDAY)
    assert not is_weekday(dt.date(2025, 1, 11))


def test_format_czech_date() -> None:
    """Test the ``day d. m.`` format used on the menus."""
    assert format_czech_date(MONDAY) == "pondělí 6. 1."


def test_prague_today_is_a_date() -> None:
    today = prague_today()
    assert isinstance(today, dt.date)
    assert not isinstance(today, dt.datetime)
