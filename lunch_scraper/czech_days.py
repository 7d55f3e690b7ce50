"""Czech weekday names and the calendar date menus are scraped for."""

import datetime as dt
from zoneinfo import ZoneInfo

# Indexed Sunday-first, matching ``(date.weekday() + 1) % 7``
CZECH_DAYS: tuple[str, ...] = (
    "neděle",
    "pondělí",
    "úterý",
    "středa",
    "čtvrtek",
    "pátek",
    "sobota",
)

CZECH_DAYS_SHORT: tuple[str, ...] = ("ne", "po", "út", "st", "čt", "pá", "so")

# URL-safe forms (no diacritics), e.g. ``…/section:poledni-menu/pondeli``
CZECH_DAYS_URL: tuple[str, ...] = (
    "nedele",
    "pondeli",
    "utery",
    "streda",
    "ctvrtek",
    "patek",
    "sobota",
)

# Monday → Friday, the days lunch menus are published for
WEEKDAYS: tuple[str, ...] = CZECH_DAYS[1:6]

PRAGUE_TZ_NAME = "Europe/Prague"


def _index(date: dt.date) -> int:
    return (date.weekday() + 1) % 7


def czech_day(date: dt.date) -> str:
    """``date`` → lowercase Czech day name, e.g. ``'pondělí'``."""
    return CZECH_DAYS[_index(date)]


def czech_day_short(date: dt.date) -> str:
    return CZECH_DAYS_SHORT[_index(date)]


def czech_day_url(date: dt.date) -> str:
    """``date`` → diacritic-free day name, e.g. ``'pondeli'``."""
    return CZECH_DAYS_URL[_index(date)]


def is_weekday(date: dt.date) -> bool:
    return date.weekday() < 5


def format_czech_date(date: dt.date) -> str:
    """Format like the menus themselves do: ``'pondělí 1. 1.'``."""
    return f"{czech_day(date)} {date.day}. {date.month}."


def prague_today(tz: str | None = None) -> dt.date:
    """The current calendar date in Prague (or in *tz* when given)."""
    return dt.datetime.now(ZoneInfo(tz or PRAGUE_TZ_NAME)).date()
