"""Parsing of day-sectioned menu text.

Many lunch pages render the whole week as one block of flowing text::

    Pondělí 6. 1.
    POLÉVKA
    Hovězí vývar s nudlemi
    1, 3, 9
    45 Kč
    Úterý 7. 1.
    …

Today's block is located by scanning for day-name tokens, then every line
is classified by a fixed cascade:

1. a price line ends the current item and supplies its price;
2. a short line of digits and commas (allergen codes) is skipped;
3. an all-uppercase line is a sub-section header, never an item;
4. any other line longer than a few characters is name text (first
   segment) or description (second, distinct segment).

When the text right before a price is too short to be a full dish name,
the name is rebuilt by walking backwards over the preceding lines.
"""

import logging
import re

from lunch_scraper.czech_days import CZECH_DAYS, WEEKDAYS
from lunch_scraper.models import RawItem
from lunch_scraper.text import (
    PRICE_RE,
    clean_dish_name,
    clean_text,
    is_allergen_line,
    is_boilerplate,
    is_price_line,
    is_section_header,
    split_same_line_price,
)

logger = logging.getLogger(__name__)

DATE_PATTERN = r"\d{1,2}\.\s*\d{1,2}\.(?:\s*\d{4})?"

# Footer text that closes the last day of the week
TRAILING_MARKERS: tuple[str, ...] = ("zpět nahoru", "back to top")

MIN_LINE_LENGTH = 5  # shorter lines never start a name on their own
MIN_DISH_NAME_LENGTH = 15  # shorter text before a price triggers the walk-back
MAX_NAME_LINES = 4

_NOT_LETTER_BEFORE = r"(?<![^\W\d_])"
_NOT_LETTER_AFTER = r"(?![^\W\d_])"

_DAY_HEADING_RE = re.compile(
    rf"^(?:{'|'.join(CZECH_DAYS)}){_NOT_LETTER_AFTER}[\s,:]*(?:{DATE_PATTERN})?\s*$",
    re.IGNORECASE,
)


def day_pattern(day: str, *, require_date: bool = False) -> re.Pattern[str]:
    """Regex for a day-name token, optionally followed by a ``d. m.`` date."""
    date_part = rf"[\s,:]*{DATE_PATTERN}"
    if not require_date:
        date_part = f"(?:{date_part})?"
    return re.compile(
        rf"{_NOT_LETTER_BEFORE}{re.escape(day)}{_NOT_LETTER_AFTER}{date_part}",
        re.IGNORECASE,
    )


def is_day_heading(line: str) -> bool:
    return _DAY_HEADING_RE.match(line.strip()) is not None


def find_day_section(
    text: str,
    today_name: str,
    *,
    require_date: bool = False,
    trailing_markers: tuple[str, ...] = TRAILING_MARKERS,
) -> str | None:
    """Return the slice of *text* holding *today_name*'s menu.

    The section starts at the first match of today's day token and ends at
    the earliest later weekday token or trailing marker, else at the end
    of the text. Returns ``None`` when today's token is not found.
    """
    start_match = day_pattern(today_name, require_date=require_date).search(text)
    if start_match is None:
        logger.debug("No section heading for %s", today_name)
        return None

    after = start_match.end()
    end = len(text)
    for day in WEEKDAYS:
        if day == today_name.lower():
            continue
        m = day_pattern(day, require_date=require_date).search(text, after)
        if m is not None and m.start() < end:
            end = m.start()

    lower = text.lower()
    for marker in trailing_markers:
        idx = lower.find(marker.lower(), after)
        if idx != -1 and idx < end:
            end = idx

    return text[start_match.start() : end]


def split_lines(text: str) -> list[str]:
    """Split on newlines, strip, drop blanks."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def reconstruct_name(
    lines: list[str],
    end: int,
    *,
    max_lines: int | None = MAX_NAME_LINES,
) -> str | None:
    """Join the lines before ``lines[end]`` into one dish name.

    Walks backwards, skipping allergen codes, and stops at the first price,
    section header, day heading or boilerplate line.
    """
    parts: list[str] = []
    for line in reversed(lines[:end]):
        if is_allergen_line(line):
            continue
        if (
            is_price_line(line)
            or is_section_header(line)
            or is_day_heading(line)
            or is_boilerplate(line)
        ):
            break
        parts.append(line)
        if max_lines is not None and len(parts) >= max_lines:
            break
    if not parts:
        return None
    return " ".join(reversed(parts))


def _previous_content_line(lines: list[str], idx: int) -> str | None:
    for line in reversed(lines[:idx]):
        if not is_allergen_line(line):
            return line
    return None


def parse_section_lines(lines: list[str]) -> list[RawItem]:
    """Turn one day's lines into raw (name, description, price) triples."""
    items: list[RawItem] = []
    seen: set[tuple[str, str]] = set()
    name: str | None = None
    description: str | None = None

    for idx, line in enumerate(lines):
        if is_day_heading(line):
            name = description = None
            continue

        if is_price_line(line):
            same_line = split_same_line_price(line)
            if same_line is not None:
                item_name, price_text = same_line
                item_desc = None
            else:
                price_text = PRICE_RE.search(line).group(0)
                item_name, item_desc = name, description
                previous = _previous_content_line(lines, idx)
                if item_name is None or (
                    previous is not None and len(previous) < MIN_DISH_NAME_LENGTH
                ):
                    rebuilt = reconstruct_name(lines, idx)
                    if rebuilt:
                        item_name, item_desc = rebuilt, None

            name = description = None
            if not item_name:
                continue
            item_name = clean_dish_name(clean_text(item_name))
            raw = RawItem(item_name, clean_text(price_text), item_desc)
            if item_name and raw.key() not in seen:
                seen.add(raw.key())
                items.append(raw)
            continue

        if is_allergen_line(line):
            continue

        if is_section_header(line):
            name = description = None
            continue

        if len(line) > MIN_LINE_LENGTH:
            if name is None:
                name = line
            elif description is None and line != name:
                description = line

    return items


def extract_day_items(
    text: str,
    today_name: str,
    *,
    require_date: bool = False,
    trailing_markers: tuple[str, ...] = TRAILING_MARKERS,
) -> list[RawItem]:
    """Find today's section in *text* and parse it into raw items."""
    section = find_day_section(
        text,
        today_name,
        require_date=require_date,
        trailing_markers=trailing_markers,
    )
    if section is None:
        return []
    return parse_section_lines(split_lines(section))
