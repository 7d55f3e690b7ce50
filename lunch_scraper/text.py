"""Price parsing, text cleanup and line classification for menu text."""

import re

from lunch_scraper.models import MenuItem

_DIGITS_RE = re.compile(r"\d+")
_WHITESPACE_RE = re.compile(r"\s+")

# "189 Kč", "189Kč", "189 CZK", "189,-" (the dash is the no-currency suffix)
PRICE_RE = re.compile(r"(\d+)\s*(?:Kč|Kc\b|CZK|,-|,–)", re.IGNORECASE)

# "Polévka dne 59 Kč" → ("Polévka dne", "59 Kč")
SAME_LINE_PRICE_RE = re.compile(
    r"^(?P<name>.*?\D)\s+(?P<price>\d+\s*(?:Kč|Kc\b|CZK|,-|,–).*)$",
    re.IGNORECASE,
)

# Allergen codes: "1, 3, 7"
_ALLERGEN_RE = re.compile(r"^[\d,\s]+$")
_MAX_ALLERGEN_LENGTH = 20

_UPPER_RE = re.compile(r"^[A-ZÁČĎÉĚÍŇÓŘŠŤÚŮÝŽ\s:&/-]+$")
_MIN_HEADER_LETTERS = 3

# Lines that are never part of a dish name
_BOILERPLATE_MARKERS = (
    "www.",
    "http",
    "@",
    "alergeny",
    "allergens",
    "lunch menu",
    "daily menu",
    "served from",
    "served daily",
    "podáváme",
    "rezervace",
)


def parse_price(price_text: str | None) -> int:
    """Return the first run of digits in *price_text*, or 0 when none.

    ``"189 Kč"`` → 189, ``"Kč 189"`` → 189, ``"189,-"`` → 189.
    """
    if not price_text:
        return 0
    m = _DIGITS_RE.search(price_text)
    return int(m.group(0)) if m else 0


def clean_text(text: str | None) -> str:
    """Collapse whitespace runs (newlines included) and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_text(text: str | None) -> str:
    """Sentence-case *text*: ``"HELLO WORLD"`` → ``"Hello world"``."""
    cleaned = clean_text(text)
    if not cleaned:
        return cleaned
    first = cleaned[0].upper()
    # Characters whose uppercase form is longer (ß, ŉ) keep their own form
    if len(first) != 1:
        first = cleaned[0]
    return first + cleaned[1:].lower()


def create_menu_item(
    name: str, price_text: str, description: str | None = None
) -> MenuItem:
    """Build a :class:`MenuItem` with normalized text and a parsed price."""
    desc = normalize_text(description) if description else ""
    return MenuItem(
        name=normalize_text(name),
        price=parse_price(price_text),
        description=desc or None,
    )


# --- Line classification -------------------------------------------------------


def is_price_line(line: str) -> bool:
    return PRICE_RE.search(line) is not None


def is_allergen_line(line: str) -> bool:
    stripped = line.strip()
    return (
        bool(stripped)
        and len(stripped) < _MAX_ALLERGEN_LENGTH
        and _ALLERGEN_RE.match(stripped) is not None
    )


def is_section_header(line: str) -> bool:
    """All-uppercase lines like ``POLÉVKY`` or ``HLAVNÍ JÍDLA``."""
    stripped = line.strip()
    letters = sum(1 for ch in stripped if ch.isalpha())
    return letters >= _MIN_HEADER_LETTERS and _UPPER_RE.match(stripped) is not None


def is_boilerplate(line: str) -> bool:
    lower = line.lower()
    return any(marker in lower for marker in _BOILERPLATE_MARKERS)


def split_same_line_price(line: str) -> tuple[str, str] | None:
    """Split ``"Soup 50 Kč"`` into ``("Soup", "50 Kč")``.

    Returns ``None`` when the line holds only a price.
    """
    m = SAME_LINE_PRICE_RE.match(line.strip())
    if not m:
        return None
    name = m.group("name").strip(" .-–—:")
    if not name or not any(ch.isalpha() for ch in name):
        return None
    return name, m.group("price").strip()


_ALLERGEN_SUFFIX_RE = re.compile(r"\s*\(\s*[\d,\s]+\)\s*$")
# Czech name followed by an English translation after a wide gap
_TRANSLATION_RE = re.compile(r"^(.+?)\s{2,}[A-Z]")


def clean_dish_name(name: str) -> str:
    """Drop trailing allergen codes ``(1,3,7)`` and an appended translation."""
    name = _ALLERGEN_SUFFIX_RE.sub("", name)
    m = _TRANSLATION_RE.match(name)
    if m:
        name = m.group(1)
    return name.strip()
