"""Meat Beer: a soup section and a main-course section ahead of the grill menu."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lunch_scraper.extractors.base import Extractor, body_text
from lunch_scraper.models import Extraction, MenuItem
from lunch_scraper.sections import reconstruct_name, split_lines
from lunch_scraper.text import normalize_text

if TYPE_CHECKING:
    from playwright.async_api import Page

SOUP_HEADER = "POLÉVKY"
MAIN_HEADER = "HLAVNÍ JÍDLA"
# The permanent grill menu starts here; the lunch menu is everything above
GRILL_MARKER = "Z MEAT BEER GRILU NA DŘEVĚNÉM UHLÍ"

MAX_PRICE = 500
SOUP_DESCRIPTION = "Polévka"

_PRICE_RE = re.compile(r"(\d+)\s*Kč")
_LABEL_RE = re.compile(
    r"^(BEZMASOVKA|RYCHLOVKA|TUTOVKA|STREETOVKA|MEATOVKA|SRDCOVKA):\s*", re.IGNORECASE
)
_RENDER_WAIT_MS = 3_000


def parse_meatbeer(text: str) -> list[MenuItem]:
    items: list[MenuItem] = []
    lines = split_lines(text)
    section: str | None = None

    for idx, line in enumerate(lines):
        if GRILL_MARKER in line:
            break
        if SOUP_HEADER in line:
            section = SOUP_HEADER
            continue
        if MAIN_HEADER in line:
            section = MAIN_HEADER
            continue
        if section is None:
            continue

        m = _PRICE_RE.search(line)
        if not m:
            continue
        price = int(m.group(1))

        # Dish names wrap over several lines above the price
        name = reconstruct_name(lines, idx, max_lines=None) or ""
        name = _LABEL_RE.sub("", name).strip()
        if name and 0 < price < MAX_PRICE:
            items.append(
                MenuItem(
                    name=normalize_text(name),
                    price=price,
                    description=SOUP_DESCRIPTION if section == SOUP_HEADER else None,
                )
            )
    return items


class MeatbeerExtractor(Extractor):
    def target_url(self) -> str:
        return self.restaurant.menu_url or "https://www.meatbeer.cz/menu/"

    async def extract_items(self, page: Page) -> Extraction:
        await page.wait_for_timeout(_RENDER_WAIT_MS)
        return Extraction.found(parse_meatbeer(await body_text(page)))
