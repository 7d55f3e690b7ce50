"""Bistro Nekázanka: menu embedded from prazskejrej.cz.

The soup is a name line followed by a price line; main dishes are numbered,
with number, name and price on three consecutive lines.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lunch_scraper.extractors.base import Extractor, body_text
from lunch_scraper.models import Extraction, MenuItem
from lunch_scraper.sections import split_lines
from lunch_scraper.text import normalize_text

if TYPE_CHECKING:
    from playwright.async_api import Page

SOUP_DESCRIPTION = "Polévka"

_PRICE_RE = re.compile(r"(\d+)\s*Kč")
_DISH_NUMBER_RE = re.compile(r"^\d+$")
_RENDER_WAIT_MS = 3_000


def parse_nekazanka(text: str) -> list[MenuItem]:
    items: list[MenuItem] = []
    lines = split_lines(text)
    in_soup = False
    in_main = False

    i = 0
    while i < len(lines):
        line = lines[i]
        lower = line.lower()

        if lower == "polévka":
            in_soup, in_main = True, False
            i += 1
            continue
        if "hlavní" in lower:
            in_soup, in_main = False, True
            i += 1
            continue

        if in_soup and i + 1 < len(lines):
            m = _PRICE_RE.search(lines[i + 1])
            if m:
                items.append(
                    MenuItem(
                        name=normalize_text(line),
                        price=int(m.group(1)),
                        description=SOUP_DESCRIPTION,
                    )
                )
                in_soup = False
                i += 2
                continue

        if in_main and _DISH_NUMBER_RE.match(line) and i + 2 < len(lines):
            m = _PRICE_RE.search(lines[i + 2])
            if m:
                items.append(
                    MenuItem(name=normalize_text(lines[i + 1]), price=int(m.group(1)))
                )
                i += 3
                continue

        i += 1
    return items


class NekazankaExtractor(Extractor):
    def target_url(self) -> str:
        return (
            self.restaurant.menu_url
            or "https://www.prazskejrej.cz/menu-na-web/bistro-nekazanka-11"
        )

    async def extract_items(self, page: Page) -> Extraction:
        await page.wait_for_timeout(_RENDER_WAIT_MS)
        return Extraction.found(parse_nekazanka(await body_text(page)))
