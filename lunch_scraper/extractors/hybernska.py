"""Restaurace Hybernská: dish names are ``<h3>`` headings, prices follow in text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from lunch_scraper.extractors.base import Extractor, body_text, build_items, page_soup
from lunch_scraper.models import Extraction, RawItem
from lunch_scraper.text import PRICE_RE, is_allergen_line

if TYPE_CHECKING:
    from playwright.async_api import Page

# How much text after a heading may belong to that dish
_LOOKAHEAD_CHARS = 400
_MIN_NAME_LENGTH = 3
_MIN_DESCRIPTION_LENGTH = 10


def parse_heading_items(headings: list[str], text: str) -> list[RawItem]:
    """Pair each heading with the description and price that follow it.

    Headings without a price within the look-ahead window are not dishes.
    """
    items: list[RawItem] = []
    for heading in headings:
        name = heading.strip()
        if len(name) < _MIN_NAME_LENGTH:
            continue
        idx = text.find(name)
        if idx == -1:
            continue

        description = ""
        price_text = ""
        window = text[idx : idx + _LOOKAHEAD_CHARS].split("\n")
        for raw_line in window[1:]:
            line = raw_line.strip()
            if not line:
                continue
            price_match = PRICE_RE.search(line)
            if price_match:
                price_text = price_match.group(0)
                break
            if is_allergen_line(line):
                continue
            if not description and len(line) > _MIN_DESCRIPTION_LENGTH:
                description = line

        if price_text:
            items.append(RawItem(name, price_text, description or None))
    return items


def headings_from_soup(soup: BeautifulSoup) -> list[str]:
    return [h3.get_text(" ", strip=True) for h3 in soup.find_all("h3")]


class HybernskaExtractor(Extractor):
    def target_url(self) -> str:
        return self.restaurant.url

    async def extract_items(self, page: Page) -> Extraction:
        soup = await page_soup(page)
        text = await body_text(page)
        raw = parse_heading_items(headings_from_soup(soup), text)
        return Extraction.found(build_items(raw))
