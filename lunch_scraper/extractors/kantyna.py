"""Kantýna Ambi: one ``<li>`` per dish with name, description and price nodes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lunch_scraper.extractors.base import Extractor, build_items, page_soup
from lunch_scraper.models import Extraction, RawItem

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

ITEM_SELECTOR = "li.MenuItem_itemWrapper__IptXL"
NAME_SELECTOR = ".MenuItem_name__4OMO2"
DESCRIPTION_SELECTOR = ".MenuItem_description__PEtmC"
PRICE_SELECTOR = ".MenuItem_price__6_X_Z"

_WAIT_MS = 10_000


def _text(node) -> str:
    return node.get_text(" ", strip=True) if node is not None else ""


def parse_kantyna(soup: BeautifulSoup) -> list[RawItem]:
    items: list[RawItem] = []
    for wrapper in soup.select(ITEM_SELECTOR):
        name = _text(wrapper.select_one(NAME_SELECTOR))
        description = _text(wrapper.select_one(DESCRIPTION_SELECTOR))
        price = _text(wrapper.select_one(PRICE_SELECTOR))
        if not name or not price:
            continue
        full_name = f"{name} - {description}" if description else name
        items.append(RawItem(full_name, price))
    return items


class KantynaExtractor(Extractor):
    def target_url(self) -> str:
        return self.restaurant.menu_url or "https://www.kantyna.ambi.cz/menu/denni-menu"

    async def extract_items(self, page: Page) -> Extraction:
        try:
            await page.wait_for_selector(ITEM_SELECTOR, timeout=_WAIT_MS)
        except PlaywrightTimeoutError:
            return Extraction.not_yet_posted()

        try:
            items = build_items(parse_kantyna(await page_soup(page)))
        except Exception:
            logger.warning("Could not process Kantyna menu", exc_info=True)
            return Extraction.unavailable()
        if not items:
            return Extraction.not_yet_posted()
        return Extraction.found(items)
